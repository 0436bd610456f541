"""
Utility Module for the Revenue Screenshot Analyzer.

This module provides common utilities used across all other modules:
    - Logging configuration
    - File operations
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, get_file_extension

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'get_file_extension'
]
