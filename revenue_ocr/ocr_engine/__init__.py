"""
OCR Engine Module for the Revenue Screenshot Analyzer.

This module provides OCR functionality including:
    - Loading screenshots from bytes, file handles or paths
    - Image preparation for Tesseract
    - Text extraction with scoped engine lifetime

Author: ML Engineering Team
"""

from .engine import TextExtractor, ProgressReporter
from .image_loader import ImagePreparer, open_image
from .tesseract_backend import TesseractBackend
from .ocr_result import OCRResult, OCRWord, OCRLine

__all__ = [
    'TextExtractor',
    'ProgressReporter',
    'ImagePreparer',
    'open_image',
    'TesseractBackend',
    'OCRResult',
    'OCRWord',
    'OCRLine'
]
