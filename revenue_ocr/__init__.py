"""
Revenue Screenshot Analyzer - Source Package.

This package turns a single dashboard screenshot into a rough revenue
summary: headline total, currency, and a two-period growth estimate.
Each module has a single responsibility.

Modules:
    - ocr_engine: Image preparation and Tesseract text extraction
    - analysis: Number tokenizing, currency detection, scoring, breakdown
    - analyzer: Pipeline orchestration with fallback result
    - utils: Logging, exceptions, helpers

Architecture:
    Image → OCR → {Numbers, Currency} → Scoring → Breakdown → AnalysisResult
"""

__version__ = "1.0.0"
__author__ = "ML Engineering Team"

__all__ = [
    'ocr_engine',
    'analysis',
    'analyzer',
    'utils'
]
