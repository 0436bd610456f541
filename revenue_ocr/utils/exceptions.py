"""
Custom Exceptions Module.

This module defines the exceptions used by the revenue analyzer. Only OCR
failures are exceptional; every analysis stage after OCR degrades to a
default value instead of raising.

Exception Hierarchy:
    RevenueAnalysisError (base)
    ├── OCRError
    │   └── ExtractionFailure
    │       └── OCREngineNotAvailableError
    └── ConfigurationError
"""


class RevenueAnalysisError(Exception):
    """
    Base exception for all revenue analyzer errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# OCR ERRORS
# =============================================================================

class OCRError(RevenueAnalysisError):
    """Base exception for OCR-related errors."""
    pass


class ExtractionFailure(OCRError):
    """
    Raised when text could not be extracted from an image.

    Covers unreadable image data, Tesseract errors and timeouts. The
    pipeline orchestrator catches this and substitutes the fallback result.

    Example:
        >>> raise ExtractionFailure("bytes", "cannot identify image file")
    """

    def __init__(self, source: str, reason: str = None):
        message = f"Text extraction failed for: {source}"
        details = {"source": source, "reason": reason}
        super().__init__(message, details)


class OCREngineNotAvailableError(ExtractionFailure):
    """Raised when the Tesseract engine cannot be found or started."""

    def __init__(self, engine_name: str):
        message = f"OCR engine not available: {engine_name}"
        details = {"engine": engine_name}
        RevenueAnalysisError.__init__(self, message, details)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(RevenueAnalysisError):
    """Raised when the configuration file is missing or malformed."""
    pass


__all__ = [
    'RevenueAnalysisError',
    'OCRError',
    'ExtractionFailure',
    'OCREngineNotAvailableError',
    'ConfigurationError',
]
