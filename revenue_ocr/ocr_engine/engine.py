"""
Text Extractor Module.

This module provides the TextExtractor class, the single entry point the
analysis pipeline uses to turn a screenshot into text.

Usage:
    from revenue_ocr.ocr_engine import TextExtractor

    extractor = TextExtractor()
    text = extractor.extract_text(image_bytes, progress=print)

Author: ML Engineering Team
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from revenue_ocr.utils.logger import get_logger
from revenue_ocr.utils.exceptions import ExtractionFailure
from .image_loader import ImagePreparer, ImageSource, describe_source, open_image
from .ocr_result import OCRResult
from .tesseract_backend import TesseractBackend

# Initialize module logger
logger = get_logger(__name__)

ProgressObserver = Callable[[int], None]


class ProgressReporter:
    """
    Forwards percentage-complete notifications to an optional observer.

    Notifications are advisory: an observer that raises is logged and
    otherwise ignored, and percentages never go backwards.
    """

    def __init__(self, observer: Optional[ProgressObserver] = None) -> None:
        self.observer = observer
        self.last_percent = -1

    def report(self, percent: int) -> None:
        """Send `percent` (clamped to 0-100) if it moves progress forward."""
        percent = max(0, min(100, int(percent)))
        if self.observer is None or percent <= self.last_percent:
            return

        self.last_percent = percent
        try:
            self.observer(percent)
        except Exception as e:
            logger.warning(f"Progress observer raised, ignoring: {e}")


class TextExtractor:
    """
    Extracts the full text of a screenshot with Tesseract.

    Every call acquires its own TesseractBackend and terminates it on the
    way out, whether recognition succeeded or not.

    Attributes:
        preparer: ImagePreparer applied before recognition
        backend_factory: Callable creating a fresh backend per call

    Example:
        >>> extractor = TextExtractor()
        >>> result = extractor.extract("dashboard.png")
        >>> print(result.text)
    """

    def __init__(
        self,
        backend_factory: Optional[Callable[[], TesseractBackend]] = None,
        preparer: Optional[ImagePreparer] = None
    ) -> None:
        """
        Initialize the text extractor.

        Args:
            backend_factory: Creates one OCR backend per call.
                            Defaults to TesseractBackend.
            preparer: Image preparation pipeline. Defaults to ImagePreparer().
        """
        self.backend_factory = backend_factory or TesseractBackend
        self.preparer = preparer or ImagePreparer()

    @contextmanager
    def acquire_backend(self) -> Iterator[TesseractBackend]:
        """
        Create a backend scoped to a single extraction.

        Yields:
            A fresh backend, terminated when the block exits.

        Raises:
            ExtractionFailure: If the backend cannot be created.
        """
        try:
            backend = self.backend_factory()
        except ExtractionFailure:
            raise
        except Exception as e:
            raise ExtractionFailure("engine", f"Could not start OCR engine: {e}")

        try:
            yield backend
        finally:
            backend.terminate()

    def extract(
        self,
        image: ImageSource,
        progress: Optional[ProgressObserver] = None
    ) -> OCRResult:
        """
        Extract words and lines from a screenshot.

        Args:
            image: Raw bytes, binary file-like object, path, or PIL Image.
            progress: Optional observer receiving percentages 0-100.

        Returns:
            OCRResult for the image.

        Raises:
            ExtractionFailure: If the image cannot be read or OCR fails.
        """
        reporter = ProgressReporter(progress)
        reporter.report(0)

        source, owned = open_image(image)
        try:
            reporter.report(10)

            try:
                prepared = self.preparer.prepare(source)
            except Exception as e:
                raise ExtractionFailure(describe_source(image), f"Failed to prepare image: {e}")
            reporter.report(25)

            with self.acquire_backend() as backend:
                result = backend.extract(prepared)
            reporter.report(100)

            return result
        finally:
            if owned:
                source.close()

    def extract_text(
        self,
        image: ImageSource,
        progress: Optional[ProgressObserver] = None
    ) -> str:
        """
        Extract only the text content of a screenshot.

        Args:
            image: Raw bytes, binary file-like object, path, or PIL Image.
            progress: Optional observer receiving percentages 0-100.

        Returns:
            Recognized text, lines separated by newlines.

        Raises:
            ExtractionFailure: If the image cannot be read or OCR fails.
        """
        return self.extract(image, progress=progress).text
