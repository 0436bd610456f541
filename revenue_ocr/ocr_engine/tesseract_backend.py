"""
Tesseract OCR Backend.

This module provides OCR functionality using Tesseract (pytesseract).
A backend instance serves exactly one analysis call and is terminated
afterwards; instances are never pooled or shared.

Requirements:
    - Tesseract OCR installed on the system
    - pytesseract Python package

Author: ML Engineering Team
"""

import time
from typing import List, Dict

import pytesseract
from PIL import Image

from config import get_config
from revenue_ocr.utils.logger import get_logger
from revenue_ocr.utils.exceptions import ExtractionFailure, OCREngineNotAvailableError
from .ocr_result import OCRResult, OCRWord, OCRLine, LineKey

# Initialize module logger
logger = get_logger(__name__)


class TesseractBackend:
    """
    Tesseract OCR backend implementation.

    Attributes:
        language: Tesseract language code (e.g., "eng")
        psm: Page Segmentation Mode (1-13)
        oem: OCR Engine Mode (0-3)
        extra_config: Additional Tesseract command-line flags
        timeout: Seconds before Tesseract is killed (0 disables)

    Example:
        >>> backend = TesseractBackend()
        >>> try:
        ...     result = backend.extract(image)
        ... finally:
        ...     backend.terminate()
    """

    def __init__(self) -> None:
        """Initialize the Tesseract backend with configuration."""
        self.language = get_config("ocr.tesseract.lang", "eng")
        self.psm = get_config("ocr.tesseract.psm", 3)
        self.oem = get_config("ocr.tesseract.oem", 3)
        self.extra_config = get_config("ocr.tesseract.config", "")
        self.timeout = get_config("ocr.tesseract.timeout", 0)

        tesseract_cmd = get_config("ocr.tesseract.tesseract_cmd", "")
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

        self._terminated = False
        self._version = self._check_engine()

        logger.debug(
            f"TesseractBackend initialized (lang={self.language}, "
            f"psm={self.psm}, oem={self.oem}, version={self._version})"
        )

    def _check_engine(self) -> str:
        """
        Check that the Tesseract binary is reachable.

        Returns:
            Tesseract version string.

        Raises:
            OCREngineNotAvailableError: If Tesseract is not installed.
        """
        try:
            return str(pytesseract.get_tesseract_version())
        except Exception as e:
            raise OCREngineNotAvailableError(
                f"Tesseract OCR (not installed or not in PATH): {e}"
            )

    @property
    def terminated(self) -> bool:
        """Whether terminate() has been called."""
        return self._terminated

    def _build_config(self) -> str:
        """
        Build Tesseract configuration string.

        Returns:
            Configuration string for Tesseract.
        """
        config_parts = [
            f"--psm {self.psm}",
            f"--oem {self.oem}"
        ]

        if self.extra_config:
            config_parts.append(self.extra_config)

        return ' '.join(config_parts)

    def extract(self, image: Image.Image) -> OCRResult:
        """
        Extract words and lines from an image.

        Args:
            image: Prepared RGB PIL Image.

        Returns:
            OCRResult containing words and lines.

        Raises:
            ExtractionFailure: If the backend was terminated or Tesseract fails.
        """
        if self._terminated:
            raise ExtractionFailure("image", "Tesseract backend already terminated")

        start_time = time.time()
        config = self._build_config()

        try:
            logger.debug(f"Running Tesseract OCR (config: {config})")

            data = pytesseract.image_to_data(
                image,
                lang=self.language,
                config=config,
                output_type=pytesseract.Output.DICT,
                timeout=self.timeout
            )
        except Exception as e:
            logger.error(f"OCR processing failed: {e}")
            raise ExtractionFailure("image", str(e))

        words = self._parse_tesseract_output(data)
        lines = self._group_into_lines(words)
        processing_time = time.time() - start_time

        result = OCRResult(words=words, lines=lines, processing_time=processing_time)

        logger.info(
            f"OCR completed: {result.word_count} words, "
            f"{result.line_count} lines, "
            f"avg confidence: {result.average_confidence:.1f}% "
            f"({result.processing_time:.2f}s)"
        )

        return result

    def _parse_tesseract_output(self, data: Dict[str, List]) -> List[OCRWord]:
        """
        Parse Tesseract output into OCRWord objects.

        Args:
            data: Dictionary output from image_to_data.

        Returns:
            List of OCRWord objects in reading order.
        """
        words = []

        for i in range(len(data['text'])):
            text = str(data['text'][i]).strip()

            if not text:
                continue

            x = int(data['left'][i])
            y = int(data['top'][i])
            w = int(data['width'][i])
            h = int(data['height'][i])

            if w <= 0 or h <= 0:
                continue

            conf = float(data['conf'][i])
            if conf < 0:
                conf = 0.0  # Tesseract returns -1 for non-word elements

            line_key = (
                int(data['block_num'][i]),
                int(data['par_num'][i]),
                int(data['line_num'][i])
            )

            words.append(OCRWord(
                text=text,
                bbox=(x, y, x + w, y + h),
                confidence=conf,
                word_index=len(words),
                line_key=line_key
            ))

        return words

    def _group_into_lines(self, words: List[OCRWord]) -> List[OCRLine]:
        """
        Group words into lines by Tesseract's (block, paragraph, line) keys.

        Line numbers restart in every paragraph, so grouping on line_num
        alone would merge unrelated lines.

        Args:
            words: List of OCRWord objects.

        Returns:
            List of OCRLine objects in reading order.
        """
        line_groups: Dict[LineKey, List[OCRWord]] = {}

        for word in words:
            line_groups.setdefault(word.line_key, []).append(word)

        lines = []
        for line_key in sorted(line_groups):
            line_words = sorted(line_groups[line_key], key=lambda w: w.x1)
            lines.append(OCRLine(words=line_words, line_key=line_key))

        return lines

    def terminate(self) -> None:
        """
        Release the backend. Further extract() calls fail.

        Safe to call more than once.
        """
        if not self._terminated:
            self._terminated = True
            logger.debug("TesseractBackend terminated")
