"""
OCR Result Data Classes.

This module defines data structures for OCR output, providing
a standardized format for recognized words and lines.

Classes:
    OCRWord: Individual word with bounding box
    OCRLine: Line of text containing multiple words
    OCRResult: Complete OCR output for an image

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from typing import List, Tuple


# (block_num, par_num, line_num) as reported by Tesseract
LineKey = Tuple[int, int, int]


@dataclass
class OCRWord:
    """
    Represents a single word/token extracted by OCR.

    Attributes:
        text: The recognized text content
        bbox: Bounding box as (x1, y1, x2, y2) in pixels
        confidence: OCR confidence score (0-100)
        word_index: Index of word in the document
        line_key: Tesseract (block, paragraph, line) the word belongs to

    Example:
        >>> word = OCRWord(
        ...     text="Revenue",
        ...     bbox=(100, 50, 200, 80),
        ...     confidence=95.5
        ... )
    """
    text: str
    bbox: Tuple[int, int, int, int]
    confidence: float = 0.0
    word_index: int = 0
    line_key: LineKey = (0, 0, 0)

    @property
    def x1(self) -> int:
        """Left coordinate, used to order words within a line."""
        return self.bbox[0]

    def __repr__(self) -> str:
        return f"OCRWord('{self.text}', bbox={self.bbox}, conf={self.confidence:.1f})"


@dataclass
class OCRLine:
    """
    Represents a line of text containing multiple words.

    Attributes:
        words: List of OCRWord objects in the line, left to right
        line_key: Tesseract (block, paragraph, line) of this line
    """
    words: List[OCRWord] = field(default_factory=list)
    line_key: LineKey = (0, 0, 0)

    @property
    def text(self) -> str:
        """Get the full text of the line."""
        return ' '.join(word.text for word in self.words)


@dataclass
class OCRResult:
    """
    Complete OCR result for a single screenshot.

    The analysis pipeline only consumes `text`; counts and the engine
    confidence are logged after each run.

    Attributes:
        words: List of all words with bounding boxes
        lines: List of text lines (grouped words)
        processing_time: Time taken for OCR in seconds

    Example:
        >>> result = extractor.extract(image)
        >>> print(f"Found {result.word_count} words")
        >>> print(result.text)
    """
    words: List[OCRWord] = field(default_factory=list)
    lines: List[OCRLine] = field(default_factory=list)
    processing_time: float = 0.0

    @property
    def text(self) -> str:
        """
        Get the full text content.

        Returns:
            All text joined with newlines between lines.
        """
        if self.lines:
            return '\n'.join(line.text for line in self.lines)
        return ' '.join(word.text for word in self.words)

    @property
    def word_count(self) -> int:
        """Get total number of words."""
        return len(self.words)

    @property
    def line_count(self) -> int:
        """Get total number of lines."""
        return len(self.lines)

    @property
    def average_confidence(self) -> float:
        """Calculate average confidence across all words (0-100)."""
        if not self.words:
            return 0.0
        return sum(w.confidence for w in self.words) / len(self.words)

    def __repr__(self) -> str:
        return (
            f"OCRResult(words={self.word_count}, lines={self.line_count}, "
            f"confidence={self.average_confidence:.1f}%)"
        )
