"""
Number Tokenizer Module.

Finds numeric substrings in OCR text and parses them into positive
floats. This is a best-effort heuristic, not a full parser: digits inside
product codes or dates are picked up like any other number.
"""

import math
import re
from typing import List

from revenue_ocr.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

# Comma-grouped numbers ("12,450.00") first, then plain decimals ("12450.5").
# A leading minus counts only when it does not follow a word character or a
# decimal point, so "Jan-2024" and "2023-2024" keep their positive digits.
NUMBER_PATTERN = re.compile(
    r'(?:(?<![\w.])-)?'
    r'(?:\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)'
)


def parse_number(token: str) -> float:
    """
    Parse a matched token, stripping thousands separators.

    Raises:
        ValueError: If the token is not a number.
    """
    return float(token.replace(',', ''))


def extract_numbers(text: str) -> List[float]:
    """
    Extract every positive number from text, in order of appearance.

    Tokens that fail to parse, are not finite, or are zero/negative are
    dropped. Duplicates are kept.

    Args:
        text: Raw OCR text.

    Returns:
        List of positive finite floats.

    Example:
        >>> extract_numbers("Sales 1,234.56, refunds -5, items 0, fee 99.00")
        [1234.56, 99.0]
    """
    numbers = []

    for match in NUMBER_PATTERN.finditer(text or ''):
        token = match.group(0)
        try:
            value = parse_number(token)
        except ValueError:
            logger.debug(f"Dropped unparseable token: '{token}'")
            continue

        if not math.isfinite(value) or value <= 0:
            logger.debug(f"Dropped non-revenue token: '{token}'")
            continue

        numbers.append(value)

    return numbers


class NumberTokenizer:
    """
    Tokenizer stage of the analysis pipeline.

    Example:
        >>> NumberTokenizer().tokenize("Total $12,450")
        [12450.0]
    """

    def tokenize(self, text: str) -> List[float]:
        """Extract positive numbers from text. See extract_numbers()."""
        numbers = extract_numbers(text)
        logger.debug(f"Numbers found: {numbers}")
        return numbers
