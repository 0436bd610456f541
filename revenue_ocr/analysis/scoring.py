"""
Revenue Scorer Module.

Ranks detected numbers by how likely each one is "the" revenue figure,
using keyword proximity in the raw OCR text.

Scoring:
    - Every number starts at a base confidence.
    - The number is looked up in the text by its grouped rendering
      ("12,450"). If found, a window of characters around the first
      occurrence is searched for revenue keywords.
    - Each keyword present in the window adds a fixed boost; the total is
      clamped to 1.0.

Accuracy limitations:
    Proximity scoring is approximate. A number whose grouped form does not
    appear verbatim (OCR dropped or misread a separator, "12450" printed
    without a comma) gets no context at all and keeps the base score.
    Only the first occurrence is examined, and keywords are plain
    substrings ("net" matches inside "internet").
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from config import get_config
from revenue_ocr.utils.logger import get_logger
from .formatting import format_grouped

# Initialize module logger
logger = get_logger(__name__)

BASE_CONFIDENCE = 0.3
KEYWORD_BOOST = 0.2
CONTEXT_WINDOW = 100
MAX_CONFIDENCE = 1.0

REVENUE_KEYWORDS = (
    'revenue', 'sales', 'total', 'income', 'earnings',
    'gross', 'net', 'received', 'collected', 'turnover',
)


@dataclass(frozen=True)
class ScoredNumber:
    """A candidate revenue figure and its confidence (0-1)."""
    value: float
    confidence: float


def context_window(text: str, needle: str, window: int = CONTEXT_WINDOW) -> str:
    """
    Return the text around the first occurrence of needle.

    The window runs from `window` characters before the occurrence start
    to `window` characters after it, clipped to the text.

    Returns:
        The window, or an empty string if needle does not occur.
    """
    index = text.find(needle)
    if index == -1:
        return ''
    return text[max(0, index - window):index + window]


def score_number(
    text: str,
    value: float,
    keywords: Iterable[str] = REVENUE_KEYWORDS,
    window: int = CONTEXT_WINDOW,
    base: float = BASE_CONFIDENCE,
    boost: float = KEYWORD_BOOST
) -> float:
    """
    Confidence that `value` is the revenue figure in `text`.

    Args:
        text: Raw OCR text.
        value: Number found in the text.
        keywords: Lowercase revenue keywords.
        window: Characters examined each side of the occurrence.
        base: Starting confidence.
        boost: Added per keyword present.

    Returns:
        Confidence in [0, 1].
    """
    confidence = base
    context = context_window(text, format_grouped(value), window).lower()

    if context:
        for keyword in keywords:
            if keyword in context:
                confidence += boost

    return max(0.0, min(confidence, MAX_CONFIDENCE))


def score_numbers(
    text: str,
    numbers: Sequence[float],
    keywords: Iterable[str] = REVENUE_KEYWORDS,
    window: int = CONTEXT_WINDOW,
    base: float = BASE_CONFIDENCE,
    boost: float = KEYWORD_BOOST
) -> List[ScoredNumber]:
    """
    Score every number and rank by confidence, highest first.

    Ties keep input order.

    Example:
        >>> ranked = score_numbers("Total Revenue: 5,000 (refs 12)", [5000.0, 12.0])
        >>> [(s.value, round(s.confidence, 2)) for s in ranked]
        [(5000.0, 0.7), (12.0, 0.7)]
    """
    keywords = tuple(k.lower() for k in keywords)
    scored = [
        ScoredNumber(value=value, confidence=score_number(text, value, keywords, window, base, boost))
        for value in numbers
    ]
    # sorted() is stable, ties keep order of appearance
    return sorted(scored, key=lambda s: s.confidence, reverse=True)


class RevenueScorer:
    """
    Scoring stage of the analysis pipeline, configured from settings.yaml.

    Attributes:
        keywords: Revenue keywords
        window: Context characters each side of a number
        base_confidence: Starting confidence per number
        keyword_boost: Confidence added per keyword
    """

    def __init__(self) -> None:
        """Initialize the scorer with configuration."""
        self.keywords = tuple(
            str(k).lower() for k in get_config("analysis.scoring.keywords", REVENUE_KEYWORDS)
        )
        self.window = int(get_config("analysis.scoring.window", CONTEXT_WINDOW))
        self.base_confidence = float(get_config("analysis.scoring.base_confidence", BASE_CONFIDENCE))
        self.keyword_boost = float(get_config("analysis.scoring.keyword_boost", KEYWORD_BOOST))

        logger.debug(
            f"RevenueScorer initialized ({len(self.keywords)} keywords, "
            f"window={self.window})"
        )

    def score(self, text: str, numbers: Sequence[float]) -> List[ScoredNumber]:
        """Rank numbers by revenue likelihood. See score_numbers()."""
        ranked = score_numbers(
            text,
            numbers,
            keywords=self.keywords,
            window=self.window,
            base=self.base_confidence,
            boost=self.keyword_boost
        )
        logger.debug(
            "Revenue numbers scored: "
            + ", ".join(f"{s.value:g}={s.confidence:.2f}" for s in ranked)
        )
        return ranked
