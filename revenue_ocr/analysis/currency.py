"""
Currency Detector Module.

Picks one currency code for a screenshot by scanning the OCR text for
symbols and codes in a fixed priority order. The first marker in the
list that occurs anywhere in the text wins, regardless of where in the
text it appears or how often.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from config import get_config
from revenue_ocr.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

DEFAULT_CURRENCY = "AED"

# (marker, currency code), highest priority first
DEFAULT_CURRENCY_MARKERS: List[Tuple[str, str]] = [
    ("AED", "AED"),
    ("Dh", "AED"),
    ("درهم", "AED"),
    ("$", "USD"),
    ("USD", "USD"),
    ("€", "EUR"),
    ("EUR", "EUR"),
    ("£", "GBP"),
    ("GBP", "GBP"),
    ("₹", "INR"),
    ("INR", "INR"),
    ("Rs", "INR"),
]


class DetectionSource(str, Enum):
    """How the currency code was obtained."""
    FOUND = "found"
    DEFAULT = "default"


@dataclass(frozen=True)
class CurrencyDetection:
    """
    Outcome of currency detection.

    Attributes:
        code: Canonical currency code
        marker: The marker that matched, None for the default
        source: FOUND when a marker matched, DEFAULT otherwise
    """
    code: str
    marker: Optional[str]
    source: DetectionSource


def detect_currency(
    text: str,
    markers: Iterable[Sequence[str]] = DEFAULT_CURRENCY_MARKERS,
    default: str = DEFAULT_CURRENCY
) -> CurrencyDetection:
    """
    Detect the currency of a screenshot's text.

    Matching is a case-insensitive substring search, so short markers like
    "Dh" or "Rs" also fire inside ordinary words.

    Args:
        text: Raw OCR text.
        markers: (marker, code) pairs in priority order.
        default: Code returned when no marker matches.

    Returns:
        CurrencyDetection.

    Example:
        >>> detect_currency("AED 500").code
        'AED'
        >>> detect_currency("$120 or EUR 110").code
        'USD'
    """
    upper_text = (text or '').upper()

    for marker, code in markers:
        if marker.upper() in upper_text:
            return CurrencyDetection(code=code, marker=marker, source=DetectionSource.FOUND)

    return CurrencyDetection(code=default, marker=None, source=DetectionSource.DEFAULT)


class CurrencyDetector:
    """
    Currency stage of the analysis pipeline, configured from settings.yaml.

    Attributes:
        markers: (marker, code) pairs in priority order
        default: Regional default currency code
    """

    def __init__(self) -> None:
        """Initialize the detector with configuration."""
        configured = get_config("analysis.currency.markers", None)
        if configured:
            self.markers = [(str(marker), str(code)) for marker, code in configured]
        else:
            self.markers = list(DEFAULT_CURRENCY_MARKERS)

        self.default = get_config("analysis.currency.default", DEFAULT_CURRENCY)

        logger.debug(
            f"CurrencyDetector initialized ({len(self.markers)} markers, "
            f"default={self.default})"
        )

    def detect(self, text: str) -> CurrencyDetection:
        """Detect the currency of text. See detect_currency()."""
        detection = detect_currency(text, self.markers, self.default)

        if detection.source is DetectionSource.DEFAULT:
            logger.debug(f"No currency marker found, using default {detection.code}")
        else:
            logger.debug(f"Currency detected: {detection.code} (marker '{detection.marker}')")

        return detection
