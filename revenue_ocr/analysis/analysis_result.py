"""
Analysis Result Data Class.

This module defines the structure returned by the analyzer for every
screenshot, whether OCR succeeded or the fallback result was used.

Author: ML Engineering Team
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple
import json
import math


class AnalysisMethod(str, Enum):
    """How the result was obtained."""
    OCR = "ocr"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class AnalysisResult:
    """
    Revenue summary extracted from one screenshot.

    Instances are immutable. Confidence is clamped to [0, 1] and
    detected_numbers is stored as a tuple on construction.

    Attributes:
        total_revenue: Headline revenue figure
        currency: Currency code (e.g. "AED", "USD")
        this_period: Estimated current period value
        previous_period: Estimated previous period value
        growth_percent: Percentage change previous -> current
        confidence: Self-estimated reliability of total_revenue (0-1)
        raw_text: Full OCR output, kept for diagnostics
        detected_numbers: Every positive number found, in text order
        method: OCR for a real analysis, FALLBACK for the placeholder

    Example:
        >>> result = analyzer.analyze(image_bytes)
        >>> if result.is_low_confidence():
        ...     print("Figures may be inaccurate")
        >>> print(result.to_json())
    """
    total_revenue: int
    currency: str
    this_period: int
    previous_period: int
    growth_percent: int
    confidence: float
    raw_text: str = ""
    detected_numbers: Tuple[float, ...] = field(default_factory=tuple)
    method: AnalysisMethod = AnalysisMethod.OCR

    def __post_init__(self):
        """Normalize fields; frozen instances need object.__setattr__."""
        confidence = float(self.confidence)
        if math.isnan(confidence):
            confidence = 0.0
        object.__setattr__(self, 'confidence', max(0.0, min(1.0, confidence)))
        object.__setattr__(
            self,
            'detected_numbers',
            tuple(n for n in self.detected_numbers if math.isfinite(n) and n > 0)
        )
        object.__setattr__(self, 'method', AnalysisMethod(self.method))

    @property
    def is_fallback(self) -> bool:
        """Whether this is the placeholder result substituted on OCR failure."""
        return self.method is AnalysisMethod.FALLBACK

    def is_low_confidence(self, threshold: float = 0.5) -> bool:
        """
        Whether the caller should show a low-confidence warning.

        Args:
            threshold: Confidence below which figures are flagged.
        """
        return self.confidence < threshold

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary representation with JSON-friendly values.
        """
        return {
            'total_revenue': self.total_revenue,
            'currency': self.currency,
            'this_period': self.this_period,
            'previous_period': self.previous_period,
            'growth_percent': self.growth_percent,
            'confidence': self.confidence,
            'raw_text': self.raw_text,
            'detected_numbers': list(self.detected_numbers),
            'method': self.method.value
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def __repr__(self) -> str:
        return (
            f"AnalysisResult("
            f"total={self.total_revenue} {self.currency}, "
            f"growth={self.growth_percent}%, "
            f"confidence={self.confidence:.2f}, "
            f"method={self.method.value})"
        )
