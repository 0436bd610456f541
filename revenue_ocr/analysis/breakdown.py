"""
Breakdown Estimator Module.

Derives a "this period" / "previous period" comparison from the numbers
found on a screenshot using positional heuristics only:

    - no numbers:   everything is zero
    - one number:   treated as an annual total, split into a monthly
                    estimate with a fixed placeholder growth
    - two or more:  second-largest is this period, third-largest the
                    previous period (synthesized when missing)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from config import get_config
from revenue_ocr.utils.logger import get_logger
from .formatting import round_half_up

# Initialize module logger
logger = get_logger(__name__)

MONTHS_PER_TOTAL = 12
SINGLE_PREVIOUS_RATIO = 0.8
SINGLE_GROWTH_PERCENT = 20
SYNTHESIZED_PREVIOUS_RATIO = 0.85


class BreakdownBasis(str, Enum):
    """Which branch of the heuristic produced a breakdown."""
    EMPTY = "empty"
    SINGLE_TOTAL = "single_total"
    COMPARISON = "comparison"


@dataclass(frozen=True)
class Breakdown:
    """
    Two-period comparison.

    Attributes:
        this_period: Estimated current period value
        previous_period: Estimated previous period value
        growth_percent: Rounded percentage change previous -> current
        basis: Branch of the heuristic that produced the values
    """
    this_period: int
    previous_period: int
    growth_percent: int
    basis: BreakdownBasis


def calculate_growth(current: float, previous: float) -> float:
    """
    Percentage change from previous to current.

    Returns:
        ((current - previous) / previous) * 100, or 0 when previous is 0.
    """
    if previous == 0:
        return 0.0
    return ((current - previous) / previous) * 100


def estimate_breakdown(
    numbers: Sequence[float],
    months_per_total: float = MONTHS_PER_TOTAL,
    single_previous_ratio: float = SINGLE_PREVIOUS_RATIO,
    single_growth_percent: int = SINGLE_GROWTH_PERCENT,
    synthesized_previous_ratio: float = SYNTHESIZED_PREVIOUS_RATIO
) -> Breakdown:
    """
    Estimate a two-period breakdown from detected numbers.

    Args:
        numbers: All detected numbers, unscored, any order.
        months_per_total: Divisor turning a lone total into a monthly value.
        single_previous_ratio: Previous/current ratio for a lone total.
        single_growth_percent: Growth reported for a lone total.
        synthesized_previous_ratio: Previous/current ratio when no third
            number exists.

    Returns:
        Breakdown with integer values.

    Example:
        >>> estimate_breakdown([100, 50, 10])
        Breakdown(this_period=50, previous_period=10, growth_percent=400, basis=<BreakdownBasis.COMPARISON: 'comparison'>)
        >>> estimate_breakdown([1200]).this_period
        100
    """
    if not numbers:
        return Breakdown(0, 0, 0, BreakdownBasis.EMPTY)

    if len(numbers) == 1:
        monthly = numbers[0] / months_per_total
        return Breakdown(
            this_period=round_half_up(monthly),
            previous_period=round_half_up(monthly * single_previous_ratio),
            growth_percent=int(single_growth_percent),
            basis=BreakdownBasis.SINGLE_TOTAL
        )

    ordered = sorted(numbers, reverse=True)
    current = ordered[1]
    if len(ordered) > 2:
        previous = ordered[2]
    else:
        previous = current * synthesized_previous_ratio

    return Breakdown(
        this_period=round_half_up(current),
        previous_period=round_half_up(previous),
        growth_percent=round_half_up(calculate_growth(current, previous)),
        basis=BreakdownBasis.COMPARISON
    )


class BreakdownEstimator:
    """
    Breakdown stage of the analysis pipeline, configured from settings.yaml.
    """

    def __init__(self) -> None:
        """Initialize the estimator with configuration."""
        self.months_per_total = float(
            get_config("analysis.breakdown.months_per_total", MONTHS_PER_TOTAL)
        )
        self.single_previous_ratio = float(
            get_config("analysis.breakdown.single_previous_ratio", SINGLE_PREVIOUS_RATIO)
        )
        self.single_growth_percent = int(
            get_config("analysis.breakdown.single_growth_percent", SINGLE_GROWTH_PERCENT)
        )
        self.synthesized_previous_ratio = float(
            get_config("analysis.breakdown.synthesized_previous_ratio", SYNTHESIZED_PREVIOUS_RATIO)
        )

    def estimate(self, numbers: Sequence[float]) -> Breakdown:
        """Estimate a two-period breakdown. See estimate_breakdown()."""
        breakdown = estimate_breakdown(
            numbers,
            months_per_total=self.months_per_total,
            single_previous_ratio=self.single_previous_ratio,
            single_growth_percent=self.single_growth_percent,
            synthesized_previous_ratio=self.synthesized_previous_ratio
        )
        logger.debug(f"Breakdown estimated: {breakdown}")
        return breakdown
