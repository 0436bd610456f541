"""
Unit tests for the two-period breakdown estimator.
"""

from revenue_ocr.analysis.breakdown import (
    Breakdown,
    BreakdownBasis,
    BreakdownEstimator,
    calculate_growth,
    estimate_breakdown,
)


class TestEstimateBreakdown:
    """Tests for estimate_breakdown."""

    def test_no_numbers(self):
        assert estimate_breakdown([]) == Breakdown(0, 0, 0, BreakdownBasis.EMPTY)

    def test_single_number_is_annual_total(self):
        breakdown = estimate_breakdown([1200])
        assert breakdown.this_period == 100
        assert breakdown.previous_period == 80
        assert breakdown.growth_percent == 20
        assert breakdown.basis is BreakdownBasis.SINGLE_TOTAL

    def test_three_numbers_use_second_and_third_largest(self):
        breakdown = estimate_breakdown([100, 50, 10])
        assert breakdown.this_period == 50
        assert breakdown.previous_period == 10
        assert breakdown.growth_percent == 400
        assert breakdown.basis is BreakdownBasis.COMPARISON

    def test_input_order_does_not_matter(self):
        assert estimate_breakdown([10, 100, 50]) == estimate_breakdown([100, 50, 10])

    def test_two_numbers_synthesize_previous(self):
        breakdown = estimate_breakdown([12450, 10200])
        assert breakdown.this_period == 10200
        assert breakdown.previous_period == 8670
        assert breakdown.growth_percent == 18

    def test_sorted_descending_before_picking(self):
        breakdown = estimate_breakdown([900, 400, 500, 100])
        assert breakdown.this_period == 500
        assert breakdown.previous_period == 400
        assert breakdown.growth_percent == 25

        breakdown = estimate_breakdown([900, 300, 300, 600])
        assert breakdown.this_period == 600
        assert breakdown.previous_period == 300
        assert breakdown.growth_percent == 100

    def test_values_rounded_half_up(self):
        # 30 / 12 = 2.5 and 2.5 * 0.8 = 2.0
        breakdown = estimate_breakdown([30])
        assert breakdown.this_period == 3
        assert breakdown.previous_period == 2

    def test_duplicates_count_as_separate_values(self):
        breakdown = estimate_breakdown([50, 50, 50])
        assert breakdown.this_period == 50
        assert breakdown.previous_period == 50
        assert breakdown.growth_percent == 0


class TestCalculateGrowth:
    """Tests for calculate_growth."""

    def test_growth(self):
        assert calculate_growth(120, 100) == 20

    def test_decline(self):
        assert calculate_growth(80, 100) == -20

    def test_zero_previous_guard(self):
        assert calculate_growth(50, 0) == 0


class TestBreakdownEstimator:
    """Tests for the configured BreakdownEstimator."""

    def test_matches_pure_function(self):
        estimator = BreakdownEstimator()
        for numbers in ([], [1200], [100, 50, 10], [12450, 10200]):
            assert estimator.estimate(numbers) == estimate_breakdown(numbers)
