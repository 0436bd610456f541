"""
Unit tests for the AnalysisResult data class.
"""

import dataclasses
import json

import pytest

from revenue_ocr.analysis.analysis_result import AnalysisMethod, AnalysisResult


def make_result(**overrides):
    fields = dict(
        total_revenue=12450,
        currency="USD",
        this_period=10200,
        previous_period=8670,
        growth_percent=18,
        confidence=0.7,
        raw_text="Total Revenue: $12,450",
        detected_numbers=[12450.0, 10200.0],
        method=AnalysisMethod.OCR,
    )
    fields.update(overrides)
    return AnalysisResult(**fields)


class TestAnalysisResult:
    """Tests for AnalysisResult construction and helpers."""

    def test_confidence_clamped(self):
        assert make_result(confidence=1.7).confidence == 1.0
        assert make_result(confidence=-0.2).confidence == 0.0
        assert make_result(confidence=float("nan")).confidence == 0.0

    def test_detected_numbers_frozen_and_filtered(self):
        result = make_result(detected_numbers=[5.0, 0.0, -1.0, float("inf"), 7.5])
        assert result.detected_numbers == (5.0, 7.5)

    def test_method_accepts_string(self):
        assert make_result(method="fallback").method is AnalysisMethod.FALLBACK

    def test_immutable(self):
        result = make_result()
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.total_revenue = 1

    def test_flags(self):
        assert make_result(confidence=0.3).is_low_confidence()
        assert not make_result(confidence=0.7).is_low_confidence()
        assert make_result(method=AnalysisMethod.FALLBACK).is_fallback
        assert not make_result().is_fallback

    def test_to_json(self):
        payload = json.loads(make_result().to_json())
        assert payload["total_revenue"] == 12450
        assert payload["detected_numbers"] == [12450.0, 10200.0]
        assert payload["method"] == "ocr"
