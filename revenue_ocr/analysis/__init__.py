"""
Analysis Module for the Revenue Screenshot Analyzer.

This module turns OCR text into revenue figures:
    - Number tokenizing
    - Currency detection
    - Keyword-proximity confidence scoring
    - Two-period breakdown estimation

Every function here is a pure function of its input text; none of them
raise on empty or nonsensical input.

Author: ML Engineering Team
"""

from .analysis_result import AnalysisResult, AnalysisMethod
from .numbers import NumberTokenizer, extract_numbers
from .currency import CurrencyDetector, CurrencyDetection, DetectionSource, detect_currency
from .scoring import RevenueScorer, ScoredNumber, score_numbers
from .breakdown import BreakdownEstimator, Breakdown, BreakdownBasis, estimate_breakdown
from .formatting import format_currency, format_grouped, round_half_up

__all__ = [
    'AnalysisResult',
    'AnalysisMethod',
    'NumberTokenizer',
    'extract_numbers',
    'CurrencyDetector',
    'CurrencyDetection',
    'DetectionSource',
    'detect_currency',
    'RevenueScorer',
    'ScoredNumber',
    'score_numbers',
    'BreakdownEstimator',
    'Breakdown',
    'BreakdownBasis',
    'estimate_breakdown',
    'format_currency',
    'format_grouped',
    'round_half_up'
]
