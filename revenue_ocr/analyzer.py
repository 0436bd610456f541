"""
Revenue Analyzer - Pipeline Orchestrator.

Sequences the analysis of one screenshot:

    IDLE → EXTRACTING → TOKENIZING → SCORING → ASSEMBLING → DONE
                 └──────────────── any failure ───────────────→ FALLBACK

The analyzer never raises to its caller. If anything goes wrong, most
commonly OCR failing on the image, it returns the fixed fallback result
(method=FALLBACK, confidence 0.1) so the UI always has something to
render. No retry is attempted.

Usage:
    from revenue_ocr.analyzer import RevenueAnalyzer

    analyzer = RevenueAnalyzer()
    result = analyzer.analyze(uploaded_bytes, progress=lambda p: print(f"{p}%"))

Author: ML Engineering Team
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from config import get_config
from revenue_ocr.utils.logger import get_logger
from revenue_ocr.utils.exceptions import ExtractionFailure
from revenue_ocr.ocr_engine.engine import TextExtractor, ProgressObserver
from revenue_ocr.ocr_engine.image_loader import ImageSource
from revenue_ocr.analysis.analysis_result import AnalysisResult, AnalysisMethod
from revenue_ocr.analysis.numbers import NumberTokenizer
from revenue_ocr.analysis.currency import CurrencyDetector
from revenue_ocr.analysis.scoring import RevenueScorer, ScoredNumber, BASE_CONFIDENCE
from revenue_ocr.analysis.breakdown import BreakdownEstimator
from revenue_ocr.analysis.formatting import round_half_up

# Initialize module logger
logger = get_logger(__name__)


FALLBACK_RESULT = AnalysisResult(
    total_revenue=45680,
    currency="AED",
    this_period=12450,
    previous_period=10200,
    growth_percent=22,
    confidence=0.1,
    raw_text="OCR failed",
    detected_numbers=(),
    method=AnalysisMethod.FALLBACK
)


class PipelineStage(str, Enum):
    """Stages of a single analysis run."""
    IDLE = "idle"
    EXTRACTING = "extracting"
    TOKENIZING = "tokenizing"
    SCORING = "scoring"
    ASSEMBLING = "assembling"
    DONE = "done"
    FALLBACK = "fallback"


class HeadlineSource(str, Enum):
    """Where the headline total came from."""
    SCORED = "scored"
    MAX_RAW = "max_raw"
    EMPTY = "empty"


@dataclass(frozen=True)
class Headline:
    """Selected headline total and the confidence reported for it."""
    value: float
    confidence: float
    source: HeadlineSource


def select_headline(
    scored: Sequence[ScoredNumber],
    numbers: Sequence[float],
    default_confidence: float = BASE_CONFIDENCE
) -> Headline:
    """
    Pick the headline total.

    The top-ranked scored number wins. Without scored candidates the
    largest raw number is used at the default confidence, and with no
    numbers at all the total is 0 at the default confidence.
    """
    if scored:
        top = scored[0]
        return Headline(top.value, top.confidence, HeadlineSource.SCORED)
    if numbers:
        return Headline(max(numbers), default_confidence, HeadlineSource.MAX_RAW)
    return Headline(0.0, default_confidence, HeadlineSource.EMPTY)


def load_fallback_result() -> AnalysisResult:
    """
    Build the fallback result, applying overrides from analysis.fallback.

    The fallback confidence must stay below the base confidence any OCR
    result starts from; a configured value that breaks this is ignored.
    """
    overrides = get_config("analysis.fallback", None) or {}
    base_confidence = float(get_config("analysis.scoring.base_confidence", BASE_CONFIDENCE))

    confidence = float(overrides.get('confidence', FALLBACK_RESULT.confidence))
    if confidence >= base_confidence:
        logger.warning(
            f"Configured fallback confidence {confidence} is not below the base "
            f"confidence {base_confidence}; using {FALLBACK_RESULT.confidence}"
        )
        confidence = FALLBACK_RESULT.confidence

    return AnalysisResult(
        total_revenue=int(overrides.get('total_revenue', FALLBACK_RESULT.total_revenue)),
        currency=str(overrides.get('currency', FALLBACK_RESULT.currency)),
        this_period=int(overrides.get('this_period', FALLBACK_RESULT.this_period)),
        previous_period=int(overrides.get('previous_period', FALLBACK_RESULT.previous_period)),
        growth_percent=int(overrides.get('growth_percent', FALLBACK_RESULT.growth_percent)),
        confidence=confidence,
        raw_text=str(overrides.get('raw_text', FALLBACK_RESULT.raw_text)),
        detected_numbers=(),
        method=AnalysisMethod.FALLBACK
    )


class StageTracker:
    """Tracks and logs the current stage of one analysis run."""

    def __init__(self) -> None:
        self.stage = PipelineStage.IDLE

    def advance(self, stage: PipelineStage) -> None:
        logger.debug(f"Pipeline stage: {self.stage.value} -> {stage.value}")
        self.stage = stage


class RevenueAnalyzer:
    """
    Orchestrates OCR and text mining for one screenshot at a time.

    The analyzer holds only its configured stage components; each call to
    analyze() is independent and may run concurrently with others in
    separate threads.

    Attributes:
        extractor: TextExtractor for OCR
        tokenizer: NumberTokenizer
        currency_detector: CurrencyDetector
        scorer: RevenueScorer
        estimator: BreakdownEstimator
        fallback: Result returned when analysis fails

    Example:
        >>> analyzer = RevenueAnalyzer()
        >>> result = analyzer.analyze("dashboard.png")
        >>> print(result.total_revenue, result.currency, result.method.value)
    """

    def __init__(
        self,
        extractor: Optional[TextExtractor] = None,
        tokenizer: Optional[NumberTokenizer] = None,
        currency_detector: Optional[CurrencyDetector] = None,
        scorer: Optional[RevenueScorer] = None,
        estimator: Optional[BreakdownEstimator] = None,
        fallback: Optional[AnalysisResult] = None
    ) -> None:
        """
        Initialize the analyzer, building default components from config.

        Args:
            extractor: OCR text extractor.
            tokenizer: Number tokenizer.
            currency_detector: Currency detector.
            scorer: Revenue scorer.
            estimator: Breakdown estimator.
            fallback: Result substituted on failure.
        """
        self.extractor = extractor or TextExtractor()
        self.tokenizer = tokenizer or NumberTokenizer()
        self.currency_detector = currency_detector or CurrencyDetector()
        self.scorer = scorer or RevenueScorer()
        self.estimator = estimator or BreakdownEstimator()
        self.fallback = fallback or load_fallback_result()

        logger.debug("RevenueAnalyzer initialized")

    def analyze(
        self,
        image: ImageSource,
        progress: Optional[ProgressObserver] = None
    ) -> AnalysisResult:
        """
        Analyze a revenue screenshot.

        Args:
            image: Raw bytes, binary file-like object, path, or PIL Image.
            progress: Optional observer receiving OCR percentages 0-100.

        Returns:
            AnalysisResult; the fallback result if anything failed.
        """
        tracker = StageTracker()
        logger.info("Starting revenue analysis")

        try:
            tracker.advance(PipelineStage.EXTRACTING)
            text = self.extractor.extract_text(image, progress=progress)
            logger.debug(f"Text extracted: {text[:200]!r}")

            return self._analyze_text(text, tracker)

        except ExtractionFailure as e:
            tracker.advance(PipelineStage.FALLBACK)
            logger.warning(f"OCR failed, returning fallback result: {e}")
            return self.fallback

        except Exception as e:
            failed_stage = tracker.stage
            tracker.advance(PipelineStage.FALLBACK)
            logger.exception(
                f"Analysis failed during {failed_stage.value}, returning fallback result: {e}"
            )
            return self.fallback

    def analyze_text(self, text: str) -> AnalysisResult:
        """
        Run the post-OCR stages on already extracted text.

        Args:
            text: OCR text.

        Returns:
            AnalysisResult with method=OCR.
        """
        return self._analyze_text(text or '', StageTracker())

    def _analyze_text(self, text: str, tracker: StageTracker) -> AnalysisResult:
        """Tokenize, score and assemble a result from OCR text."""
        tracker.advance(PipelineStage.TOKENIZING)
        numbers = self.tokenizer.tokenize(text)
        currency = self.currency_detector.detect(text)

        tracker.advance(PipelineStage.SCORING)
        scored = self.scorer.score(text, numbers)

        tracker.advance(PipelineStage.ASSEMBLING)
        headline = select_headline(scored, numbers, self.scorer.base_confidence)
        breakdown = self.estimator.estimate(numbers)

        result = AnalysisResult(
            total_revenue=max(0, round_half_up(headline.value)),
            currency=currency.code,
            this_period=breakdown.this_period,
            previous_period=breakdown.previous_period,
            growth_percent=breakdown.growth_percent,
            confidence=headline.confidence,
            raw_text=text,
            detected_numbers=tuple(numbers),
            method=AnalysisMethod.OCR
        )

        tracker.advance(PipelineStage.DONE)
        logger.info(
            f"Analysis complete: {result.total_revenue} {result.currency} "
            f"(confidence {result.confidence:.2f}, headline from {headline.source.value}, "
            f"{len(numbers)} numbers, breakdown {breakdown.basis.value})"
        )
        return result


def analyze_revenue_screenshot(
    image: ImageSource,
    progress: Optional[ProgressObserver] = None
) -> AnalysisResult:
    """
    Analyze a revenue screenshot with a freshly configured analyzer.

    Never raises; if the analyzer itself cannot be built the built-in
    fallback result is returned.

    Args:
        image: Raw bytes, binary file-like object, path, or PIL Image.
        progress: Optional observer receiving OCR percentages 0-100.

    Returns:
        AnalysisResult.
    """
    try:
        analyzer = RevenueAnalyzer()
    except Exception as e:
        logger.exception(f"Could not initialize analyzer, returning fallback result: {e}")
        return FALLBACK_RESULT

    return analyzer.analyze(image, progress=progress)
