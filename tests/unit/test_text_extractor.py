"""
Unit tests for OCR text extraction and the Tesseract backend lifecycle.
"""

import io
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from revenue_ocr.ocr_engine.engine import ProgressReporter, TextExtractor
from revenue_ocr.ocr_engine.image_loader import ImagePreparer, open_image
from revenue_ocr.ocr_engine.tesseract_backend import TesseractBackend
from revenue_ocr.utils.exceptions import ExtractionFailure, OCREngineNotAvailableError

from tests.conftest import make_tesseract_data

BACKEND_PYTESSERACT = "revenue_ocr.ocr_engine.tesseract_backend.pytesseract"


@pytest.fixture
def mock_pytesseract():
    with patch(BACKEND_PYTESSERACT) as mocked:
        mocked.get_tesseract_version.return_value = "5.3.0"
        mocked.image_to_data.return_value = make_tesseract_data([
            ("Gross", 1, 1, 1, 80),
            ("Sales", 1, 1, 1, 10),
            ("", 1, 1, 1, 0),
            ("AED", 1, 2, 1, 10),
            ("9,800", 1, 2, 1, 60),
        ])
        yield mocked


def recording_factory(created):
    """Backend factory that remembers every backend it builds."""
    def factory():
        backend = TesseractBackend()
        created.append(backend)
        return backend
    return factory


class TestOpenImage:
    """Tests for open_image."""

    def test_bytes(self, png_bytes):
        image, owned = open_image(png_bytes)
        assert owned
        assert image.size == (200, 50)

    def test_file_like(self, png_bytes):
        image, owned = open_image(io.BytesIO(png_bytes))
        assert owned
        assert image.size == (200, 50)

    def test_path(self, png_bytes, tmp_path):
        path = tmp_path / "shot.png"
        path.write_bytes(png_bytes)
        image, owned = open_image(path)
        assert owned
        assert image.size == (200, 50)

    def test_pil_image_not_owned(self):
        source = Image.new("RGB", (10, 10))
        image, owned = open_image(source)
        assert image is source
        assert not owned

    def test_corrupt_bytes(self):
        with pytest.raises(ExtractionFailure):
            open_image(b"\x89PNG but not really")

    def test_unsupported_type(self):
        with pytest.raises(ExtractionFailure):
            open_image(12345)


class TestImagePreparer:
    """Tests for ImagePreparer."""

    def test_rgba_flattened_and_upscaled(self):
        image = Image.new("RGBA", (200, 50), (0, 0, 0, 0))

        prepared = ImagePreparer().prepare(image)

        assert prepared.mode == "RGB"
        assert prepared.size == (600, 150)
        assert prepared.getpixel((0, 0)) == (255, 255, 255)
        assert image.mode == "RGBA"

    def test_wide_image_not_resized(self):
        prepared = ImagePreparer().prepare(Image.new("L", (1200, 300), 255))
        assert prepared.size == (1200, 300)
        assert prepared.mode == "RGB"


class TestTesseractBackend:
    """Tests for TesseractBackend."""

    def test_lines_grouped_by_block_paragraph_line(self, mock_pytesseract):
        result = TesseractBackend().extract(Image.new("RGB", (100, 40)))

        assert result.text == "Sales Gross\nAED 9,800"
        assert result.word_count == 4
        assert result.line_count == 2
        assert result.average_confidence == pytest.approx(91.5)

    def test_result_summary(self, mock_pytesseract):
        result = TesseractBackend().extract(Image.new("RGB", (100, 40)))

        assert result.processing_time >= 0
        assert repr(result) == "OCRResult(words=4, lines=2, confidence=91.5%)"

    def test_config_string(self, mock_pytesseract):
        TesseractBackend().extract(Image.new("RGB", (100, 40)))

        kwargs = mock_pytesseract.image_to_data.call_args.kwargs
        assert kwargs["lang"] == "eng"
        assert kwargs["config"] == "--psm 3 --oem 3"
        assert kwargs["timeout"] == 0

    def test_engine_missing(self):
        with patch(BACKEND_PYTESSERACT) as mocked:
            mocked.get_tesseract_version.side_effect = OSError("not found")
            with pytest.raises(OCREngineNotAvailableError):
                TesseractBackend()

    def test_tesseract_error_wrapped(self, mock_pytesseract):
        mock_pytesseract.image_to_data.side_effect = RuntimeError("Tesseract process timeout")

        with pytest.raises(ExtractionFailure):
            TesseractBackend().extract(Image.new("RGB", (100, 40)))

    def test_terminated_backend_refuses_work(self, mock_pytesseract):
        backend = TesseractBackend()
        backend.terminate()
        backend.terminate()

        assert backend.terminated
        with pytest.raises(ExtractionFailure):
            backend.extract(Image.new("RGB", (100, 40)))


class TestTextExtractor:
    """Tests for TextExtractor."""

    def test_extract_text(self, mock_pytesseract, png_bytes):
        assert TextExtractor().extract_text(png_bytes) == "Sales Gross\nAED 9,800"

    def test_backend_terminated_after_success(self, mock_pytesseract, png_bytes):
        created = []

        TextExtractor(backend_factory=recording_factory(created)).extract(png_bytes)

        assert len(created) == 1
        assert created[0].terminated

    def test_backend_terminated_after_failure(self, mock_pytesseract, png_bytes):
        mock_pytesseract.image_to_data.side_effect = RuntimeError("engine crashed")
        created = []

        with pytest.raises(ExtractionFailure):
            TextExtractor(backend_factory=recording_factory(created)).extract(png_bytes)

        assert created[0].terminated

    def test_fresh_backend_per_call(self, mock_pytesseract, png_bytes):
        created = []
        extractor = TextExtractor(backend_factory=recording_factory(created))

        extractor.extract(png_bytes)
        extractor.extract(png_bytes)

        assert len(created) == 2
        assert created[0] is not created[1]

    def test_factory_error_becomes_extraction_failure(self, png_bytes):
        extractor = TextExtractor(backend_factory=MagicMock(side_effect=ValueError("bad lang")))

        with pytest.raises(ExtractionFailure):
            extractor.extract(png_bytes)

    def test_progress_reported(self, mock_pytesseract, png_bytes):
        seen = []

        TextExtractor().extract(png_bytes, progress=seen.append)

        assert seen == [0, 10, 25, 100]

    def test_failing_observer_ignored(self, mock_pytesseract, png_bytes):
        observer = MagicMock(side_effect=RuntimeError("ui gone"))

        text = TextExtractor().extract_text(png_bytes, progress=observer)

        assert text == "Sales Gross\nAED 9,800"
        assert observer.call_count == 4


class TestProgressReporter:
    """Tests for ProgressReporter."""

    def test_clamped_and_monotonic(self):
        seen = []
        reporter = ProgressReporter(seen.append)

        for percent in (-5, 10, 5, 10, 150):
            reporter.report(percent)

        assert seen == [0, 10, 100]

    def test_no_observer(self):
        ProgressReporter().report(50)
