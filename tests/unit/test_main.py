"""
Unit tests for the command-line entry point.
"""

import json
from unittest.mock import patch

import pytest

from main import main, parse_arguments
from revenue_ocr.analyzer import FALLBACK_RESULT


class TestParseArguments:
    """Tests for parse_arguments."""

    def test_input_and_output(self):
        args = parse_arguments(["--input", "shot.png", "--output", "out/result.json", "--debug"])
        assert args.input == "shot.png"
        assert args.output == "out/result.json"
        assert args.debug
        assert args.text is None

    def test_input_and_text_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_arguments(["--input", "shot.png", "--text", "Total 5"])


class TestMain:
    """Tests for main()."""

    def test_text_mode(self, dashboard_text, capsys):
        exit_code = main(["--text", dashboard_text, "--quiet"])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert payload["total_revenue"] == 12450
        assert payload["currency"] == "USD"
        assert payload["method"] == "ocr"

    def test_summary_and_output_file(self, dashboard_text, tmp_path, capsys):
        output = tmp_path / "results" / "result.json"

        exit_code = main(["--text", dashboard_text, "--output", str(output)])

        assert exit_code == 0
        assert "USD 12,450" in capsys.readouterr().out
        assert json.loads(output.read_text(encoding="utf-8"))["growth_percent"] == 18

    def test_missing_input(self, tmp_path, capsys):
        exit_code = main(["--input", str(tmp_path / "missing.png")])

        assert exit_code == 1
        assert "not found" in capsys.readouterr().err

    def test_unsupported_extension(self, tmp_path, capsys):
        document = tmp_path / "report.pdf"
        document.write_bytes(b"%PDF-1.4")

        assert main(["--input", str(document)]) == 1
        assert "Unsupported file type" in capsys.readouterr().err

    @patch("revenue_ocr.analyzer.RevenueAnalyzer.analyze", return_value=FALLBACK_RESULT)
    def test_fallback_is_still_success(self, _mock_analyze, png_bytes, tmp_path, capsys):
        image = tmp_path / "shot.png"
        image.write_bytes(png_bytes)

        assert main(["--input", str(image)]) == 0
        assert "OCR failed" in capsys.readouterr().out

    def test_quiet_fallback_prints_only_json(self, tmp_path, capsys):
        image = tmp_path / "corrupt.png"
        image.write_bytes(b"not really a png")

        exit_code = main(["--input", str(image), "--quiet"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert json.loads(captured.out)["method"] == "fallback"
        assert "Failed to load image" in captured.err

    def test_low_confidence_notice_uses_default_threshold(self, capsys):
        assert main(["--text", "Balance 12,450"]) == 0
        assert "Low confidence" in capsys.readouterr().out

    def test_low_confidence_threshold_from_config(self, tmp_path, capsys):
        settings = tmp_path / "settings.yaml"
        settings.write_text("analysis:\n  low_confidence_threshold: 0.2\n", encoding="utf-8")

        assert main(["--text", "Balance 12,450", "--config", str(settings)]) == 0
        assert "Low confidence" not in capsys.readouterr().out
