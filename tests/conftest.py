"""
Pytest configuration and shared fixtures for revenue_ocr tests.
"""

import io
import logging

import pytest
from PIL import Image

from config import ConfigurationManager
from revenue_ocr.utils.logger import ROOT_LOGGER_NAME


DASHBOARD_TEXT = "Total Revenue: $12,450 this month, $10,200 last month"


@pytest.fixture(autouse=True)
def reset_config():
    """Give every test a freshly loaded default configuration."""
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def dashboard_text():
    """Text of a typical revenue dashboard screenshot."""
    return DASHBOARD_TEXT


@pytest.fixture
def png_bytes():
    """A small blank PNG screenshot as raw bytes."""
    buffer = io.BytesIO()
    Image.new("RGB", (200, 50), "white").save(buffer, format="PNG")
    return buffer.getvalue()


def make_tesseract_data(words):
    """
    Build an image_to_data DICT payload.

    Args:
        words: Iterable of (text, block_num, par_num, line_num, left) tuples.
    """
    data = {
        "text": [], "left": [], "top": [], "width": [], "height": [],
        "conf": [], "block_num": [], "par_num": [], "line_num": [],
    }
    for text, block, par, line, left in words:
        data["text"].append(text)
        data["left"].append(left)
        data["top"].append(10 * line)
        data["width"].append(8 * max(len(text), 1))
        data["height"].append(12)
        data["conf"].append(91.5 if text.strip() else -1)
        data["block_num"].append(block)
        data["par_num"].append(par)
        data["line_num"].append(line)
    return data


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers main() attached to captured streams."""
    yield
    app_logger = logging.getLogger(ROOT_LOGGER_NAME)
    app_logger.handlers.clear()
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
