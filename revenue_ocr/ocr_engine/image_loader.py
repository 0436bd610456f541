"""
Image Loader Module.

This module turns whatever the caller hands over (raw bytes, a file-like
handle, a path, or an opened PIL image) into an RGB image ready for OCR.

Preparation steps:
    - EXIF orientation correction
    - Alpha flattening onto a white background
    - Upscaling of narrow screenshots
    - Light contrast/sharpness enhancement

Author: ML Engineering Team
"""

import io
from pathlib import Path
from typing import Any, BinaryIO, Tuple, Union

from PIL import Image, ImageEnhance, ImageOps

from config import get_config
from revenue_ocr.utils.logger import get_logger
from revenue_ocr.utils.exceptions import ExtractionFailure

# Initialize module logger
logger = get_logger(__name__)

ImageSource = Union[bytes, bytearray, memoryview, BinaryIO, str, Path, Image.Image]


def describe_source(source: Any) -> str:
    """Short human-readable label for an image source, used in errors."""
    if isinstance(source, Image.Image):
        return f"PIL image {source.width}x{source.height}"
    if isinstance(source, (str, Path)):
        return str(source)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return f"{len(source)} bytes"
    return getattr(source, 'name', type(source).__name__)


def open_image(source: ImageSource) -> Tuple[Image.Image, bool]:
    """
    Open an image from any supported source.

    Args:
        source: Raw bytes, binary file-like object, path, or PIL Image.

    Returns:
        Tuple of (decoded PIL Image, owned). `owned` is True when the image
        was opened here and must be closed by the caller.

    Raises:
        ExtractionFailure: If the source cannot be decoded as an image.
    """
    if isinstance(source, Image.Image):
        return source, False

    label = describe_source(source)

    try:
        if isinstance(source, (bytes, bytearray, memoryview)):
            image = Image.open(io.BytesIO(bytes(source)))
        elif isinstance(source, (str, Path)):
            image = Image.open(str(source))
        elif hasattr(source, 'read'):
            image = Image.open(source)
        else:
            raise TypeError(f"Unsupported image source type: {type(source).__name__}")

        # Image.open is lazy; force decoding so corrupt data fails here
        image.load()

    except Exception as e:
        logger.error(f"Failed to load image {label}: {e}")
        raise ExtractionFailure(label, f"Failed to load image: {e}")

    logger.debug(f"Loaded image {label} ({image.width}x{image.height}, mode={image.mode})")
    return image, True


class ImagePreparer:
    """
    Prepares a decoded screenshot for Tesseract.

    Attributes:
        auto_orient: Whether to apply EXIF orientation
        enhance_contrast: Whether to apply contrast/sharpness enhancement
        min_width: Images narrower than this are upscaled
        max_upscale: Upper bound on the upscaling factor

    Example:
        >>> preparer = ImagePreparer()
        >>> ready = preparer.prepare(image)
    """

    def __init__(self) -> None:
        """Initialize the image preparer with configuration."""
        self.auto_orient = get_config("input.image.auto_orient", True)
        self.enhance_contrast = get_config("input.image.enhance_contrast", True)
        self.min_width = get_config("input.image.min_width", 1000)
        self.max_upscale = get_config("input.image.max_upscale", 3.0)

        logger.debug(
            f"ImagePreparer initialized (auto_orient={self.auto_orient}, "
            f"enhance={self.enhance_contrast}, min_width={self.min_width})"
        )

    def prepare(self, image: Image.Image) -> Image.Image:
        """
        Apply the preparation pipeline.

        Processing steps:
            1. Fix orientation from EXIF
            2. Convert to RGB
            3. Upscale if narrow
            4. Enhance contrast (optional)

        Args:
            image: Decoded PIL Image.

        Returns:
            New RGB PIL Image; the input is left untouched.
        """
        if self.auto_orient:
            image = ImageOps.exif_transpose(image)

        image = self._convert_to_rgb(image)
        image = self._upscale_if_needed(image)

        if self.enhance_contrast:
            image = self._enhance_image(image)

        return image

    def _convert_to_rgb(self, image: Image.Image) -> Image.Image:
        """
        Convert image to RGB mode.

        Transparent screenshots (RGBA, LA, palette with transparency) are
        flattened onto white so text stays dark-on-light.
        """
        if image.mode == 'RGB':
            return image.copy()

        original_mode = image.mode

        if image.mode in ('RGBA', 'LA') or (
            image.mode == 'P' and 'transparency' in image.info
        ):
            rgba = image.convert('RGBA')
            background = Image.new('RGB', rgba.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.split()[3])
            image = background
        else:
            image = image.convert('RGB')

        logger.debug(f"Converted image from {original_mode} to RGB")
        return image

    def _upscale_if_needed(self, image: Image.Image) -> Image.Image:
        """
        Upscale narrow screenshots; Tesseract struggles with small glyphs.

        Maintains aspect ratio.
        """
        width, height = image.size

        if width == 0 or width >= self.min_width:
            return image

        ratio = min(self.min_width / width, self.max_upscale)
        new_size = (int(width * ratio), int(height * ratio))

        image = image.resize(new_size, Image.LANCZOS)

        logger.debug(f"Upscaled image from {width}x{height} to {new_size[0]}x{new_size[1]}")
        return image

    def _enhance_image(self, image: Image.Image) -> Image.Image:
        """Slight contrast and sharpness increase."""
        image = ImageEnhance.Contrast(image).enhance(1.2)
        image = ImageEnhance.Sharpness(image).enhance(1.1)
        return image
