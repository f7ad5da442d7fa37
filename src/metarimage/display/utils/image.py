"""Image manipulation utilities for report captures."""

from __future__ import annotations

import io
import logging
from typing import Final

from PIL import Image, ImageChops

logger: Final = logging.getLogger(__name__)


def crop_to_content(
    image: Image.Image,
    background: tuple[int, int, int],
    tolerance: int = 0,
) -> Image.Image | None:
    """Crop an image to the region that differs from a flat background.

    Args:
        image: Full-page capture
        background: RGB colour of the page behind the content
        tolerance: Per-channel difference still treated as background

    Returns:
        Cropped RGB image, or None when the capture is only background
    """
    rgb = image.convert("RGB")
    diff = ImageChops.difference(rgb, Image.new("RGB", rgb.size, background))
    mask = diff.convert("L").point(lambda p: 255 if p > tolerance else 0)
    bbox = mask.getbbox()
    if bbox is None:
        return None
    logger.debug("Content bounding box: %s", bbox)
    return rgb.crop(bbox)


def encode_jpeg(image: Image.Image, quality: int) -> bytes:
    """Encode an image as JPEG bytes.

    Args:
        image: Image to encode
        quality: JPEG quality, 1-100

    Returns:
        JPEG file content
    """
    buffer = io.BytesIO()
    image.convert("RGB").save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()
