"""Utility functions for image ingestion.

AIDEV-NOTE: Run time of the path builder grows with field size, so images
are capped to a 400px short side before any darkness field is derived.
"""

import logging
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)

TARGET_SHORT_SIDE = 400
SUPPORTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp")


def is_supported_image(file_path: "str | Path") -> bool:
    """Check the file extension against the supported image formats."""
    return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS


def processing_size(
    width: int, height: int, target_short_side: int = TARGET_SHORT_SIDE
) -> "tuple[int, int, float]":
    """Dimensions after capping the short side.

    Returns:
        Tuple of (new_width, new_height, scale_factor). Images whose short
        side already fits are returned unchanged with scale 1.0.
    """
    short_side = min(width, height)
    if short_side <= target_short_side:
        return width, height, 1.0

    scale = target_short_side / short_side
    return int(width * scale), int(height * scale), scale


def resize_for_processing(
    image: Image.Image, target_short_side: int = TARGET_SHORT_SIDE
) -> Image.Image:
    """Downscale an image so its short side is at most ``target_short_side``.

    Args:
        image: Input PIL image
        target_short_side: Maximum short side in pixels

    Returns:
        Resized image (or the input itself when no resize is needed)
    """
    width, height = image.size
    new_width, new_height, scale = processing_size(width, height, target_short_side)
    if scale == 1.0:
        return image

    logger.info(
        "Resizing image from %dx%d to %dx%d (scale factor: %.3f)",
        width,
        height,
        new_width,
        new_height,
        scale,
    )
    return image.resize((new_width, new_height), Image.Resampling.BILINEAR)
