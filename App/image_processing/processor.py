"""Main image processor turning image files into darkness fields.

AIDEV-NOTE: This module handles ingestion only: decode (Pillow), cap the
size, then derive either one grayscale darkness field or four CMYK
channel darkness fields. The string art engine never sees pixels.
"""

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from models import ProcessedImage

from .separation import intensity_to_darkness, separate_channels, to_grayscale
from .utils import SUPPORTED_EXTENSIONS, is_supported_image, resize_for_processing

logger = logging.getLogger(__name__)


class ImageProcessor:
    """Prepares images for string art generation."""

    def __init__(self, color_mode: bool = False, resize: bool = True):
        self.color_mode = color_mode
        self.resize = resize

    def load_image(self, file_path: "str | Path") -> Image.Image:
        """Load and validate an image file.

        Args:
            file_path: Path to image file (PNG, JPG/JPEG, BMP)

        Returns:
            PIL Image in RGB mode

        Raises:
            ValueError: If the file is not a supported image or cannot be decoded
        """
        if not is_supported_image(file_path):
            raise ValueError(
                f"Filename is not an image ({', '.join(e[1:] for e in SUPPORTED_EXTENSIONS)}): "
                f"{file_path}"
            )
        try:
            with Image.open(file_path) as opened:
                # AIDEV-NOTE: Always convert to RGB; alpha is ignored
                image = opened.convert("RGB")
            return image
        except Exception as e:
            raise ValueError(f"Failed to load image: {e}") from e

    def prepare(self, image: Image.Image) -> ProcessedImage:
        """Derive darkness fields from an already loaded image.

        Args:
            image: PIL image in any mode

        Returns:
            ProcessedImage with the grayscale field, plus CMYK channel
            fields when the processor is in color mode
        """
        orig_width, orig_height = image.size
        rgb_image = image.convert("RGB")
        if self.resize:
            rgb_image = resize_for_processing(rgb_image)

        width, height = rgb_image.size
        rgb = np.asarray(rgb_image, dtype=np.uint8)

        darkness = intensity_to_darkness(to_grayscale(rgb))
        channels = separate_channels(rgb) if self.color_mode else {}

        return ProcessedImage(
            width=width,
            height=height,
            darkness=darkness,
            is_color=self.color_mode,
            channels=channels,
            original_width=orig_width,
            original_height=orig_height,
        )

    def process(self, file_path: "str | Path") -> ProcessedImage:
        """Execute the complete ingestion pipeline for one file."""
        logger.info("Loading image %s", file_path)
        image = self.load_image(file_path)
        if self.color_mode:
            logger.info("Color mode enabled - performing CMYK separation")

        processed = self.prepare(image)
        logger.info(
            "Image loaded successfully: %dx%d pixels", processed.width, processed.height
        )
        return processed
