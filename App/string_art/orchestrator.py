"""Per-channel orchestration for CMYK color string art.

AIDEV-NOTE: The path builder runs once per channel with the Default
strategy and its own coverage field. Channels never share coverage, so
the four runs are independent and may execute on a thread pool; results
do not depend on the worker count.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from models import (
    CHANNEL_EXECUTION_ORDER,
    CHANNELS,
    MAX_STRINGS_PER_COLOR,
    ColorStringSequences,
    CoverageStrategy,
    LayoutKind,
    ProcessedImage,
)

from .builder import PathBuilder
from .fields import DEFAULT_CONTRAST
from .layout import build_nail_layout

logger = logging.getLogger(__name__)


class ChannelOrchestrator:
    """Runs the path builder independently on each CMYK channel."""

    def __init__(self, contrast_factor: float = DEFAULT_CONTRAST, max_workers: int = 1):
        self.contrast_factor = contrast_factor
        self.max_workers = max(1, max_workers)

    def _run_channel(self, letter: str, darkness, layout, strings_per_color: int) -> "list[int]":
        logger.info("Processing %s channel...", CHANNELS[letter].display_name)
        builder = PathBuilder(
            darkness,
            layout,
            contrast_factor=self.contrast_factor,
            strategy=CoverageStrategy.DEFAULT,
        )
        return builder.build(strings_per_color).sequence

    def generate(
        self,
        image: ProcessedImage,
        num_nails: int,
        kind: LayoutKind = LayoutKind.CIRCULAR,
        strings_per_color: int = MAX_STRINGS_PER_COLOR,
    ) -> ColorStringSequences:
        """Generate one sequence per CMYK channel.

        Args:
            image: Ingested image, must have been prepared in color mode
            num_nails: Requested nail count
            kind: Nail layout kind
            strings_per_color: Per-channel string cap (clamped to 1-2500)

        Returns:
            ColorStringSequences; empty if the image is not a color image
        """
        result = ColorStringSequences()

        missing = [c for c in CHANNEL_EXECUTION_ORDER if c not in image.channels]
        if not image.is_color or missing:
            logger.error("Image not loaded in color mode, cannot generate color string art")
            return result

        strings_per_color = min(max(1, strings_per_color), MAX_STRINGS_PER_COLOR)
        logger.info(
            "Generating color string art with %d strings per color channel",
            strings_per_color,
        )

        layout = build_nail_layout(image.width, image.height, num_nails, kind)

        if self.max_workers == 1:
            for letter in CHANNEL_EXECUTION_ORDER:
                sequence = self._run_channel(
                    letter, image.channels[letter], layout, strings_per_color
                )
                result.set_channel(letter, sequence)
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {
                    letter: executor.submit(
                        self._run_channel,
                        letter,
                        image.channels[letter],
                        layout,
                        strings_per_color,
                    )
                    for letter in CHANNEL_EXECUTION_ORDER
                }
                for letter, future in futures.items():
                    result.set_channel(letter, future.result())

        logger.info("Color generation complete:")
        for letter in CHANNEL_EXECUTION_ORDER:
            info = CHANNELS[letter]
            logger.info("  %s: %d strings", info.name.capitalize(), len(result.for_channel(letter)))
        logger.info("  Total: %d strings", result.total_strings)

        return result
