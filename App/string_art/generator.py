"""High-level generator tying configuration to the engine."""

import logging

from models import (
    BuildResult,
    ColorStringSequences,
    CoverageStrategy,
    GeneratorConfig,
    NailLayout,
    ProcessedImage,
)

from .builder import PathBuilder
from .layout import build_nail_layout
from .orchestrator import ChannelOrchestrator
from .strategy import resolve_strategy

logger = logging.getLogger(__name__)


class StringArtGenerator:
    """Generates nail sequences for ingested images."""

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    @property
    def effective_strategy(self) -> CoverageStrategy:
        """Strategy actually used for grayscale runs after remapping."""
        return resolve_strategy(self.config.coverage_strategy, self.config.max_strings)

    def layout_for(self, image: ProcessedImage) -> NailLayout:
        """Nail layout for an image, as both the engine and renderers see it."""
        return build_nail_layout(
            image.width, image.height, self.config.num_nails, self.config.layout
        )

    def generate_grayscale(self, image: ProcessedImage) -> BuildResult:
        """Build a single sequence from the image's grayscale darkness."""
        config = self.config
        requested = CoverageStrategy(config.coverage_strategy)
        strategy = self.effective_strategy

        if strategy is not requested:
            if config.max_strings <= 0:
                logger.info(
                    "Coverage strategy %d requires limited strings. "
                    "Using default strategy 0 for unlimited strings.",
                    requested,
                )
            else:
                logger.info(
                    "Using coverage strategy 1 (adaptive) for limited strings "
                    "instead of default strategy 0."
                )

        logger.info(
            "Analyzing image (%dx%d) with contrast factor %.2f",
            image.width,
            image.height,
            config.contrast_factor,
        )
        layout = self.layout_for(image)
        builder = PathBuilder(
            image.darkness,
            layout,
            contrast_factor=config.contrast_factor,
            strategy=strategy,
        )
        return builder.build(config.max_strings)

    def generate_color(self, image: ProcessedImage) -> ColorStringSequences:
        """Build one sequence per CMYK channel."""
        orchestrator = ChannelOrchestrator(
            contrast_factor=self.config.contrast_factor,
            max_workers=self.config.workers,
        )
        return orchestrator.generate(
            image,
            self.config.num_nails,
            self.config.layout,
            self.config.strings_per_color,
        )
