"""Image ingestion pipeline for string art generation.

AIDEV-NOTE: This package turns image files into darkness fields.
Organized into modular components:
- processor: Main ImageProcessor orchestrator
- separation: Grayscale conversion and CMYK channel separation
- utils: Size capping and format checks
"""

from .processor import ImageProcessor
from .separation import rgb_to_cmyk

__all__ = ["ImageProcessor", "rgb_to_cmyk"]
