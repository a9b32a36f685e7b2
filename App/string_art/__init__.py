"""String art engine: nail layouts, greedy path building and rendering.

AIDEV-NOTE: Organized into modular components:
- layout: circular and rectangular nail placement
- sampler: pixel sampling along nail-to-nail segments
- fields: coverage accumulation and line scoring
- strategy: coverage strategy parameter bundles
- builder: the greedy path state machine
- orchestrator: independent per-channel runs for CMYK output
- generator: configuration-driven facade
- svg_renderer: vector diagrams of finished sequences
"""

from .builder import PathBuilder, generate_sequence
from .generator import StringArtGenerator
from .layout import build_nail_layout
from .orchestrator import ChannelOrchestrator
from .svg_renderer import color_sequences_to_svg, sequence_to_svg

__all__ = [
    "ChannelOrchestrator",
    "PathBuilder",
    "StringArtGenerator",
    "build_nail_layout",
    "color_sequences_to_svg",
    "generate_sequence",
    "sequence_to_svg",
]
