"""Data models and constants for the string art generator."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path

import numpy as np

# AIDEV-NOTE: Validation limits enforced by the caller before invoking the engine
MIN_NAILS = 50
MAX_NAILS = 1000
MAX_CONTRAST = 2.0
MAX_STRINGS_PER_COLOR = 2500

# Canvas padding used by the SVG renderer (viewBox units)
SVG_PADDING = 20

# Configuration file path
CONFIG_FILE = Path.home() / ".string_art_config.json"

# Supported thread thicknesses in mm, keyed by the CLI spelling
THREAD_THICKNESS_MM = {
    "0.1mm": 0.1,
    "0.2mm": 0.2,
    "0.3mm": 0.3,
    "0.5mm": 0.5,
}


class LayoutKind(Enum):
    """Nail frame shapes."""

    CIRCULAR = "circular"
    RECTANGULAR = "rectangular"

    @property
    def code(self) -> str:
        """Single-letter code used in output filenames."""
        return "c" if self is LayoutKind.CIRCULAR else "r"


class CoverageStrategy(IntEnum):
    """Coverage policy bundles for the greedy path builder.

    AIDEV-NOTE: Each strategy is a pure parameter bundle. The builder only
    reads the score threshold, the coverage-marking strength and the
    distance bonus from it; nothing here holds run state.
    """

    DEFAULT = 0
    ADAPTIVE = 1
    DYNAMIC_THRESHOLD = 2
    EXPLORATION_BOOST = 3

    @property
    def label(self) -> str:
        labels = {
            CoverageStrategy.DEFAULT: "Default",
            CoverageStrategy.ADAPTIVE: "Adaptive Coverage",
            CoverageStrategy.DYNAMIC_THRESHOLD: "Dynamic Threshold",
            CoverageStrategy.EXPLORATION_BOOST: "Exploration Boost",
        }
        return labels[self]


class StopReason(Enum):
    """Why a path-build run ended. None of these is an error."""

    NO_CANDIDATE = "no_candidate"
    SCORE_THRESHOLD = "score_threshold"
    OSCILLATION = "oscillation"
    STAGNATION = "stagnation"
    ITERATION_LIMIT = "iteration_limit"


@dataclass(frozen=True)
class ChannelInfo:
    """Display properties of one CMYK thread color."""

    letter: str
    name: str
    display_name: str
    svg_color: str


CHANNELS = {
    "C": ChannelInfo("C", "cyan", "CYAN", "cyan"),
    "M": ChannelInfo("M", "magenta", "MAGENTA", "magenta"),
    "Y": ChannelInfo("Y", "yellow", "YELLOW", "gold"),
    "K": ChannelInfo("K", "black", "BLACK", "black"),
}

# Order in which channels are generated; display order is configurable
CHANNEL_EXECUTION_ORDER = "CMYK"


@dataclass(frozen=True)
class NailLayout:
    """Immutable ordered nail positions in pixel coordinates.

    AIDEV-NOTE: Index is the nail ID and index 0 is always the start nail.
    Rectangular layouts may hold fewer nails than requested.
    """

    kind: LayoutKind
    width: int
    height: int
    requested_nails: int
    points: "tuple[tuple[float, float], ...]"
    radius: float = 0.0  # circular layouts only

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> "tuple[float, float]":
        return self.points[index]

    def as_array(self) -> np.ndarray:
        """Nail coordinates as an (N, 2) float array."""
        return np.asarray(self.points, dtype=np.float64).reshape(-1, 2)


@dataclass
class BuildResult:
    """Result of a single greedy path-build run."""

    sequence: "list[int]"
    stop_reason: StopReason
    iterations: int = 0
    last_score: float = 0.0

    def __len__(self) -> int:
        return len(self.sequence)


@dataclass
class ColorStringSequences:
    """Four independent per-channel sequences.

    An empty bundle (all four lists empty) signals that color generation
    could not run, e.g. the image was not prepared in color mode.
    """

    cyan: "list[int]" = field(default_factory=list)
    magenta: "list[int]" = field(default_factory=list)
    yellow: "list[int]" = field(default_factory=list)
    black: "list[int]" = field(default_factory=list)

    @property
    def total_strings(self) -> int:
        return len(self.cyan) + len(self.magenta) + len(self.yellow) + len(self.black)

    def is_empty(self) -> bool:
        return self.total_strings == 0

    def for_channel(self, letter: str) -> "list[int]":
        """Get a channel's sequence by its CMYK letter."""
        sequences = {
            "C": self.cyan,
            "M": self.magenta,
            "Y": self.yellow,
            "K": self.black,
        }
        try:
            return sequences[letter.upper()]
        except KeyError:
            raise ValueError(f"Unknown color channel: {letter!r}") from None

    def set_channel(self, letter: str, sequence: "list[int]") -> None:
        attr = CHANNELS[letter.upper()].name
        setattr(self, attr, list(sequence))


@dataclass
class ProcessedImage:
    """Result of the ingestion pipeline.

    AIDEV-NOTE: Darkness fields are (height, width) float arrays in [0, 1],
    1 meaning fully dark. Channel fields are only present in color mode.
    """

    width: int
    height: int
    darkness: np.ndarray
    is_color: bool = False
    channels: "dict[str, np.ndarray]" = field(default_factory=dict)

    # Original image dimensions (pixels), before resizing
    original_width: int = 0
    original_height: int = 0


@dataclass
class GeneratorConfig:
    """User-facing generation settings."""

    # Layout
    num_nails: int = 400
    layout: LayoutKind = LayoutKind.CIRCULAR

    # Grayscale mode
    max_strings: int = 0  # 0 = unlimited
    coverage_strategy: CoverageStrategy = CoverageStrategy.DEFAULT
    contrast_factor: float = 0.5

    # Color mode
    color_mode: bool = False
    color_order: str = "CMYK"  # display order only
    strings_per_color: int = MAX_STRINGS_PER_COLOR

    # Rendering
    thread_thickness: str = "0.1mm"
    paper_width: float = 609.6  # mm
    paper_height: float = 914.4  # mm

    # Parallel channel runs in color mode
    workers: int = 1

    def validate(self) -> "list[str]":
        """Check settings against the engine's accepted ranges.

        Returns:
            List of error messages, empty when the configuration is valid
        """
        errors = []
        if not MIN_NAILS <= self.num_nails <= MAX_NAILS:
            errors.append(f"Number of nails must be between {MIN_NAILS} and {MAX_NAILS}")
        if self.max_strings < 0:
            errors.append("Maximum strings must be 0 (unlimited) or positive")
        if not 0.0 <= self.contrast_factor <= MAX_CONTRAST:
            errors.append(f"Contrast factor must be between 0.0 and {MAX_CONTRAST}")
        if self.coverage_strategy not in tuple(CoverageStrategy):
            errors.append("Coverage strategy must be 0-3")
        if not 1 <= self.strings_per_color <= MAX_STRINGS_PER_COLOR:
            errors.append(
                f"Strings per color must be between 1 and {MAX_STRINGS_PER_COLOR}"
            )
        if sorted(self.color_order.upper()) != sorted(CHANNEL_EXECUTION_ORDER):
            errors.append("Color order must contain exactly C, M, Y, K (e.g. CMYK, MYKC, YKCM)")
        if self.paper_width <= 0 or self.paper_height <= 0:
            errors.append("Paper dimensions must be positive")
        if self.workers < 1:
            errors.append("Workers must be at least 1")
        return errors

    @property
    def thread_mm(self) -> float:
        """Physical thread width in mm (hairline 0.1mm for unknown values)."""
        return THREAD_THICKNESS_MM.get(self.thread_thickness, 0.1)
