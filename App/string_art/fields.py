"""Darkness and coverage fields plus line scoring.

AIDEV-NOTE: The darkness field is read-only input owned by the caller. The
coverage field is created fresh for each path-build run, only ever grows,
and is discarded when the run ends.
"""

import numpy as np

from .sampler import MARK_SAMPLE_DENSITY, SCORE_SAMPLE_DENSITY, sample_fan, sample_line

COVERAGE_DAMPING = 0.8  # fixed factor applied to every marking strength
COVERAGE_SATURATION = 6.0  # coverage at which the discount bottoms out
MIN_COVERAGE_DISCOUNT = 0.1
DEFAULT_CONTRAST = 0.5


def as_darkness_field(darkness) -> np.ndarray:
    """Validate and return a darkness field as a read-only float array."""
    field = np.array(darkness, dtype=np.float64)
    if field.ndim != 2 or field.size == 0:
        raise ValueError(
            f"Darkness field must be a non-empty 2D grid, got shape {field.shape}"
        )
    field.setflags(write=False)
    return field


def enhance_darkness(darkness: np.ndarray, contrast_factor: float) -> np.ndarray:
    """Boost contrast: ``d * (1 + d * contrast_factor)``."""
    return darkness * (1.0 + darkness * contrast_factor)


def coverage_discount(coverage: np.ndarray) -> np.ndarray:
    """Discount for pixels already crossed by thread, floored at 0.1."""
    return np.maximum(MIN_COVERAGE_DISCOUNT, 1.0 - coverage / COVERAGE_SATURATION)


class CoverageField:
    """Per-pixel accumulator of how much thread already crosses each pixel."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.values = np.zeros((height, width), dtype=np.float64)

    @property
    def shape(self) -> "tuple[int, int]":
        return self.values.shape

    def discount(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        return coverage_discount(self.values[ys, xs])

    def mark(self, xs: np.ndarray, ys: np.ndarray, strength: float) -> None:
        """Add ``strength * 0.8`` to every sampled pixel.

        AIDEV-NOTE: np.add.at so a pixel sampled twice is incremented
        twice, matching one increment per sample.
        """
        if xs.size == 0:
            return
        np.add.at(self.values, (ys, xs), strength * COVERAGE_DAMPING)

    def mark_line(
        self,
        start: "tuple[float, float]",
        end: "tuple[float, float]",
        strength: float,
    ) -> None:
        """Mark coverage along a nail-to-nail segment."""
        xs, ys = sample_line(start, end, MARK_SAMPLE_DENSITY, self.width, self.height)
        self.mark(xs, ys, strength)


class LineScorer:
    """Scores candidate segments against darkness and current coverage."""

    def __init__(
        self,
        darkness: np.ndarray,
        coverage: CoverageField,
        contrast_factor: float = DEFAULT_CONTRAST,
    ):
        if darkness.shape != coverage.shape:
            raise ValueError(
                f"Coverage shape {coverage.shape} does not match "
                f"darkness shape {darkness.shape}"
            )
        self.height, self.width = darkness.shape
        self.coverage = coverage
        self.contrast_factor = contrast_factor
        self.enhanced = enhance_darkness(darkness, contrast_factor)

    def score(
        self, start: "tuple[float, float]", end: "tuple[float, float]"
    ) -> float:
        """Mean of enhanced darkness times coverage discount along a segment.

        Returns 0.0 for segments under one pixel or with no in-bounds samples.
        """
        xs, ys = sample_line(start, end, SCORE_SAMPLE_DENSITY, self.width, self.height)
        if xs.size == 0:
            return 0.0
        values = self.enhanced[ys, xs] * self.coverage.discount(xs, ys)
        return float(values.mean())

    def score_fan(
        self, origin: "tuple[float, float]", targets: np.ndarray
    ) -> np.ndarray:
        """Score the segments from one nail to every target at once.

        Args:
            origin: (x, y) of the current nail
            targets: (N, 2) array of nail coordinates

        Returns:
            Array of N scores (0.0 where a segment has no samples)
        """
        n = len(targets)
        xs, ys, segment_ids = sample_fan(
            origin, targets, SCORE_SAMPLE_DENSITY, self.width, self.height
        )
        values = self.enhanced[ys, xs] * self.coverage.discount(xs, ys)
        totals = np.bincount(segment_ids, weights=values, minlength=n)
        counts = np.bincount(segment_ids, minlength=n)

        scores = np.zeros(n, dtype=np.float64)
        np.divide(totals, counts, out=scores, where=counts > 0)
        return scores
