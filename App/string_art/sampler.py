"""Pixel sampling along nail-to-nail segments.

AIDEV-NOTE: Sampling density is tied to segment length. Scoring samples at
1.2 points per pixel, coverage marking at 1.5. Coordinates are truncated
toward zero (not rounded) and out-of-bounds samples are dropped, never
clamped or padded.
"""

import math

import numpy as np

SCORE_SAMPLE_DENSITY = 1.2
MARK_SAMPLE_DENSITY = 1.5
MIN_SEGMENT_LENGTH = 1.0  # px; shorter segments count as "no line"

_EMPTY = np.empty(0, dtype=np.intp)


def sample_count(length: float, density: float) -> int:
    """Number of samples for a segment, 0 for segments under one pixel."""
    if length < MIN_SEGMENT_LENGTH:
        return 0
    return max(2, int(math.floor(length * density + 0.5)))


def sample_line(
    start: "tuple[float, float]",
    end: "tuple[float, float]",
    density: float,
    width: int,
    height: int,
) -> "tuple[np.ndarray, np.ndarray]":
    """Sample integer pixel coordinates along a segment.

    Args:
        start: (x, y) of the first nail
        end: (x, y) of the second nail
        density: Samples per pixel of segment length
        width: Field width in pixels
        height: Field height in pixels

    Returns:
        Tuple of (xs, ys) integer arrays of in-bounds samples, in order
        from start to end. Both are empty for segments under one pixel.
    """
    x1, y1 = start
    dx = end[0] - x1
    dy = end[1] - y1
    length = math.sqrt(dx * dx + dy * dy)

    num_samples = sample_count(length, density)
    if num_samples == 0:
        return _EMPTY, _EMPTY

    t = np.arange(num_samples) / (num_samples - 1)
    xs = np.trunc(x1 + t * dx).astype(np.intp)
    ys = np.trunc(y1 + t * dy).astype(np.intp)

    inside = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
    return xs[inside], ys[inside]


def sample_fan(
    origin: "tuple[float, float]",
    targets: np.ndarray,
    density: float,
    width: int,
    height: int,
) -> "tuple[np.ndarray, np.ndarray, np.ndarray]":
    """Sample every segment from one nail to each target in a single pass.

    Produces the same pixels as calling :func:`sample_line` once per target,
    tagged with the index of the target they belong to.

    Args:
        origin: (x, y) of the nail the segments start from
        targets: (N, 2) array of target nail coordinates
        density: Samples per pixel of segment length
        width: Field width in pixels
        height: Field height in pixels

    Returns:
        Tuple of (xs, ys, segment_ids) for all in-bounds samples
    """
    x1, y1 = origin
    dx = targets[:, 0] - x1
    dy = targets[:, 1] - y1
    lengths = np.sqrt(dx * dx + dy * dy)

    counts = np.maximum(2, np.floor(lengths * density + 0.5)).astype(np.intp)
    counts[lengths < MIN_SEGMENT_LENGTH] = 0

    total = int(counts.sum())
    if total == 0:
        return _EMPTY, _EMPTY, _EMPTY

    segment_ids = np.repeat(np.arange(len(targets)), counts)
    starts = np.cumsum(counts) - counts
    positions = np.arange(total) - starts[segment_ids]
    t = positions / (counts[segment_ids] - 1)

    xs = np.trunc(x1 + t * dx[segment_ids]).astype(np.intp)
    ys = np.trunc(y1 + t * dy[segment_ids]).astype(np.intp)

    inside = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
    return xs[inside], ys[inside], segment_ids[inside]
