"""Tests for segment pixel sampling."""

import numpy as np
import pytest

from models import LayoutKind
from string_art.layout import build_nail_layout
from string_art.sampler import (
    MARK_SAMPLE_DENSITY,
    SCORE_SAMPLE_DENSITY,
    sample_count,
    sample_fan,
    sample_line,
)


@pytest.mark.parametrize(
    "length,density,expected",
    [
        (0.0, SCORE_SAMPLE_DENSITY, 0),
        (0.99, SCORE_SAMPLE_DENSITY, 0),
        (1.0, SCORE_SAMPLE_DENSITY, 2),
        (10.0, MARK_SAMPLE_DENSITY, 15),
        (100.0, SCORE_SAMPLE_DENSITY, 120),
    ],
)
def test_sample_count(length, density, expected):
    assert sample_count(length, density) == expected


def test_horizontal_line_is_truncated_not_rounded():
    xs, ys = sample_line((0.5, 5.9), (10.5, 5.9), SCORE_SAMPLE_DENSITY, 20, 20)
    assert len(xs) == 12
    assert np.all(ys == 5)
    assert xs[0] == 0
    assert xs[-1] == 10
    assert np.all(np.diff(xs) >= 0)


def test_short_segment_has_no_samples():
    xs, ys = sample_line((3.0, 3.0), (3.5, 3.2), SCORE_SAMPLE_DENSITY, 10, 10)
    assert xs.size == 0
    assert ys.size == 0


def test_out_of_bounds_samples_are_dropped():
    full = sample_count(20.0, SCORE_SAMPLE_DENSITY)
    xs, ys = sample_line((-10.0, 2.0), (10.0, 2.0), SCORE_SAMPLE_DENSITY, 8, 8)
    assert 0 < len(xs) < full
    assert np.all((xs >= 0) & (xs < 8))
    assert np.all(ys == 2)


def test_fan_matches_individual_lines():
    layout = build_nail_layout(90, 70, 60, LayoutKind.CIRCULAR)
    points = layout.as_array()
    origin = layout[7]

    xs, ys, ids = sample_fan(origin, points, SCORE_SAMPLE_DENSITY, 90, 70)
    for target in range(len(points)):
        line_xs, line_ys = sample_line(
            origin, layout[target], SCORE_SAMPLE_DENSITY, 90, 70
        )
        np.testing.assert_array_equal(xs[ids == target], line_xs)
        np.testing.assert_array_equal(ys[ids == target], line_ys)

    # The segment to itself has no samples
    assert not np.any(ids == 7)
