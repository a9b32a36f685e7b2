"""Tests for nail layout generation."""

import math

import pytest

from models import LayoutKind
from string_art.layout import RECT_MARGIN, build_nail_layout


def test_circular_layout_geometry():
    layout = build_nail_layout(100, 100, 50, LayoutKind.CIRCULAR)
    assert len(layout) == 50
    assert layout.radius == pytest.approx(40.0)
    # Nail 0 sits at angle 0, to the right of the center
    assert layout[0] == pytest.approx((90.0, 50.0))
    # Quarter of the way round is straight below the center (y grows downward)
    assert layout[12][0] == pytest.approx(50 + 40 * math.cos(2 * math.pi * 12 / 50))
    assert layout[12][1] == pytest.approx(50 + 40 * math.sin(2 * math.pi * 12 / 50))


def test_circular_layout_uses_short_side_and_integer_center():
    layout = build_nail_layout(121, 80, 60, LayoutKind.CIRCULAR)
    assert layout.radius == pytest.approx(30.0)
    assert layout[0] == pytest.approx((60 + 30.0, 40.0))


@pytest.mark.parametrize("kind", [LayoutKind.CIRCULAR, LayoutKind.RECTANGULAR])
def test_nails_inside_image(kind):
    layout = build_nail_layout(150, 110, 200, kind)
    for x, y in layout.points:
        assert 0 <= x < 150
        assert 0 <= y < 110


def test_rectangular_layout_shares_corners():
    layout = build_nail_layout(100, 80, 50, LayoutKind.RECTANGULAR)
    per_side = 50 // 4
    assert len(layout) == 4 * per_side - 4
    assert len(layout) <= layout.requested_nails

    # Sides in rotational order: top, right, bottom, left
    assert layout[0] == (RECT_MARGIN, RECT_MARGIN)
    assert layout[per_side - 1] == pytest.approx((100 - RECT_MARGIN, RECT_MARGIN))
    bottom_right = layout[2 * per_side - 2]
    assert bottom_right == pytest.approx((100 - RECT_MARGIN, 80 - RECT_MARGIN))
    bottom_left = layout[3 * per_side - 3]
    assert bottom_left == pytest.approx((RECT_MARGIN, 80 - RECT_MARGIN))
    # Last nail is on the left side, just below the top-left corner
    assert layout[len(layout) - 1][0] == RECT_MARGIN
    assert len(set(layout.points)) == len(layout)


def test_rectangular_layout_stays_inside_margin():
    layout = build_nail_layout(200, 120, 100, LayoutKind.RECTANGULAR)
    for x, y in layout.points:
        assert RECT_MARGIN <= x <= 200 - RECT_MARGIN
        assert RECT_MARGIN <= y <= 120 - RECT_MARGIN


@pytest.mark.parametrize("requested,expected", [(3, 0), (4, 1), (8, 4), (13, 8)])
def test_rectangular_degenerate_counts_are_not_padded(requested, expected):
    layout = build_nail_layout(100, 100, requested, LayoutKind.RECTANGULAR)
    assert len(layout) == expected


def test_layout_is_reproducible_and_immutable():
    first = build_nail_layout(100, 100, 64, LayoutKind.CIRCULAR)
    second = build_nail_layout(100, 100, 64, LayoutKind.CIRCULAR)
    assert first == second
    with pytest.raises(AttributeError):
        first.radius = 3.0
    assert first.as_array().shape == (64, 2)
