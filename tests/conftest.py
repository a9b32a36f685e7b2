"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from models import LayoutKind, ProcessedImage
from string_art.layout import build_nail_layout


def half_dark_field(width: int = 100, height: int = 100) -> np.ndarray:
    return np.full((height, width), 0.5)


def diagonal_gradient(width: int = 80, height: int = 80) -> np.ndarray:
    """Darkness rising from the top-left corner to the bottom-right one."""
    ys, xs = np.mgrid[0:height, 0:width]
    return (xs + ys) / float(width + height - 2)


def dark_bar_field(width: int = 80, height: int = 80) -> np.ndarray:
    """White field with a dark vertical bar through the middle."""
    field = np.zeros((height, width))
    field[:, width // 2 - 4 : width // 2 + 4] = 1.0
    return field


@pytest.fixture
def half_dark() -> np.ndarray:
    return half_dark_field()


@pytest.fixture
def gradient() -> np.ndarray:
    return diagonal_gradient()


@pytest.fixture
def dark_bar() -> np.ndarray:
    return dark_bar_field()


@pytest.fixture
def circular_layout_100():
    return build_nail_layout(100, 100, 50, LayoutKind.CIRCULAR)


@pytest.fixture
def color_image() -> ProcessedImage:
    """Small color-prepared image with a distinct field per channel."""
    width = height = 60
    ys, xs = np.mgrid[0:height, 0:width]
    channels = {
        "C": xs / (width - 1),
        "M": ys / (height - 1),
        "Y": np.full((height, width), 0.3),
        "K": dark_bar_field(width, height),
    }
    return ProcessedImage(
        width=width,
        height=height,
        darkness=np.full((height, width), 0.4),
        is_color=True,
        channels=channels,
    )


@pytest.fixture
def sample_png(tmp_path):
    """A 120x90 RGB PNG with a dark diagonal stroke on white."""
    rgb = np.full((90, 120, 3), 255, dtype=np.uint8)
    for i in range(90):
        rgb[i, i : i + 6] = (20, 40, 60)
    path = tmp_path / "sample.png"
    Image.fromarray(rgb).save(path)
    return path
