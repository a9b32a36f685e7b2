"""Tests for image ingestion and CMYK separation."""

import numpy as np
import pytest
from PIL import Image

from image_processing import ImageProcessor, rgb_to_cmyk
from image_processing.separation import (
    intensity_to_darkness,
    separate_channels,
    to_grayscale,
)
from image_processing.utils import is_supported_image, processing_size


def pixels(*colors):
    return np.array([list(colors)], dtype=np.uint8)


def test_rgb_to_cmyk_primaries():
    cmyk = rgb_to_cmyk(pixels((255, 0, 0), (0, 0, 255), (255, 255, 255), (0, 0, 0)))
    assert cmyk.shape == (1, 4, 4)
    assert cmyk.dtype == np.uint8
    assert tuple(cmyk[0, 0]) == (0, 255, 255, 0)
    assert tuple(cmyk[0, 1]) == (255, 255, 0, 0)
    assert tuple(cmyk[0, 2]) == (0, 0, 0, 0)
    assert tuple(cmyk[0, 3]) == (0, 0, 0, 255)


def test_separate_channels_gives_darkness_per_letter():
    channels = separate_channels(pixels((0, 255, 255), (0, 0, 0)))
    assert sorted(channels) == ["C", "K", "M", "Y"]
    assert channels["C"][0, 0] == 1.0
    assert channels["M"][0, 0] == 0.0
    assert channels["K"][0, 1] == 1.0
    for field in channels.values():
        assert field.shape == (1, 2)
        assert field.min() >= 0.0 and field.max() <= 1.0


def test_grayscale_darkness():
    gray = to_grayscale(pixels((0, 0, 0), (255, 255, 255), (255, 0, 0)))
    assert gray.dtype == np.uint8
    assert gray[0, 0] == 0
    assert gray[0, 2] == 76
    darkness = intensity_to_darkness(gray)
    assert darkness[0, 0] == 1.0
    assert darkness[0, 1] <= 1.0 / 255.0


@pytest.mark.parametrize(
    "size,expected",
    [
        ((300, 200), (300, 200, 1.0)),
        ((400, 1200), (400, 1200, 1.0)),
        ((1000, 800), (500, 400, 0.5)),
        ((800, 1600), (400, 800, 0.5)),
    ],
)
def test_processing_size_caps_short_side(size, expected):
    assert processing_size(*size) == expected


@pytest.mark.parametrize(
    "name,supported",
    [("a.png", True), ("b.JPG", True), ("c.jpeg", True), ("d.bmp", True), ("e.gif", False)],
)
def test_supported_extensions(name, supported):
    assert is_supported_image(name) is supported


def test_process_grayscale_image(tmp_path):
    rgb = np.full((40, 60, 3), 255, dtype=np.uint8)
    rgb[:, :30] = 0
    path = tmp_path / "half.png"
    Image.fromarray(rgb).save(path)

    processed = ImageProcessor().process(path)
    assert (processed.width, processed.height) == (60, 40)
    assert processed.darkness.shape == (40, 60)
    assert not processed.is_color
    assert processed.channels == {}
    assert np.all(processed.darkness[:, :30] == 1.0)
    assert np.all(processed.darkness[:, 30:] <= 1.0 / 255.0)


def test_process_color_image_resizes(tmp_path):
    path = tmp_path / "big.bmp"
    Image.new("RGB", (1000, 800), (0, 255, 255)).save(path)

    processed = ImageProcessor(color_mode=True).process(path)
    assert (processed.width, processed.height) == (500, 400)
    assert (processed.original_width, processed.original_height) == (1000, 800)
    assert processed.is_color
    assert sorted(processed.channels) == ["C", "K", "M", "Y"]
    assert processed.channels["C"].shape == (400, 500)
    np.testing.assert_allclose(processed.channels["C"], 1.0, atol=0.01)
    np.testing.assert_allclose(processed.channels["K"], 0.0, atol=0.01)


def test_prepare_without_resize_keeps_size():
    image = Image.new("L", (900, 700), 128)
    processed = ImageProcessor(resize=False).prepare(image)
    assert (processed.width, processed.height) == (900, 700)


def test_unsupported_extension_is_rejected(tmp_path):
    path = tmp_path / "anim.gif"
    Image.new("RGB", (10, 10)).save(path)
    with pytest.raises(ValueError, match="not an image"):
        ImageProcessor().load_image(path)


def test_corrupt_file_is_rejected(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not a png")
    with pytest.raises(ValueError, match="Failed to load image"):
        ImageProcessor().load_image(path)
