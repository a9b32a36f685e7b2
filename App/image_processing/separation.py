"""Grayscale conversion and CMYK channel separation.

AIDEV-NOTE: All conversions truncate to 8-bit first, then map to darkness
in [0, 1] where 1 means "put thread here".
"""

import numpy as np


def to_grayscale(rgb: np.ndarray) -> np.ndarray:
    """Luma-weighted grayscale, truncated to uint8.

    Args:
        rgb: (H, W, 3) uint8 array

    Returns:
        (H, W) uint8 intensity array
    """
    rgb = rgb.astype(np.float64)
    gray = 0.299 * rgb[..., 0] + 0.587 * rgb[..., 1] + 0.114 * rgb[..., 2]
    return gray.astype(np.uint8)


def rgb_to_cmyk(rgb: np.ndarray) -> np.ndarray:
    """Naive RGB to CMYK separation.

    Args:
        rgb: (H, W, 3) uint8 array

    Returns:
        (H, W, 4) uint8 array of C, M, Y, K ink amounts (255 = full ink).
        Pure black pixels map to (0, 0, 0, 255).
    """
    normalized = rgb.astype(np.float64) / 255.0
    k = 1.0 - normalized.max(axis=-1)

    cmyk = np.zeros(rgb.shape[:-1] + (4,), dtype=np.float64)
    inked = k < 1.0
    denominator = np.where(inked, 1.0 - k, 1.0)
    for i in range(3):
        channel = (1.0 - normalized[..., i] - k) / denominator
        cmyk[..., i] = np.where(inked, channel, 0.0)
    cmyk[..., 3] = np.where(inked, k, 1.0)

    return (cmyk * 255).astype(np.uint8)


def intensity_to_darkness(intensity: np.ndarray) -> np.ndarray:
    """Invert 8-bit intensity (255 = white) to darkness in [0, 1]."""
    return (255.0 - intensity.astype(np.float64)) / 255.0


def ink_to_darkness(ink: np.ndarray) -> np.ndarray:
    """Scale 8-bit ink amount (255 = full ink) to darkness in [0, 1]."""
    return ink.astype(np.float64) / 255.0


def separate_channels(rgb: np.ndarray) -> "dict[str, np.ndarray]":
    """Per-channel darkness fields keyed by CMYK letter."""
    cmyk = rgb_to_cmyk(rgb)
    return {letter: ink_to_darkness(cmyk[..., i]) for i, letter in enumerate("CMYK")}
