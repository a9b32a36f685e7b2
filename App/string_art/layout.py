"""Nail layout generation for circular and rectangular frames.

AIDEV-NOTE: Renderers rebuild the layout from (width, height, nail count,
kind) and must land on the exact same coordinates as the engine, so every
formula here is deterministic and free of rounding.
"""

import math

from models import LayoutKind, NailLayout

CIRCLE_INSET = 10  # px between image edge and the nail circle
RECT_MARGIN = 15  # px inset of the rectangular frame


def circular_nails(
    width: int, height: int, num_nails: int
) -> "tuple[list[tuple[float, float]], float]":
    """Place nails evenly on a circle centered on the image.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        num_nails: Number of nails

    Returns:
        Tuple of (nail coordinates, circle radius)
    """
    center_x = width // 2
    center_y = height // 2
    radius = min(width, height) / 2.0 - CIRCLE_INSET

    nails = []
    for i in range(num_nails):
        angle = 2.0 * math.pi * i / num_nails
        nails.append(
            (center_x + radius * math.cos(angle), center_y + radius * math.sin(angle))
        )
    return nails, radius


def rectangular_nails(
    width: int, height: int, num_nails: int
) -> "list[tuple[float, float]]":
    """Distribute nails over the top, right, bottom and left sides.

    Each side gets ``num_nails // 4`` positions (remainder dropped) and
    adjacent sides share their corner nail, so fewer than ``num_nails``
    nails come back. Callers must use the returned count.
    """
    margin = RECT_MARGIN
    per_side = num_nails // 4
    span_x = width - 2 * margin
    span_y = height - 2 * margin
    divisor = max(1, per_side - 1)

    nails: "list[tuple[float, float]]" = []

    # Top, left to right
    for i in range(per_side):
        nails.append((margin + i * span_x / divisor, float(margin)))

    # Right, top to bottom (skip shared top-right corner)
    for i in range(1, per_side):
        nails.append((float(width - margin), margin + i * span_y / divisor))

    # Bottom, right to left (skip shared bottom-right corner)
    for i in range(per_side - 2, -1, -1):
        nails.append((margin + i * span_x / divisor, float(height - margin)))

    # Left, bottom to top (skip both shared corners)
    for i in range(per_side - 2, 0, -1):
        nails.append((float(margin), margin + i * span_y / divisor))

    return nails[:num_nails]


def build_nail_layout(
    width: int,
    height: int,
    num_nails: int,
    kind: LayoutKind = LayoutKind.CIRCULAR,
) -> NailLayout:
    """Build the immutable nail layout for an image.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        num_nails: Requested nail count
        kind: Circular or rectangular frame

    Returns:
        NailLayout (rectangular layouts may hold fewer nails than requested)
    """
    if kind is LayoutKind.CIRCULAR:
        points, radius = circular_nails(width, height, num_nails)
    else:
        points = rectangular_nails(width, height, num_nails)
        radius = 0.0

    return NailLayout(
        kind=kind,
        width=width,
        height=height,
        requested_nails=num_nails,
        points=tuple(points),
        radius=radius,
    )
