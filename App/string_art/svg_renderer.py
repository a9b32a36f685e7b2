"""SVG diagrams of nail sequences.

AIDEV-NOTE: Purely derived from a sequence plus the layout; no access to
darkness or coverage. The drawing is sized in millimeters to fit the
paper, with the stroke width compensated so threads print at their
physical thickness. No background is drawn since it gets in the way of
CNC/plotter workflows.
"""

import svg

from models import (
    CHANNELS,
    SVG_PADDING,
    THREAD_THICKNESS_MM,
    ColorStringSequences,
    NailLayout,
)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
NAIL_RADIUS = 0.3
NAIL_FILL = "#999"


def paper_scale(layout: NailLayout, paper_width: float, paper_height: float) -> float:
    """Scale factor (mm per viewBox unit) fitting the canvas on the paper."""
    canvas_width = layout.width + 2 * SVG_PADDING
    canvas_height = layout.height + 2 * SVG_PADDING
    return min(paper_width / canvas_width, paper_height / canvas_height)


def _canvas(
    layout: NailLayout,
    thread_thickness: str,
    paper_width: float,
    paper_height: float,
) -> "tuple[float, dict]":
    """Compute stroke width and root attributes shared by both diagrams."""
    canvas_width = layout.width + 2 * SVG_PADDING
    canvas_height = layout.height + 2 * SVG_PADDING
    scale = paper_scale(layout, paper_width, paper_height)

    thread_mm = THREAD_THICKNESS_MM.get(thread_thickness, 0.1)
    stroke_width = thread_mm / scale

    attrs = {
        "width": svg.Length(int(canvas_width * scale), "mm"),
        "height": svg.Length(int(canvas_height * scale), "mm"),
        "viewBox": svg.ViewBoxSpec(0, 0, canvas_width, canvas_height),
    }
    return stroke_width, attrs


def _shifted(point: "tuple[float, float]") -> "tuple[float, float]":
    return round(point[0] + SVG_PADDING, 3), round(point[1] + SVG_PADDING, 3)


def sequence_lines(sequence: "list[int]", layout: NailLayout) -> "list[svg.Element]":
    """One <line> per consecutive pair of nails in the sequence."""
    lines: "list[svg.Element]" = []
    num_nails = len(layout)
    for nail1, nail2 in zip(sequence, sequence[1:]):
        if not (0 <= nail1 < num_nails and 0 <= nail2 < num_nails):
            continue
        x1, y1 = _shifted(layout[nail1])
        x2, y2 = _shifted(layout[nail2])
        lines.append(svg.Line(id=f"{nail1}-{nail2}", x1=x1, y1=y1, x2=x2, y2=y2))
    return lines


def nail_group(layout: NailLayout) -> svg.G:
    """Small reference dots for every nail."""
    circles: "list[svg.Element]" = []
    for i, point in enumerate(layout.points):
        cx, cy = _shifted(point)
        circles.append(
            svg.Circle(
                id=f"nail-{i}",
                cx=cx,
                cy=cy,
                r=NAIL_RADIUS,
                elements=[svg.Title(text=f"Nail {i}")],
            )
        )
    return svg.G(id="Nails", fill=NAIL_FILL, stroke="none", elements=circles)


def sequence_to_svg(
    sequence: "list[int]",
    layout: NailLayout,
    thread_thickness: str = "0.1mm",
    paper_width: float = 609.6,
    paper_height: float = 914.4,
) -> str:
    """Render a grayscale sequence as opaque black threads.

    Args:
        sequence: Nail indices in stringing order
        layout: The layout the sequence was generated on
        thread_thickness: Thread thickness key ("0.1mm" ... "0.5mm")
        paper_width: Paper width in mm
        paper_height: Paper height in mm

    Returns:
        SVG document as a string
    """
    stroke_width, attrs = _canvas(layout, thread_thickness, paper_width, paper_height)

    threads = svg.G(
        id="Black",
        stroke="black",
        stroke_width=stroke_width,
        stroke_opacity=1.0,
        elements=sequence_lines(sequence, layout),
    )

    document = svg.SVG(
        **attrs,
        elements=[
            svg.Title(text=f"String Art - {len(sequence)} connections"),
            svg.Desc(
                text=f"Generated string art with {len(layout)} nails in "
                f"{layout.kind.value} layout"
            ),
            threads,
            nail_group(layout),
        ],
    )
    return XML_HEADER + document.as_str() + "\n"


def color_sequences_to_svg(
    sequences: ColorStringSequences,
    layout: NailLayout,
    color_order: str = "CMYK",
    thread_thickness: str = "0.1mm",
    paper_width: float = 609.6,
    paper_height: float = 914.4,
) -> str:
    """Render CMYK sequences as one semi-opaque group per thread color.

    Groups are emitted in ``color_order`` (display order), which is
    independent of the order the channels were generated in. Empty
    channels are omitted.
    """
    stroke_width, attrs = _canvas(layout, thread_thickness, paper_width, paper_height)

    elements: "list[svg.Element]" = [
        svg.Title(text=f"Color String Art - {sequences.total_strings} total connections"),
        svg.Desc(
            text=f"Generated color string art with {len(layout)} nails in "
            f"{layout.kind.value} layout (CMYK mode)"
        ),
    ]

    for letter in color_order.upper():
        info = CHANNELS[letter]
        sequence = sequences.for_channel(letter)
        if not sequence:
            continue
        elements.append(
            svg.G(
                id=info.display_name,
                stroke=info.svg_color,
                stroke_width=stroke_width,
                stroke_opacity=0.8,
                elements=sequence_lines(sequence, layout),
            )
        )

    elements.append(nail_group(layout))

    document = svg.SVG(**attrs, elements=elements)
    return XML_HEADER + document.as_str() + "\n"
