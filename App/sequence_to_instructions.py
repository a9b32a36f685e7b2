"""Convert nail sequences to human-readable stringing instructions.

AIDEV-NOTE: Plain-text renderer. Everything here is a stateless transform of
a finished sequence; it never needs darkness or coverage data.
"""

import math
from pathlib import Path
from typing import Optional

from models import CHANNELS, ColorStringSequences, GeneratorConfig, LayoutKind, NailLayout

NAILS_PER_LINE = 20


class SequenceToInstructionsConverter:
    """Converts nail sequences to instruction text."""

    def __init__(self, config: GeneratorConfig):
        self.config = config

    @property
    def _layout_label(self) -> str:
        return "Circular" if self.config.layout is LayoutKind.CIRCULAR else "Rectangular"

    @property
    def _shape(self) -> str:
        return "circle" if self.config.layout is LayoutKind.CIRCULAR else "rectangle"

    def format_sequence(self, sequence: "list[int]", per_line: int = NAILS_PER_LINE) -> str:
        """Comma-separated nail list with a line break every ``per_line`` nails."""
        parts = []
        last = len(sequence) - 1
        for i, nail in enumerate(sequence):
            parts.append(str(nail))
            if i < last:
                parts.append(",")
            if (i + 1) % per_line == 0:
                parts.append("\n")
        return "".join(parts)

    def numbered_connections(self, sequence: "list[int]") -> "list[str]":
        """One numbered line per thread segment.

        Returns:
            Lines like "Step 1: nail 0 -> nail 37"
        """
        return [
            f"Step {step}: nail {a} -> nail {b}"
            for step, (a, b) in enumerate(zip(sequence, sequence[1:]), start=1)
        ]

    def thread_length(self, sequence: "list[int]", layout: NailLayout) -> float:
        """Total thread length in layout (pixel) units."""
        total = 0.0
        for a, b in zip(sequence, sequence[1:]):
            x1, y1 = layout[a]
            x2, y2 = layout[b]
            total += math.sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)
        return total

    def validate_sequence(
        self, sequence: "list[int]", num_nails: int
    ) -> "tuple[bool, list[str]]":
        """Check a sequence is something a person can actually string.

        Args:
            sequence: Nail indices
            num_nails: Number of nails in the layout it was built on

        Returns:
            Tuple of (all_valid, error_messages)
        """
        errors = []
        if not sequence:
            errors.append("Sequence is empty")
            return False, errors

        if sequence[0] != 0:
            errors.append(f"Sequence must start at nail 0, starts at {sequence[0]}")

        for i, nail in enumerate(sequence):
            if not 0 <= nail < num_nails:
                errors.append(f"Entry {i}: nail {nail} out of range (0 to {num_nails - 1})")
            if i > 0 and nail == sequence[i - 1]:
                errors.append(f"Entry {i}: nail {nail} connected to itself")

        return len(errors) == 0, errors

    def grayscale_instructions(
        self,
        sequence: "list[int]",
        input_name: str,
        timestamp: str,
        num_nails: Optional[int] = None,
    ) -> str:
        """Full instruction document for a single black thread.

        Args:
            sequence: Nail indices in stringing order
            input_name: Source image name for the header
            timestamp: Generation timestamp for the header
            num_nails: Nails in the built layout; rectangular layouts hold
                fewer than requested. Defaults to the configured count.
        """
        config = self.config
        nails = config.num_nails if num_nails is None else num_nails
        lines = [
            "String Art Generator - Nail Connection List",
            "===========================================",
            f"Generated: {timestamp}",
            f"Input image: {input_name}",
            f"Layout: {self._layout_label}",
            f"Total nails: {nails}",
            f"Number of connections: {len(sequence)}",
            f"Contrast factor: {config.contrast_factor:g}",
            f"Thread thickness: {config.thread_thickness}",
            "",
            "Nail sequence (follow this order to create string art):",
        ]
        text = "\n".join(lines) + "\n"
        text += self.format_sequence(sequence)
        text += "\n\n"
        text += "\n".join(
            [
                "Instructions:",
                f"1. Arrange {nails} nails in a {self._shape}",
                f"2. Number them 0 to {nails - 1} going clockwise",
                "3. Connect the nails with BLACK thread in the sequence shown above",
                "4. Pull thread tight between each connection",
                "5. Use OPAQUE thread - threads are NOT transparent!",
            ]
        )
        connections = self.numbered_connections(sequence)
        if connections:
            text += "\n\nConnection list:\n" + "\n".join(connections)
        return text + "\n"

    def color_instructions(
        self,
        sequences: ColorStringSequences,
        input_name: str,
        timestamp: str,
        num_nails: Optional[int] = None,
    ) -> str:
        """Full instruction document for four CMYK threads.

        Channel blocks follow the configured display order. ``num_nails``
        works as in :meth:`grayscale_instructions`.
        """
        config = self.config
        nails = config.num_nails if num_nails is None else num_nails
        order = config.color_order.upper()
        lines = [
            "Color String Art Generator - CMYK Nail Connection Instructions",
            "===================================================================",
            f"Generated: {timestamp}",
            f"Input image: {input_name}",
            "Mode: Color (CMYK separation)",
            f"Layout: {self._layout_label}",
            f"Total nails: {nails}",
            f"Strings per color: {config.strings_per_color}",
            f"Color order: {order}",
            f"Total connections: {sequences.total_strings}",
            f"  - Cyan: {len(sequences.cyan)} strings",
            f"  - Magenta: {len(sequences.magenta)} strings",
            f"  - Yellow: {len(sequences.yellow)} strings",
            f"  - Black: {len(sequences.black)} strings",
            f"Contrast factor: {config.contrast_factor:g}",
            f"Thread thickness: {config.thread_thickness}",
            "",
            "Color String Art Instructions:",
            f"1. Arrange {nails} nails in a {self._shape}",
            f"2. Number them 0 to {nails - 1} going clockwise",
            "3. You will need FOUR different colored threads: CYAN, MAGENTA, YELLOW, BLACK",
            f"4. Follow each color sequence in the specified order ({order})",
            "5. Pull thread tight between each connection",
            "6. Use OPAQUE threads - threads are NOT transparent!",
            "",
        ]
        text = "\n".join(lines) + "\n"

        for letter in order:
            sequence = sequences.for_channel(letter)
            if not sequence:
                continue
            info = CHANNELS[letter]
            text += f"{info.display_name} Thread Sequence ({len(sequence)} connections):\n"
            text += self.format_sequence(sequence)
            text += "\n\n"

        text += "\n".join(
            [
                "Construction Tips:",
                f"* Follow the color order: {order}",
                "* It's recommended to start with darker colors first",
                "* Each color contributes to the final image - all are important!",
                "* Use high-quality, opaque threads for best results",
            ]
        )
        return text + "\n"

    def write(self, path: "str | Path", text: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
