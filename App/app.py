"""String Art Generator - Main entry point.

Converts an image into nail-and-string art instructions: a text file with
the nail sequence(s) and an SVG diagram of the threads.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from config_manager import ConfigManager
from image_processing import ImageProcessor
from models import CONFIG_FILE, CoverageStrategy, GeneratorConfig, LayoutKind
from sequence_to_instructions import SequenceToInstructionsConverter
from string_art import StringArtGenerator, color_sequences_to_svg, sequence_to_svg
from string_art.strategy import resolve_strategy
from string_art.svg_renderer import paper_scale

logger = logging.getLogger(__name__)


def generate_timestamp() -> str:
    return datetime.now().strftime("_%Y%m%d%H%M%S")


def output_basename(input_file: str, config: GeneratorConfig, output: str | None = None) -> str:
    """Output path without extension, with every parameter encoded.

    Example: ``image.png-n400-s2000-c-0.8-t0.2-cs1``
    """
    base = output or input_file
    thickness = config.thread_thickness
    if len(thickness) > 2 and thickness.endswith("mm"):
        thickness = thickness[:-2]

    suffix = (
        f"-n{config.num_nails}"
        f"-s{config.max_strings}"
        f"-{config.layout.code}"
        f"-{config.contrast_factor:.1f}"
        f"-t{thickness}"
    )
    if config.color_mode:
        suffix += f"-spc{config.strings_per_color}-{config.color_order.upper()}"
    else:
        strategy = resolve_strategy(config.coverage_strategy, config.max_strings)
        suffix += f"-cs{int(strategy)}"
    return base + suffix


def parse_paper_size(value: str) -> "tuple[float, float]":
    """Parse ``WxH`` in millimeters, e.g. ``609.6x914.4``."""
    width, sep, height = value.lower().partition("x")
    if not sep:
        raise argparse.ArgumentTypeError("--paper-size requires format like 609.6x914.4")
    try:
        return float(width), float(height)
    except ValueError:
        raise argparse.ArgumentTypeError(
            "Invalid paper size format. Use like: 609.6x914.4"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="string-art",
        description="String Art Generator - Convert images to nail-and-string art instructions",
        epilog=(
            "Examples:\n"
            "  string-art image.png -n 400 -s 2000\n"
            "  string-art photo.png --color MYKC --strings-per-color 1500\n"
            "  string-art portrait.png --color"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("image_file", help="Input image file (PNG, JPG/JPEG, BMP)")
    parser.add_argument("-n", "--nails", type=int, help="Number of nails (50-1000, default: 400)")
    parser.add_argument(
        "-s", "--strings", type=int, help="Maximum number of strings (0=unlimited, default: 0)"
    )
    parser.add_argument(
        "-o", "--output", help="Output filename base (parameters added automatically)"
    )
    layout = parser.add_mutually_exclusive_group()
    layout.add_argument(
        "-c", "--circular", dest="layout", action="store_const", const=LayoutKind.CIRCULAR,
        help="Use circular layout (default)",
    )
    layout.add_argument(
        "-r", "--rectangular", dest="layout", action="store_const", const=LayoutKind.RECTANGULAR,
        help="Use rectangular layout",
    )
    parser.add_argument("--contrast", type=float, help="Contrast adjustment (0.0-2.0, default: 0.5)")
    parser.add_argument(
        "--thread", help="Thread thickness (0.1mm, 0.2mm, 0.3mm, 0.5mm, default: 0.1mm)"
    )
    parser.add_argument(
        "--coverage-strategy", type=int, choices=[int(s) for s in CoverageStrategy],
        help="Coverage strategy (0=default, 1=adaptive, 2=dynamic, 3=exploration)",
    )
    parser.add_argument(
        "--color", nargs="?", const="CMYK", metavar="ORDER",
        help="Generate color string art with CMYK separation (default order: CMYK)",
    )
    parser.add_argument(
        "--strings-per-color", type=int,
        help="Strings per color channel in color mode (default: 2500, max: 2500)",
    )
    parser.add_argument(
        "--paper-size", type=parse_paper_size, metavar="WxH",
        help="Paper size in mm (default: 609.6x914.4, A4: 210x297, A3: 297x420)",
    )
    parser.add_argument(
        "--workers", type=int, help="Parallel channel runs in color mode (default: 1)"
    )
    parser.add_argument(
        "--config", type=Path, help=f"Settings file to start from (default: {CONFIG_FILE})"
    )
    parser.add_argument(
        "--save-config", action="store_true", help="Save the effective settings to the config file"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    return parser


def apply_arguments(config: GeneratorConfig, args: argparse.Namespace) -> GeneratorConfig:
    """Override config values with the options given on the command line."""
    if args.nails is not None:
        config.num_nails = args.nails
    if args.strings is not None:
        config.max_strings = args.strings
    if args.layout is not None:
        config.layout = args.layout
    if args.contrast is not None:
        config.contrast_factor = args.contrast
    if args.thread is not None:
        config.thread_thickness = args.thread
    if args.coverage_strategy is not None:
        config.coverage_strategy = CoverageStrategy(args.coverage_strategy)
    if args.color is not None:
        config.color_mode = True
        config.color_order = args.color.upper()
    if args.strings_per_color is not None:
        config.strings_per_color = args.strings_per_color
    if args.paper_size is not None:
        config.paper_width, config.paper_height = args.paper_size
    if args.workers is not None:
        config.workers = args.workers
    return config


def run(args: argparse.Namespace) -> int:
    """Execute one generation run. Returns a process exit code."""
    config_manager = ConfigManager(args.config or CONFIG_FILE)
    config = apply_arguments(config_manager.load(), args)

    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Error: {error}")
        return 1

    input_file = args.image_file
    if not Path(input_file).exists():
        print(f"Error: Image could not be found: {input_file}")
        return 1

    if args.save_config:
        saved, error = config_manager.save(config)
        if not saved:
            print(f"Warning: Could not save config file: {error}")

    timestamp = generate_timestamp()
    base = output_basename(input_file, config, args.output)
    txt_path = base + ".txt"
    svg_path = base + ".svg"

    print("================== String Art Generator ==================")
    print(f"  Timestamp: {timestamp}")
    print(f"  Input image: {input_file}")
    print(f"  Output files: {txt_path}")
    print(f"                {svg_path}")
    print(f"  Layout type: {config.layout.value.capitalize()}")
    print(f"  Number of nails: {config.num_nails}")
    print(f"  Max strings: {config.max_strings if config.max_strings > 0 else 'unlimited'}")
    print(f"  Contrast factor: {config.contrast_factor:g}")
    print(f"  Thread thickness: {config.thread_thickness}")
    print()

    processor = ImageProcessor(color_mode=config.color_mode)
    try:
        image = processor.process(input_file)
    except ValueError as e:
        print(f"Error: Cannot load image: {input_file} ({e})")
        return 1

    generator = StringArtGenerator(config)
    converter = SequenceToInstructionsConverter(config)
    layout = generator.layout_for(image)

    if config.color_mode:
        sequences = generator.generate_color(image)
        if sequences.is_empty():
            print("Error: Failed to generate color string art")
            return 1

        converter.write(
            txt_path,
            converter.color_instructions(sequences, input_file, timestamp, len(layout)),
        )
        with open(svg_path, "w", encoding="utf-8") as f:
            f.write(
                color_sequences_to_svg(
                    sequences,
                    layout,
                    config.color_order,
                    config.thread_thickness,
                    config.paper_width,
                    config.paper_height,
                )
            )

        print("=================== COLOR SUCCESS! ===================")
        print(f"Total nail connections: {sequences.total_strings}")
        print(f"  Cyan: {len(sequences.cyan)} strings")
        print(f"  Magenta: {len(sequences.magenta)} strings")
        print(f"  Yellow: {len(sequences.yellow)} strings")
        print(f"  Black: {len(sequences.black)} strings")
    else:
        result = generator.generate_grayscale(image)
        sequence = result.sequence
        valid, problems = converter.validate_sequence(sequence, len(layout))
        if not sequence or not valid:
            for problem in problems:
                logger.error(problem)
            print("Error: Failed to generate string art")
            return 1

        converter.write(
            txt_path,
            converter.grayscale_instructions(sequence, input_file, timestamp, len(layout)),
        )
        with open(svg_path, "w", encoding="utf-8") as f:
            f.write(
                sequence_to_svg(
                    sequence,
                    layout,
                    config.thread_thickness,
                    config.paper_width,
                    config.paper_height,
                )
            )

        scale = paper_scale(layout, config.paper_width, config.paper_height)
        length_m = converter.thread_length(sequence, layout) * scale / 1000.0

        print("=================== SUCCESS! ===================")
        print(f"Total nail connections: {len(sequence)}")
        print(f"Stopped because: {result.stop_reason.value}")
        print(f"Estimated thread length: {length_m:.1f} m")

    print(f"[+] Text instructions saved to: {txt_path}")
    print(f"[+] SVG visualization saved to: {svg_path}")
    return 0


def main(argv: "list[str] | None" = None) -> int:
    """Launch the string art generator from the command line."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
