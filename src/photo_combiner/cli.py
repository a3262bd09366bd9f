"""
Command line interface for the photo combiner.

Usage:
    photo-combiner photos/ --strategy shelf --preset letter --pdf
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from photo_combiner import __version__
from photo_combiner.config import CombinerConfig
from photo_combiner.controller import CombineError, combine_images
from photo_combiner.layout import LAYOUT_DEFAULTS, PAGE_PRESETS, STRATEGIES
from photo_combiner.output.renderer import DEFAULT_BG_COLOR

logger = logging.getLogger("photo_combiner")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photo-combiner",
        description="Arrange photos onto printable pages.",
    )
    parser.add_argument(
        "inputs", nargs="+", type=Path,
        help="Image files or directories (processed in the given order)",
    )
    parser.add_argument(
        "--preset", default=LAYOUT_DEFAULTS["preset"],
        help=f"Page preset: {', '.join(PAGE_PRESETS)} or custom",
    )
    # Numeric options stay strings so bad values fall back to defaults
    parser.add_argument("--width", help="Custom page width in px (with --preset custom)")
    parser.add_argument("--height", help="Custom page height in px (with --preset custom)")
    parser.add_argument(
        "--orientation", default=LAYOUT_DEFAULTS["orientation"],
        help="portrait or landscape",
    )
    parser.add_argument(
        "--strategy", default=LAYOUT_DEFAULTS["strategy"],
        help=f"Packing strategy: {' or '.join(STRATEGIES)}",
    )
    parser.add_argument(
        "--images-per-row", default=LAYOUT_DEFAULTS["images_per_row"],
        help="Images per row in grid mode",
    )
    parser.add_argument("--spacing", default=LAYOUT_DEFAULTS["spacing"], help="Gap between images in px")
    parser.add_argument("--padding", default=LAYOUT_DEFAULTS["padding"], help="Page margin in px")
    parser.add_argument("--bg-color", default=DEFAULT_BG_COLOR, help="Page background color")
    parser.add_argument("--output", "-o", type=Path, help="Output directory")
    parser.add_argument("--pdf", action="store_true", help="Also write all pages to combined.pdf")
    parser.add_argument("--no-png", action="store_true", help="Skip PNG pages (requires --pdf)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    try:
        config = CombinerConfig(
            inputs=list(args.inputs),
            output_dir=args.output,
            export_png=not args.no_png,
            export_pdf=args.pdf,
            preset=args.preset,
            orientation=args.orientation,
            custom_width=args.width,
            custom_height=args.height,
            spacing=args.spacing,
            padding=args.padding,
            images_per_row=args.images_per_row,
            strategy=args.strategy,
            bg_color=args.bg_color,
        )
    except ValueError as e:
        logger.error(f"Invalid options: {e}")
        return 1

    try:
        result = combine_images(config)
    except CombineError as e:
        logger.error(str(e))
        return 1

    for path in result.page_paths:
        print(path)
    if result.pdf_path:
        print(result.pdf_path)
    print(f"{result.page_count} page(s) written to {result.output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
