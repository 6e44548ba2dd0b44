"""
Command-line seam carving.

Usage:
    seamcarver image.jpg                 # resize to 80% width, 80% height
    seamcarver image.jpg 70 60           # 70% width, 60% height
    seamcarver image.jpg 75 75 greedy    # 75% using the greedy method
    seamcarver image.jpg 90 100          # 90% width, keep height
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from .carving import SeamCarver
from .errors import SeamCarvingError
from .io import load_image, save_image
from .seam import SeamMethod

logger = logging.getLogger(__name__)

DEFAULT_PERCENT = 80.0
DEFAULT_OUTPUT_DIR = 'output'


def _configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(message)s',
        stream=sys.stdout,
    )


def _method(value: str) -> SeamMethod:
    try:
        return SeamMethod.parse(value)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(str(ex)) from ex


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seamcarver',
        description='Content-aware image shrinking by seam carving.')
    parser.add_argument('image', type=Path, help='Path to input image')
    parser.add_argument('width_pct', type=float, nargs='?', default=DEFAULT_PERCENT,
                        help='Target width as percentage 1-100 (default: %(default)s)')
    parser.add_argument('height_pct', type=float, nargs='?', default=DEFAULT_PERCENT,
                        help='Target height as percentage 1-100 (default: %(default)s)')
    parser.add_argument('method', type=_method, nargs='?', default=SeamMethod.DP,
                        help="'dp', 'greedy' or 'shortest_path' (default: dp)")
    parser.add_argument('--output-dir', type=Path, default=Path(DEFAULT_OUTPUT_DIR),
                        help='Directory for the resized image (default: %(default)s)')
    parser.add_argument('--log-level', default='INFO',
                        help='Logging level (default: %(default)s)')
    return parser


def percent_to_pixels(size: int, percent: float) -> int:
    """Pixel count for a percentage of size, truncated toward zero."""
    return int(size * percent / 100.0)


def output_filename(method: SeamMethod, width_pct: float, height_pct: float,
                    width: int, height: int) -> str:
    return f"output_{method.value}_{int(width_pct)}w_{int(height_pct)}h_{width}x{height}.png"


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    for name, value in (('Width', args.width_pct), ('Height', args.height_pct)):
        if not 1.0 <= value <= 100.0:
            logger.error("Error: %s percentage must be between 1 and 100 (got %s)", name, value)
            return 1

    try:
        carver = SeamCarver(load_image(args.image))
    except SeamCarvingError as ex:
        logger.error("Error: %s", ex)
        return 1

    width, height = carver.width, carver.height
    new_width = percent_to_pixels(width, args.width_pct)
    new_height = percent_to_pixels(height, args.height_pct)

    logger.info("Original dimensions: %dx%d", width, height)
    logger.info("Target percentages:  %s%% x %s%%", args.width_pct, args.height_pct)
    logger.info("Calculated dimensions: %dx%d", new_width, new_height)

    if new_width <= 0 or new_height <= 0:
        logger.error("Error: Calculated dimensions are too small.")
        return 1

    if new_width == width and new_height == height:
        logger.info("Note: Target dimensions equal original. No resizing needed.")
        return 0

    start = time.perf_counter()
    try:
        resized = carver.resize(new_width, new_height, method=args.method)
    except SeamCarvingError as ex:
        logger.error("Error: %s", ex)
        return 1
    logger.info("Processing time: %d ms", (time.perf_counter() - start) * 1000)

    output_path = args.output_dir / output_filename(
        args.method, args.width_pct, args.height_pct, new_width, new_height)
    try:
        save_image(resized, output_path)
    except OSError as ex:
        logger.error("Error: could not write %s: %s", output_path, ex)
        return 1
    logger.info("Saved resized image to: %s", output_path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
