"""Command line interface for hole filling.

Usage examples
--------------

Fill the region marked black in ``mask.png`` with 8-connectivity::

    python -m hole_filling.cli photo.png 0.01 3 8 --mask mask.png

Carve a 20x30 rectangle at row 40, column 50, fill it from direct
neighbours and save the hole/boundary overlay::

    python -m hole_filling.cli photo.png 0.01 3 4 --hole-rect 40 50 20 30 \\
        --policy neighbour --overlay overlay.png

Exit status is 0 on success or when nothing is missing, 1 when the image
cannot be read or the hole cannot be filled, and 2 for invalid arguments.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import numpy as np
from PIL import Image

from .config import Connectivity, FillConfig, FillPolicy
from .errors import DegenerateHoleError
from .hole import Hole
from .image_io import (
    apply_mask,
    carve_pixels,
    carve_rectangle,
    load_grayscale,
    random_rectangle,
    render_boundary_overlay,
    save_grayscale,
)
from .pipeline import fill_all_holes, fill_first_hole
from .pixel import Pixel

logger = logging.getLogger("hole_filling")


def _setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _parse_pixel(text: str) -> Pixel:
    """Parse ``"row,col"`` into a :class:`Pixel`."""
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected 'row,col' with integer coordinates, got {text!r}"
        ) from None
    return Pixel(x, y)


def _prepare_grid(args: argparse.Namespace) -> np.ndarray:
    """Load the input image and carve the requested hole into it."""
    grid = load_grayscale(args.image)
    if args.mask:
        apply_mask(grid, args.mask)
    elif args.hole_rect:
        carve_rectangle(grid, *args.hole_rect)
    elif args.hole_pixels:
        carve_pixels(grid, args.hole_pixels)
    elif args.random_hole:
        rect = random_rectangle(grid.shape, np.random.RandomState(args.seed))
        logger.info("Random hole: top=%d left=%d height=%d width=%d", *rect)
        carve_rectangle(grid, *rect)
    return grid


def _default_output(image: Path) -> Path:
    return image.with_name(f"{image.stem}_filled.png")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hole-filling",
        description="Fill a hole in a grayscale image by inverse-distance weighting.",
    )
    parser.add_argument("image", type=Path, help="Input image (any Pillow format)")
    parser.add_argument("epsilon", type=float,
                        help="Weight regulariser, must be > 0")
    parser.add_argument("z", type=float,
                        help="Distance exponent; larger values favour nearer pixels")
    parser.add_argument("connectivity", type=int,
                        choices=[c.value for c in Connectivity],
                        help="Pixel connectivity, 4 or 8")

    source = parser.add_mutually_exclusive_group()
    source.add_argument("--mask", type=Path,
                        help="Mask image; dark pixels mark the hole")
    source.add_argument("--hole-rect", type=int, nargs=4,
                        metavar=("TOP", "LEFT", "HEIGHT", "WIDTH"),
                        help="Carve a rectangular hole")
    source.add_argument("--hole-pixels", type=_parse_pixel, nargs="+",
                        metavar="ROW,COL", help="Carve an explicit list of pixels")
    source.add_argument("--random-hole", action="store_true",
                        help="Carve a random rectangle away from the image border")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for --random-hole")

    parser.add_argument("--policy", default=FillPolicy.BOUNDARY.value,
                        choices=[p.value for p in FillPolicy],
                        help="Average over the whole boundary or direct neighbours only")
    parser.add_argument("--all-holes", action="store_true",
                        help="Fill every hole, not just the first one found")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Output image (default: <image>_filled.png)")
    parser.add_argument("--overlay", type=Path, default=None,
                        help="Save an RGB image with the hole in red and its boundary in green")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.debug)

    try:
        config = FillConfig(
            connectivity=args.connectivity,
            epsilon=args.epsilon,
            z=args.z,
            policy=args.policy,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        grid = _prepare_grid(args)
    except (OSError, ValueError) as exc:
        logger.error("Could not prepare %s: %s", args.image, exc)
        return 1

    try:
        if args.all_holes:
            holes: List[Hole] = fill_all_holes(grid, config)
        else:
            hole = fill_first_hole(grid, config)
            holes = [hole] if hole is not None else []
    except DegenerateHoleError as exc:
        logger.error("Hole filling failed: %s", exc)
        return 1

    if not holes:
        return 0
    for hole in holes:
        logger.debug("%s", hole)

    output = args.output or _default_output(args.image)
    try:
        save_grayscale(grid, output)
        logger.info("Filled image written to %s", output)

        if args.overlay:
            args.overlay.parent.mkdir(parents=True, exist_ok=True)
            Image.fromarray(render_boundary_overlay(grid, *holes)).save(args.overlay)
            logger.info("Overlay written to %s", args.overlay)
    except (OSError, ValueError) as exc:
        logger.error("Could not write results: %s", exc)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
