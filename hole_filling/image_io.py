"""Image collaborators: grayscale decoding, encoding, synthetic holes and overlays.

Grids produced here are 2D ``float32`` arrays with intensities in ``[0, 1]``
and ``MISSING_VALUE`` marking unknown pixels, the only format the core
understands.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

import cv2
import numpy as np
from PIL import Image

from .config import MISSING_VALUE
from .hole import Hole
from .pixel import Pixel

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Overlay colours (RGB)
INTERIOR_COLOR = (255, 0, 0)
BOUNDARY_COLOR = (0, 255, 0)

# Mask pixels darker than this (after normalisation) are treated as holes
MASK_THRESHOLD = 0.5


def load_grayscale(path: PathLike) -> np.ndarray:
    """Read an image file into a normalised 2D ``float32`` grid."""
    with Image.open(path) as img:
        if img.mode != "RGB":
            img = img.convert("RGB")
        rgb = np.array(img)
    gray = cv2.cvtColor(rgb, cv2.COLOR_RGB2GRAY)
    return gray.astype(np.float32) / 255.0


def to_uint8(grid: np.ndarray) -> np.ndarray:
    """Scale a normalised grid back to 8-bit; remaining holes become black."""
    data = np.where(grid == MISSING_VALUE, 0.0, grid)
    return np.round(np.clip(data, 0.0, 1.0) * 255.0).astype(np.uint8)


def save_grayscale(grid: np.ndarray, path: PathLike) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(to_uint8(grid)).save(path)
    logger.debug("Saved %dx%d grid to %s", grid.shape[0], grid.shape[1], path)
    return path


def apply_mask(grid: np.ndarray, mask_path: PathLike) -> np.ndarray:
    """Mark every pixel that is dark in the mask image as missing.

    Returns:
        ``grid``, modified in place.
    """
    mask = load_grayscale(mask_path) < MASK_THRESHOLD
    if mask.shape != grid.shape:
        raise ValueError(
            f"Mask shape {mask.shape} does not match image shape {grid.shape}"
        )
    grid[mask] = MISSING_VALUE
    logger.debug("Mask %s marked %d pixel(s) missing", mask_path, int(mask.sum()))
    return grid


def carve_rectangle(
    grid: np.ndarray, top: int, left: int, height: int, width: int
) -> np.ndarray:
    """Mark an axis-aligned rectangle as missing, clipped to the grid."""
    if height <= 0 or width <= 0:
        raise ValueError(f"Hole rectangle must have positive size, got {height}x{width}")
    rows, cols = grid.shape
    top, left = max(0, top), max(0, left)
    bottom, right = min(rows, top + height), min(cols, left + width)
    if top >= bottom or left >= right:
        raise ValueError(
            f"Hole rectangle at ({top}, {left}) lies outside the {rows}x{cols} grid"
        )
    grid[top:bottom, left:right] = MISSING_VALUE
    return grid


def carve_pixels(grid: np.ndarray, pixels: Iterable[Pixel]) -> np.ndarray:
    """Mark an explicit list of pixels as missing."""
    rows, cols = grid.shape
    for pixel in pixels:
        if not (0 <= pixel.x < rows and 0 <= pixel.y < cols):
            raise ValueError(f"Hole pixel {pixel} lies outside the {rows}x{cols} grid")
        grid[pixel.x, pixel.y] = MISSING_VALUE
    return grid


def random_rectangle(
    shape: Tuple[int, int],
    rng: Optional[np.random.RandomState] = None,
    max_fraction: float = 0.25,
) -> Tuple[int, int, int, int]:
    """Pick a random hole rectangle strictly inside the grid.

    The rectangle never touches the image border, so it always has a
    non-empty boundary.  Each side is at most ``max_fraction`` of the
    corresponding grid dimension.

    Returns:
        ``(top, left, height, width)``
    """
    rng = rng or np.random.RandomState()
    rows, cols = shape[:2]
    if rows < 3 or cols < 3:
        raise ValueError(f"Grid {rows}x{cols} is too small for an interior hole")

    height = rng.randint(1, max(1, int((rows - 2) * max_fraction)) + 1)
    width = rng.randint(1, max(1, int((cols - 2) * max_fraction)) + 1)
    top = rng.randint(1, rows - height)
    left = rng.randint(1, cols - width)
    return top, left, height, width


def render_boundary_overlay(grid: np.ndarray, *holes: Hole) -> np.ndarray:
    """Return an RGB view of the grid with holes and their boundaries highlighted."""
    overlay = cv2.cvtColor(to_uint8(grid), cv2.COLOR_GRAY2RGB)
    for hole in holes:
        overlay[hole.interior_mask(grid.shape)] = INTERIOR_COLOR
        overlay[hole.boundary_mask(grid.shape)] = BOUNDARY_COLOR
    return overlay
