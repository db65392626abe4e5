"""Hole discovery: seed search and breadth-first traversal over the grid.

The traversal keeps a private ``rows x cols`` visited matrix for the duration
of one call.  A pixel is marked visited the moment it is discovered, so a
boundary pixel shared by several interior pixels is recorded once and no
interior pixel is ever queued twice.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterator, Optional, Union

import numpy as np

from .config import MISSING_VALUE, Connectivity
from .errors import NoMissingPixelError
from .hole import Hole
from .pixel import Pixel

logger = logging.getLogger(__name__)


def _check_grid(grid: np.ndarray) -> None:
    if grid.ndim != 2:
        raise ValueError(f"Expected a 2D grayscale grid, got shape {grid.shape}")


def _first_missing(missing: np.ndarray) -> Optional[Pixel]:
    # argwhere walks the array in row-major order
    coords = np.argwhere(missing)
    if coords.size == 0:
        return None
    return Pixel(int(coords[0][0]), int(coords[0][1]))


def find_missing_pixel(grid: np.ndarray) -> Optional[Pixel]:
    """Return the first sentinel pixel in row-major order.

    ``None`` means the grid is fully known and there is nothing to fill.
    """
    _check_grid(grid)
    return _first_missing(grid == MISSING_VALUE)


def require_missing_pixel(grid: np.ndarray) -> Pixel:
    """Like :func:`find_missing_pixel` but raise when no pixel is missing."""
    seed = find_missing_pixel(grid)
    if seed is None:
        raise NoMissingPixelError()
    return seed


def calculate_hole(
    grid: np.ndarray,
    seed: Pixel,
    connectivity: Union[Connectivity, int] = Connectivity.EIGHT,
) -> Hole:
    """Collect the connected hole containing ``seed`` and its boundary.

    Args:
        grid: 2D intensity grid using ``MISSING_VALUE`` for unknown pixels.
        seed: A pixel of the hole, usually from :func:`find_missing_pixel`.
        connectivity: 4 or 8, the adjacency used to grow the hole.

    Returns:
        A populated :class:`Hole`; interior pixels appear in BFS order.
    """
    _check_grid(grid)
    rows, cols = grid.shape
    connectivity = Connectivity(connectivity)

    if not (0 <= seed.x < rows and 0 <= seed.y < cols):
        raise ValueError(f"Seed {seed} lies outside the {rows}x{cols} grid")
    if grid[seed.x, seed.y] != MISSING_VALUE:
        raise ValueError(f"Seed {seed} is not a missing pixel")

    hole = Hole()
    visited = np.zeros((rows, cols), dtype=bool)
    queue: Deque[Pixel] = deque([seed])
    visited[seed.x, seed.y] = True

    while queue:
        current = queue.popleft()
        hole.add_interior(current)

        for neighbour in current.neighbours(connectivity, rows, cols):
            if visited[neighbour.x, neighbour.y]:
                continue
            visited[neighbour.x, neighbour.y] = True
            if grid[neighbour.x, neighbour.y] == MISSING_VALUE:
                queue.append(neighbour)
            else:
                hole.add_boundary(neighbour)

    logger.debug(
        "Hole at %s: %d interior, %d boundary pixels (connectivity=%d)",
        seed, len(hole.interior), len(hole.boundary), int(connectivity),
    )
    return hole


def iter_holes(
    grid: np.ndarray,
    connectivity: Union[Connectivity, int] = Connectivity.EIGHT,
) -> Iterator[Hole]:
    """Yield every hole in the grid, ordered by the row-major position of its seed.

    The grid may be filled between iterations: holes are disjoint connected
    components, so filling one never changes another's interior or boundary.
    """
    _check_grid(grid)
    claimed = np.zeros(grid.shape, dtype=bool)
    while True:
        seed = _first_missing((grid == MISSING_VALUE) & ~claimed)
        if seed is None:
            return
        hole = calculate_hole(grid, seed, connectivity)
        claimed |= hole.interior_mask(grid.shape)
        yield hole
