"""Find-and-fill orchestration on top of the finder and filler."""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from .config import FillConfig
from .filler import fill_hole
from .finder import calculate_hole, find_missing_pixel, iter_holes
from .hole import Hole
from .weights import WeightFunction, default_weight

logger = logging.getLogger(__name__)


def _resolve_weight(config: FillConfig, weight: Optional[WeightFunction]) -> WeightFunction:
    if weight is not None:
        return weight
    return default_weight(config.epsilon, config.z)


def fill_first_hole(
    grid: np.ndarray,
    config: Optional[FillConfig] = None,
    weight: Optional[WeightFunction] = None,
) -> Optional[Hole]:
    """Find the first hole in row-major order and fill it in place.

    Args:
        grid: 2D intensity grid; modified in place.
        config: Connectivity, kernel scalars and fill policy.
        weight: Optional kernel overriding the default built from ``config``.

    Returns:
        The filled :class:`Hole`, or ``None`` when no pixel is missing.
    """
    config = config or FillConfig()
    seed = find_missing_pixel(grid)
    if seed is None:
        logger.info("No missing pixel in the image; nothing to fill")
        return None

    hole = calculate_hole(grid, seed, config.connectivity)
    fill_hole(grid, hole, _resolve_weight(config, weight), config.policy, config.connectivity)
    logger.info(
        "Filled hole at %s: %d pixel(s), %d boundary pixel(s) [%s]",
        seed, len(hole.interior), len(hole.boundary), config.policy.value,
    )
    return hole


def fill_all_holes(
    grid: np.ndarray,
    config: Optional[FillConfig] = None,
    weight: Optional[WeightFunction] = None,
) -> List[Hole]:
    """Fill every hole in the grid, one connected component at a time.

    Returns the filled holes in seed order; an empty list means nothing was
    missing.
    """
    config = config or FillConfig()
    kernel = _resolve_weight(config, weight)
    holes: List[Hole] = []
    for hole in iter_holes(grid, config.connectivity):
        fill_hole(grid, hole, kernel, config.policy, config.connectivity)
        holes.append(hole)

    if holes:
        logger.info(
            "Filled %d hole(s), %d pixel(s) total [%s]",
            len(holes), sum(len(h.interior) for h in holes), config.policy.value,
        )
    else:
        logger.info("No missing pixel in the image; nothing to fill")
    return holes
