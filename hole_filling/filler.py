"""Hole reconstruction by normalised weighted averaging.

Two policies are provided:

``fill_from_boundary``
    Every hole pixel becomes the weighted mean of the whole boundary.  The
    boundary is never written, so the result does not depend on the order
    in which hole pixels are visited.

``fill_from_neighbours``
    Every hole pixel becomes the weighted mean of its direct neighbours that
    currently hold a known value.  This reads the live grid: pixels filled
    earlier in the pass feed the ones after them (progressive refinement).
    Pixels are visited in the traversal's BFS order, and a pixel that has no
    known neighbour yet is deferred to a later sweep.

A hole pixel whose weights all come out as zero takes the plain mean of its
nearest source pixels, so only an empty source set (or a kernel producing a
non-finite sum) is degenerate.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Union

import numpy as np

from .config import MISSING_VALUE, Connectivity, FillPolicy
from .errors import DegenerateHoleError
from .hole import Hole
from .pixel import Pixel
from .weights import WeightFunction, euclidean_distance

logger = logging.getLogger(__name__)


def _weighted_average(
    grid: np.ndarray, pixel: Pixel, sources: Sequence[Pixel], weight: WeightFunction
) -> float:
    if not sources:
        raise DegenerateHoleError(f"No source pixel to fill {pixel} from", pixel=pixel)

    weights = np.fromiter(
        (weight(pixel, source) for source in sources), dtype=np.float64, count=len(sources)
    )
    values = np.fromiter(
        (grid[source.x, source.y] for source in sources), dtype=np.float64, count=len(sources)
    )
    denominator = weights.sum()
    if not np.isfinite(denominator):
        raise DegenerateHoleError(
            f"Weight sum for pixel {pixel} is {denominator} over {len(sources)} source pixel(s)",
            pixel=pixel,
        )
    if denominator == 0:
        # every weight vanished (e.g. distance**z past the float range):
        # fall back to the large-z limit, an equal mean of the nearest sources
        distances = np.fromiter(
            (euclidean_distance(pixel, source) for source in sources),
            dtype=np.float64, count=len(sources),
        )
        weights = (distances == distances.min()).astype(np.float64)
        denominator = weights.sum()
        logger.debug("All weights vanished for %s; using %d nearest source(s)",
                     pixel, int(denominator))
    return float(weights @ values / denominator)


def fill_from_boundary(grid: np.ndarray, hole: Hole, weight: WeightFunction) -> np.ndarray:
    """Overwrite each hole pixel with the weighted mean of the hole boundary.

    All values are computed before the first write, so a
    :class:`DegenerateHoleError` (empty boundary) leaves ``grid`` untouched.

    Returns:
        ``grid``, modified in place.
    """
    filled = [_weighted_average(grid, pixel, hole.boundary, weight) for pixel in hole.interior]
    for pixel, value in zip(hole.interior, filled):
        grid[pixel.x, pixel.y] = value
    logger.debug(
        "Boundary fill: %d pixel(s) from %d boundary pixel(s)",
        len(hole.interior), len(hole.boundary),
    )
    return grid


def fill_from_neighbours(
    grid: np.ndarray,
    hole: Hole,
    weight: WeightFunction,
    connectivity: Union[Connectivity, int] = Connectivity.EIGHT,
) -> np.ndarray:
    """Overwrite each hole pixel with the weighted mean of its known neighbours.

    Neighbours still holding ``MISSING_VALUE`` are skipped.  A hole is
    connected, so each sweep after the first always makes progress; a sweep
    that fills nothing means the hole has no known pixel around it at all and
    raises :class:`DegenerateHoleError`.  On any :class:`DegenerateHoleError`
    the hole pixels written so far are restored, leaving ``grid`` as it was.

    Returns:
        ``grid``, modified in place.
    """
    rows, cols = grid.shape
    connectivity = Connectivity(connectivity)
    previous = [grid[p.x, p.y] for p in hole.interior]
    pending: List[Pixel] = list(hole.interior)
    sweeps = 0

    try:
        while pending:
            sweeps += 1
            deferred: List[Pixel] = []
            for pixel in pending:
                known = [
                    n for n in pixel.neighbours(connectivity, rows, cols)
                    if grid[n.x, n.y] != MISSING_VALUE
                ]
                if not known:
                    deferred.append(pixel)
                    continue
                grid[pixel.x, pixel.y] = _weighted_average(grid, pixel, known, weight)

            if len(deferred) == len(pending):
                raise DegenerateHoleError(
                    f"No known neighbour reachable for {len(deferred)} hole pixel(s)",
                    pixel=deferred[0],
                )
            pending = deferred
    except DegenerateHoleError:
        for pixel, value in zip(hole.interior, previous):
            grid[pixel.x, pixel.y] = value
        raise

    logger.debug("Neighbour fill: %d pixel(s) in %d sweep(s)", len(hole.interior), sweeps)
    return grid


def fill_hole(
    grid: np.ndarray,
    hole: Hole,
    weight: WeightFunction,
    policy: Union[FillPolicy, str] = FillPolicy.BOUNDARY,
    connectivity: Union[Connectivity, int] = Connectivity.EIGHT,
) -> np.ndarray:
    """Fill ``hole`` in place using the selected policy."""
    policy = FillPolicy(policy)
    if policy is FillPolicy.NEIGHBOUR:
        return fill_from_neighbours(grid, hole, weight, connectivity)
    return fill_from_boundary(grid, hole, weight)
