"""Distance-based weighting kernels for hole reconstruction."""

import math
from typing import Callable

from .pixel import Pixel

WeightFunction = Callable[[Pixel, Pixel], float]


def euclidean_distance(a: Pixel, b: Pixel) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def default_weight(epsilon: float, z: float) -> WeightFunction:
    """Build the inverse-distance kernel ``1 / (distance^z + epsilon)``.

    ``z`` controls how quickly influence decays with distance; larger values
    favour the nearest known pixels.  ``epsilon`` keeps the weight finite for
    coincident points.  When ``distance^z`` is infinite (beyond the float
    range, or a zero distance with negative ``z``) the weight is ``0.0``.
    """

    def weight(a: Pixel, b: Pixel) -> float:
        try:
            scaled = euclidean_distance(a, b) ** z
        except (OverflowError, ZeroDivisionError):
            return 0.0
        return 1.0 / (scaled + epsilon)

    return weight
