"""Public interface for the hole filling toolkit."""

from __future__ import annotations

from .config import MISSING_VALUE, Connectivity, FillConfig, FillPolicy
from .errors import DegenerateHoleError, HoleFillingError, NoMissingPixelError
from .filler import fill_from_boundary, fill_from_neighbours, fill_hole
from .finder import calculate_hole, find_missing_pixel, iter_holes, require_missing_pixel
from .hole import Hole
from .pipeline import fill_all_holes, fill_first_hole
from .pixel import Pixel
from .weights import WeightFunction, default_weight, euclidean_distance

__all__ = [
    "MISSING_VALUE",
    "Connectivity",
    "DegenerateHoleError",
    "FillConfig",
    "FillPolicy",
    "Hole",
    "HoleFillingError",
    "NoMissingPixelError",
    "Pixel",
    "WeightFunction",
    "calculate_hole",
    "default_weight",
    "euclidean_distance",
    "fill_all_holes",
    "fill_first_hole",
    "fill_from_boundary",
    "fill_from_neighbours",
    "fill_hole",
    "find_missing_pixel",
    "iter_holes",
    "require_missing_pixel",
]
