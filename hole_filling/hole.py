"""The record produced by hole discovery."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

import numpy as np

from .pixel import Pixel


def _pixels_to_mask(pixels: Iterable[Pixel], shape: Tuple[int, int]) -> np.ndarray:
    mask = np.zeros(shape[:2], dtype=bool)
    for pixel in pixels:
        mask[pixel.x, pixel.y] = True
    return mask


@dataclass
class Hole:
    """A connected region of missing pixels and the known pixels around it.

    ``interior`` holds every sentinel pixel reachable from the seed, in the
    order the traversal reached them.  ``boundary`` holds each known pixel
    adjacent to the interior exactly once.  The two lists never overlap.
    """

    interior: List[Pixel] = field(default_factory=list)
    boundary: List[Pixel] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.interior

    def add_interior(self, pixel: Pixel) -> None:
        self.interior.append(pixel)

    def add_boundary(self, pixel: Pixel) -> None:
        self.boundary.append(pixel)

    def interior_mask(self, shape: Tuple[int, int]) -> np.ndarray:
        """Boolean mask of the interior pixels for a grid of ``shape``."""
        return _pixels_to_mask(self.interior, shape)

    def boundary_mask(self, shape: Tuple[int, int]) -> np.ndarray:
        """Boolean mask of the boundary pixels for a grid of ``shape``."""
        return _pixels_to_mask(self.boundary, shape)

    def __str__(self) -> str:
        interior = "\t".join(str(p) for p in self.interior)
        boundary = "\t".join(str(p) for p in self.boundary)
        return f"Hole:\n{interior}\nHole Boundary:\n{boundary}"
