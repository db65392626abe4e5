"""Grid coordinates and their neighbourhoods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from .config import OFFSETS, Connectivity


@dataclass(frozen=True)
class Pixel:
    """A single grid coordinate.

    ``x`` is the row index (0 is the topmost row) and ``y`` is the column
    index (0 is the leftmost column).
    """

    x: int
    y: int

    def neighbours(
        self, connectivity: Union[Connectivity, int], rows: int, cols: int
    ) -> List[Pixel]:
        """Return the adjacent pixels that lie inside a ``rows x cols`` grid.

        Neighbours outside the grid are dropped rather than reported.  The
        order follows the offset table for the given connectivity.
        """
        offsets = OFFSETS[Connectivity(connectivity)]
        result = []
        for dx, dy in offsets:
            nx, ny = self.x + dx, self.y + dy
            if 0 <= nx < rows and 0 <= ny < cols:
                result.append(Pixel(nx, ny))
        return result

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
