"""Hole filling configuration: sentinel value, adjacency and fill policies."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


# ---------------------------------------------------------------------------
# Grid conventions
# ---------------------------------------------------------------------------
# Intensities are normalised to [0, 1]; anything equal to this is unknown.
MISSING_VALUE = -1.0

# Defaults used by the CLI when the caller does not override them
DEFAULT_EPSILON = 1e-2
DEFAULT_Z = 3.0


class Connectivity(int, Enum):
    FOUR = 4    # edge-sharing neighbours
    EIGHT = 8   # edge- and corner-sharing neighbours


class FillPolicy(str, Enum):
    BOUNDARY = "boundary"     # weighted average over the whole hole boundary
    NEIGHBOUR = "neighbour"   # weighted average over known direct neighbours


# ---------------------------------------------------------------------------
# Neighbour offset tables, (row, column) deltas
# ---------------------------------------------------------------------------
FOUR_CONNECTED_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (1, 0), (-1, 0), (0, 1), (0, -1),
)
DIAGONAL_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (1, 1), (1, -1), (-1, 1), (-1, -1),
)
EIGHT_CONNECTED_OFFSETS = FOUR_CONNECTED_OFFSETS + DIAGONAL_OFFSETS

OFFSETS = {
    Connectivity.FOUR: FOUR_CONNECTED_OFFSETS,
    Connectivity.EIGHT: EIGHT_CONNECTED_OFFSETS,
}


@dataclass
class FillConfig:
    """Run-time parameters for one find-and-fill pass.

    Raw values (``8``, ``"neighbour"``) are coerced to their enum members so
    the object can be built straight from parsed arguments.  Invalid values
    raise ``ValueError`` here, before any grid is touched.
    """

    connectivity: Union[Connectivity, int] = Connectivity.EIGHT
    epsilon: float = DEFAULT_EPSILON
    z: float = DEFAULT_Z
    policy: Union[FillPolicy, str] = FillPolicy.BOUNDARY

    def __post_init__(self):
        try:
            self.connectivity = Connectivity(self.connectivity)
        except ValueError:
            raise ValueError(
                f"Pixel connectivity should be 4 or 8, got {self.connectivity!r}"
            ) from None
        try:
            self.policy = FillPolicy(self.policy)
        except ValueError:
            choices = ", ".join(p.value for p in FillPolicy)
            raise ValueError(
                f"Unsupported fill policy {self.policy!r} (expected one of: {choices})"
            ) from None

        self.epsilon = float(self.epsilon)
        self.z = float(self.z)
        if not math.isfinite(self.epsilon) or self.epsilon <= 0:
            raise ValueError(f"epsilon should be a positive float, got {self.epsilon}")
        if not math.isfinite(self.z):
            raise ValueError(f"z should be a finite float, got {self.z}")
