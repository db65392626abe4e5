"""Exception types raised by the hole filling core."""

from typing import Optional

from .pixel import Pixel


class HoleFillingError(Exception):
    """Base class for hole filling failures."""


class NoMissingPixelError(HoleFillingError):
    """The grid holds no sentinel value, so there is no hole to fill."""

    def __init__(self, message: str = "No missing pixel in the image."):
        super().__init__(message)


class DegenerateHoleError(HoleFillingError):
    """A hole pixel received no usable weight, e.g. the boundary is empty."""

    def __init__(self, message: str, pixel: Optional[Pixel] = None):
        super().__init__(message)
        self.pixel = pixel
