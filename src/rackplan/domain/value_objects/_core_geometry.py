"""Core rack geometry value objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Allowed rack heights, in slot units (U)
MIN_RACK_HEIGHT = 1
MAX_RACK_HEIGHT = 100


class DeviceFace(str, Enum):
    """Side of the rack a device is mounted on."""

    FRONT = "front"
    REAR = "rear"
    BOTH = "both"

    @property
    def opposite(self) -> "DeviceFace":
        """The face seen from the other side of the rack.

        A both-face device has no opposite and returns itself.
        """
        if self is DeviceFace.FRONT:
            return DeviceFace.REAR
        if self is DeviceFace.REAR:
            return DeviceFace.FRONT
        return self


class RackWidth(int, Enum):
    """Physical rack widths in inches."""

    NARROW_10 = 10
    STANDARD_19 = 19
    ETSI_21 = 21
    TELCO_23 = 23


class FormFactor(str, Enum):
    """Physical construction of the rack frame."""

    TWO_POST = "2-post"
    FOUR_POST = "4-post"
    FOUR_POST_CABINET = "4-post-cabinet"
    WALL_MOUNT = "wall-mount"
    OPEN_FRAME = "open-frame"


@dataclass(frozen=True)
class URange:
    """Inclusive vertical range of slots occupied by a device.

    Derived on demand from a bottom position and a height, never stored.
    """

    bottom: float
    top: float

    def __str__(self) -> str:
        if self.top <= self.bottom:
            return f"U{self.bottom:g}"
        return f"U{self.bottom:g}-{self.top:g}"

    @property
    def height(self) -> float:
        """Number of slots covered by the range."""
        return self.top - self.bottom + 1
