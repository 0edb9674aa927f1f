"""Slot range geometry and face collision rules.

Two placed devices conflict only when their slot ranges overlap AND their
mounting faces collide. Face collision is depth-aware: shallow devices
mounted back to back on opposite faces can share a slot range.
"""

from __future__ import annotations

from ..entities import DeviceType, PlacedDevice
from ..value_objects import DeviceFace, URange

__all__ = [
    "device_range",
    "faces_collide",
    "range_of",
    "ranges_overlap",
]


def range_of(position: float, height: float) -> URange:
    """Slot range covered by a device of ``height`` with its bottom at ``position``.

    Examples:
        >>> range_of(5, 2)
        URange(bottom=5, top=6)
    """
    return URange(bottom=position, top=position + height - 1)


def ranges_overlap(a: URange, b: URange) -> bool:
    """Inclusive overlap test.

    Ranges that share a boundary slot overlap; only ranges separated by at
    least one empty slot do not.
    """
    return a.bottom <= b.top and a.top >= b.bottom


def faces_collide(
    face_a: DeviceFace,
    face_b: DeviceFace,
    full_depth_a: bool = True,
    full_depth_b: bool = True,
) -> bool:
    """Decide whether devices on two faces contend for the same space.

    Args:
        face_a: Mounting face of the first device.
        face_b: Mounting face of the second device.
        full_depth_a: Whether the first device spans the full rack depth.
        full_depth_b: Whether the second device spans the full rack depth.

    Returns:
        True if the devices would collide given overlapping slot ranges.
    """
    # A both-face device occupies the entire depth
    if face_a == DeviceFace.BOTH or face_b == DeviceFace.BOTH:
        return True
    if face_a == face_b:
        return True
    # Opposite faces: only two half-depth devices fit back to back
    return full_depth_a or full_depth_b


def device_range(device: PlacedDevice, device_type: DeviceType) -> URange:
    """Slot range of a placed device."""
    return range_of(device.position, device_type.u_height)
