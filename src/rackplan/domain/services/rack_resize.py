"""Rack height change validation.

Growing a rack is always allowed. Shrinking is allowed down to the tallest
occupied slot and blocked below that, with the offending devices reported.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ..entities import DeviceType, PlacedDevice, Rack
from ..value_objects import ResizeCheck

if TYPE_CHECKING:
    from rackplan.contracts.protocols import CatalogSource

__all__ = [
    "can_resize_rack_to",
    "device_range_text",
    "format_conflict_message",
]

# Height assumed for devices whose type is missing from the catalog
UNKNOWN_DEVICE_HEIGHT = 1


def _effective_top(device: PlacedDevice, device_type: DeviceType | None) -> int:
    u_height = device_type.u_height if device_type else UNKNOWN_DEVICE_HEIGHT
    return math.ceil(device.position + u_height - 1)


def can_resize_rack_to(
    rack: Rack, new_height: int, catalog: CatalogSource
) -> ResizeCheck:
    """Check whether a rack can change to ``new_height``.

    Args:
        rack: The rack to resize.
        new_height: Proposed height in slots.
        catalog: Device type lookup; unknown types count as 1U.

    Returns:
        ResizeCheck listing every device whose top slot would exceed the
        new height. Fractional tops are rounded up.
    """
    if new_height >= rack.height:
        return ResizeCheck(allowed=True)

    conflicts = [
        device
        for device in rack.devices
        if _effective_top(device, catalog.get(device.device_type)) > new_height
    ]
    return ResizeCheck(allowed=not conflicts, conflicts=tuple(conflicts))


def device_range_text(device: PlacedDevice, device_type: DeviceType | None) -> str:
    """Short slot range label such as "U15" or "U10-12"."""
    bottom = device.position
    top = _effective_top(device, device_type)
    if top <= bottom:
        return f"U{bottom:g}"
    return f"U{bottom:g}-{top}"


def format_conflict_message(
    devices: list[PlacedDevice] | tuple[PlacedDevice, ...],
    catalog: CatalogSource,
) -> str:
    """Describe resize conflicts, e.g. "Switch at U40, Storage at U38-40"."""
    parts = []
    for device in devices:
        device_type = catalog.get(device.device_type)
        name = device.name or (
            device_type.display_name if device_type else device.device_type
        )
        parts.append(f"{name} at {device_range_text(device, device_type)}")
    return ", ".join(parts)
