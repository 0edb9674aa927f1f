"""Text formatters for rack layouts."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from rackplan.domain import DeviceFace, PlacementValidator, Rack
from rackplan.domain.services import blocking_device_name, device_range, device_range_text

if TYPE_CHECKING:
    from rackplan.contracts.protocols import CatalogSource


def _covered_slots(bottom: float, top: float) -> range:
    """Whole slots touched by a range, including fractional devices."""
    first = math.floor(bottom)
    last = max(first, math.ceil(top))
    return range(first, last + 1)


class RackElevationFormatter:
    """Formats ASCII elevation drawings of a rack.

    One row per slot, top slot first. Devices visible from the viewed face
    are drawn as boxes labelled on their top row. Half-depth devices
    mounted on the opposite face are hatched, since they block those slots
    for half-depth devices on this face only.
    """

    HATCH = "/"

    def __init__(self, validator: PlacementValidator | None = None) -> None:
        self._validator = validator or PlacementValidator()

    def format(
        self,
        rack: Rack,
        catalog: CatalogSource,
        face: DeviceFace = DeviceFace.FRONT,
        width: int = 32,
    ) -> str:
        """Generate an ASCII elevation of the rack seen from ``face``."""
        face = DeviceFace(face)
        label_width = max(len(rack.slot_label(slot)) for slot in (1, rack.height))
        lines = [
            f"RACK ELEVATION - {rack.name} ({rack.height}U, {face.value} view)",
            "=" * (width + label_width + 3),
        ]

        cells: dict[int, str] = {}
        for blocked in self._validator.find_blocked_slots(rack, face, catalog):
            for slot in _covered_slots(blocked.bottom, blocked.top):
                cells[slot] = self.HATCH * width

        for device in rack.devices:
            device_type = catalog.get(device.device_type)
            if device_type is None:
                continue
            if device.face not in (face, DeviceFace.BOTH) and not device_type.full_depth:
                continue
            slot_range = device_range(device, device_type)
            slots = list(_covered_slots(slot_range.bottom, slot_range.top))
            name = blocking_device_name(device, catalog)
            if device.face not in (face, DeviceFace.BOTH):
                name = f"{name} (rear)" if face == DeviceFace.FRONT else f"{name} (front)"
            for slot in slots:
                if slot == slots[-1]:
                    cells[slot] = self._label_cell(name, width)
                else:
                    cells[slot] = "[" + " " * (width - 2) + "]"

        border = " " * label_width + " +" + "-" * width + "+"
        lines.append(border)
        for slot in range(rack.height, 0, -1):
            label = rack.slot_label(slot)
            cell = cells.get(slot, " " * width)
            lines.append(f"{label:>{label_width}} |{cell}|")
        lines.append(border)

        lines.append("")
        lines.append(f"Devices: {len(rack.devices)}")
        lines.append(f"Width: {rack.width.value}\" {rack.form_factor.value}")
        return "\n".join(lines)

    def format_device_table(self, rack: Rack, catalog: CatalogSource) -> str:
        """Format the placed devices as a table, top of rack first."""
        if not rack.devices:
            return "No devices in rack."

        lines = [
            f"{'Slots':<10} {'Face':<6} {'Device':<28} {'Type'}",
            "-" * 70,
        ]
        for device in sorted(rack.devices, key=lambda d: d.position, reverse=True):
            device_type = catalog.get(device.device_type)
            slots = (
                device_range_text(device, device_type)
                if device_type is not None
                else f"U{device.position:g}"
            )
            name = blocking_device_name(device, catalog)
            lines.append(
                f"{slots:<10} {device.face.value:<6} {name[:28]:<28} {device.device_type}"
            )
        return "\n".join(lines)

    def _label_cell(self, name: str, width: int) -> str:
        inner = width - 2
        text = name if len(name) <= inner - 2 else name[: inner - 3] + "~"
        return "[" + f" {text}".ljust(inner) + "]"


class SlotListFormatter:
    """Formats lists of candidate slots."""

    def format(self, rack: Rack, slots: list[int], height: float) -> str:
        """List valid bottom slots using the rack's display labels."""
        if not slots:
            return f"No valid position for a {height:g}U device in {rack.name}."
        labels = ", ".join(rack.slot_label(slot) for slot in slots)
        return (
            f"Valid bottom slots for a {height:g}U device in {rack.name} "
            f"({len(slots)}):\n{labels}"
        )

