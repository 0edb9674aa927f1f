"""Domain entities for rack layouts."""

from __future__ import annotations

import copy
import uuid
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from .value_objects import (
    MAX_RACK_HEIGHT,
    MIN_RACK_HEIGHT,
    DeviceFace,
    FormFactor,
    RackWidth,
)

if TYPE_CHECKING:
    from rackplan.contracts.protocols import CatalogSource


def new_instance_id() -> str:
    """Generate a unique identifier for a placed device."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class DeviceType:
    """A reusable catalog entry describing a kind of rack-mount device.

    Attributes:
        slug: Stable identifier referenced by placed devices.
        u_height: Height in slot units. Fractional values such as 0.5 are
            allowed.
        is_full_depth: Whether the device spans the full rack depth. None
            means the catalog did not say, which is treated as full depth.
        model: Model name shown to the user.
        manufacturer: Manufacturer name.
        category: Free-form device category, e.g. "server" or "network".
        colour: Display colour as a hex string.
    """

    slug: str
    u_height: float
    is_full_depth: bool | None = None
    model: str | None = None
    manufacturer: str | None = None
    category: str = "other"
    colour: str | None = None

    def __post_init__(self) -> None:
        if not self.slug:
            raise ValueError("Device type slug must not be empty")
        if self.u_height <= 0:
            raise ValueError("Device height must be positive")

    @property
    def full_depth(self) -> bool:
        """Resolved depth flag; absent values default to full depth."""
        return self.is_full_depth is not False

    @property
    def display_name(self) -> str:
        """Model name, falling back to the slug."""
        return self.model or self.slug

    def to_dict(self) -> dict[str, Any]:
        """Plain-data representation, omitting unset optional fields."""
        data: dict[str, Any] = {
            "slug": self.slug,
            "u_height": self.u_height,
            "category": self.category,
        }
        for key in ("is_full_depth", "model", "manufacturer", "colour"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeviceType:
        return cls(
            slug=data["slug"],
            u_height=data["u_height"],
            is_full_depth=data.get("is_full_depth"),
            model=data.get("model"),
            manufacturer=data.get("manufacturer"),
            category=data.get("category", "other"),
            colour=data.get("colour"),
        )


@dataclass
class PlacedDevice:
    """A device instance mounted in a rack.

    Attributes:
        device_type: Slug of the catalog entry this instance uses.
        position: Bottom slot, 1-indexed from the physical bottom of the
            rack regardless of display numbering.
        face: Mounting face.
        name: Optional custom display name.
        id: Unique instance identifier.
    """

    device_type: str
    position: float
    face: DeviceFace = DeviceFace.FRONT
    name: str | None = None
    id: str = field(default_factory=new_instance_id)

    def __post_init__(self) -> None:
        if not isinstance(self.face, DeviceFace):
            self.face = DeviceFace(self.face)

    def copy(self) -> PlacedDevice:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "device_type": self.device_type,
            "position": self.position,
            "face": self.face.value,
        }
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlacedDevice:
        return cls(
            device_type=data["device_type"],
            position=data["position"],
            face=DeviceFace(data.get("face", DeviceFace.FRONT.value)),
            name=data.get("name"),
            id=data.get("id") or new_instance_id(),
        )


@dataclass
class Rack:
    """A rack enclosure and the devices mounted in it.

    Attributes:
        name: Display name of the rack.
        height: Number of slots (U).
        width: Physical width.
        form_factor: Frame construction.
        desc_units: True if slot labels count down from the top.
        starting_unit: Label of the first slot.
        devices: Devices mounted in the rack. Order is not significant for
            placement but is preserved for display and undo.
    """

    name: str = "Rack"
    height: int = 42
    width: RackWidth = RackWidth.STANDARD_19
    form_factor: FormFactor = FormFactor.FOUR_POST_CABINET
    desc_units: bool = False
    starting_unit: int = 1
    devices: list[PlacedDevice] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Rack name must not be empty")
        if not MIN_RACK_HEIGHT <= self.height <= MAX_RACK_HEIGHT:
            raise ValueError(
                f"Rack height must be between {MIN_RACK_HEIGHT} and "
                f"{MAX_RACK_HEIGHT}U, got {self.height}"
            )
        if self.starting_unit < 0:
            raise ValueError("starting_unit cannot be negative")
        self.width = RackWidth(self.width)
        self.form_factor = FormFactor(self.form_factor)

    def find_device(self, instance_id: str) -> PlacedDevice | None:
        """Look up a placed device by instance id."""
        for device in self.devices:
            if device.id == instance_id:
                return device
        return None

    def index_of(self, instance_id: str) -> int | None:
        for index, device in enumerate(self.devices):
            if device.id == instance_id:
                return index
        return None

    def slot_label(self, position: float) -> str:
        """Display label for a slot, honouring the numbering settings.

        Positions are always counted from the physical bottom; only the
        label changes when numbering is descending or offset.
        """
        if self.desc_units:
            number = self.starting_unit + (self.height - position)
        else:
            number = self.starting_unit + position - 1
        return f"U{number:g}"

    def settings(self) -> dict[str, Any]:
        """Rack settings without the device list."""
        return {
            "name": self.name,
            "height": self.height,
            "width": self.width,
            "form_factor": self.form_factor,
            "desc_units": self.desc_units,
            "starting_unit": self.starting_unit,
        }

    def empty_copy(self) -> Rack:
        """Same rack settings with no devices."""
        return Rack(**self.settings())

    def duplicate(self) -> Rack:
        """Copy this rack under a new name with fresh device ids."""
        settings = self.settings()
        settings["name"] = f"{self.name} (Copy)"
        return Rack(
            **settings,
            devices=[replace(d, id=new_instance_id()) for d in self.devices],
        )

    def deep_copy(self) -> Rack:
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "height": self.height,
            "width": self.width.value,
            "form_factor": self.form_factor.value,
            "desc_units": self.desc_units,
            "starting_unit": self.starting_unit,
            "devices": [d.to_dict() for d in self.devices],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Rack:
        return cls(
            name=data.get("name", "Rack"),
            height=data.get("height", 42),
            width=RackWidth(data.get("width", RackWidth.STANDARD_19.value)),
            form_factor=FormFactor(
                data.get("form_factor", FormFactor.FOUR_POST_CABINET.value)
            ),
            desc_units=data.get("desc_units", False),
            starting_unit=data.get("starting_unit", 1),
            devices=[PlacedDevice.from_dict(d) for d in data.get("devices", [])],
        )


class DeviceCatalog:
    """Slug-keyed collection of device types.

    The catalog owns the layout's own (user-defined or imported) device
    types and may consult read-only fallback sources, such as bundled
    libraries, after them. Lookups never raise: a missing slug returns
    None so callers can skip entries when the layout and the catalog fall
    out of sync.

    Attributes:
        fallbacks: Read-only sources consulted in order after the layout's
            own types.
    """

    def __init__(
        self,
        device_types: Iterable[DeviceType] = (),
        fallbacks: Sequence[CatalogSource] = (),
    ) -> None:
        self._types: dict[str, DeviceType] = {}
        for device_type in device_types:
            self._types[device_type.slug] = device_type
        self.fallbacks = tuple(fallbacks)

    def get(self, slug: str) -> DeviceType | None:
        """Find a device type by slug, own types first."""
        found = self._types.get(slug)
        if found is not None:
            return found
        for source in self.fallbacks:
            found = source.get(slug)
            if found is not None:
                return found
        return None

    def owns(self, slug: str) -> bool:
        """True if the slug is one of the layout's own (editable) types."""
        return slug in self._types

    def add(self, device_type: DeviceType) -> None:
        self._types[device_type.slug] = device_type

    def remove(self, slug: str) -> DeviceType | None:
        return self._types.pop(slug, None)

    def slugs(self) -> set[str]:
        return set(self._types)

    def copy(self) -> DeviceCatalog:
        return DeviceCatalog(self._types.values(), self.fallbacks)

    def __contains__(self, slug: object) -> bool:
        return isinstance(slug, str) and self.get(slug) is not None

    def __iter__(self) -> Iterator[DeviceType]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)

    def to_list(self) -> list[dict[str, Any]]:
        return [dt.to_dict() for dt in self._types.values()]
