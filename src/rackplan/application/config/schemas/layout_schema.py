"""Rack, device and device type schemas."""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from rackplan.application.config.schemas.base import (
    DeviceFaceConfig,
    FormFactorConfig,
    RackWidthConfig,
)
from rackplan.domain.slug import is_valid_slug
from rackplan.domain.value_objects import MAX_RACK_HEIGHT, MIN_RACK_HEIGHT


class DeviceTypeConfig(BaseModel):
    """Catalog entry embedded in a layout document.

    Attributes:
        slug: Lowercase hyphenated identifier, e.g. "dell-r740"
        u_height: Height in slot units (0.5 to 50)
        is_full_depth: Whether the device spans the full rack depth;
            omitted means full depth
        model: Model name (optional)
        manufacturer: Manufacturer name (optional)
        category: Free-form category such as "server" or "network"
        colour: Hex display colour (optional)
    """

    model_config = ConfigDict(extra="forbid")

    slug: str = Field(..., min_length=1)
    u_height: float = Field(..., gt=0, le=50)
    is_full_depth: bool | None = None
    model: str | None = None
    manufacturer: str | None = None
    category: str = "other"
    colour: str | None = Field(default=None, pattern=r"^#[0-9a-fA-F]{6}$")

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        """Ensure the slug uses lowercase alphanumerics and single hyphens."""
        if not is_valid_slug(v):
            raise ValueError(
                f"Invalid slug '{v}': use lowercase letters, digits and single hyphens"
            )
        return v


class PlacedDeviceConfig(BaseModel):
    """A device mounted in the rack.

    Attributes:
        id: Instance id (optional; generated on load when omitted)
        device_type: Slug of the device type
        position: Bottom slot, counted from the physical bottom (>= 1)
        face: Mounting face (front, rear or both)
        name: Custom display name (optional)
    """

    model_config = ConfigDict(extra="forbid")

    id: str | None = Field(default=None, min_length=1)
    device_type: str = Field(..., min_length=1)
    position: float = Field(..., ge=1)
    face: DeviceFaceConfig = DeviceFaceConfig.FRONT
    name: str | None = None


class RackConfig(BaseModel):
    """The rack and its devices.

    Attributes:
        name: Rack display name
        height: Number of slots (1 to 100)
        width: Rack width in inches (10, 19, 21 or 23)
        form_factor: Frame construction
        desc_units: Number slots from the top down
        starting_unit: Label of the first slot
        devices: Devices mounted in the rack
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="Rack", min_length=1)
    height: int = Field(default=42, ge=MIN_RACK_HEIGHT, le=MAX_RACK_HEIGHT)
    width: RackWidthConfig = RackWidthConfig.STANDARD_19
    form_factor: FormFactorConfig = FormFactorConfig.FOUR_POST_CABINET
    desc_units: bool = False
    starting_unit: int = Field(default=1, ge=0)
    devices: list[PlacedDeviceConfig] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Rack name must not be blank")
        return v

    @model_validator(mode="after")
    def validate_unique_device_ids(self) -> "RackConfig":
        """Reject documents that reuse an instance id."""
        seen: set[str] = set()
        for device in self.devices:
            if device.id is None:
                continue
            if device.id in seen:
                raise ValueError(f"Duplicate device id '{device.id}'")
            seen.add(device.id)
        return self


class EditorSettingsConfig(BaseModel):
    """Editor session settings.

    Attributes:
        history_depth: Maximum number of undoable actions (1 to 500)
    """

    model_config = ConfigDict(extra="forbid")

    history_depth: int = Field(default=50, ge=1, le=500)
