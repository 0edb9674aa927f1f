"""Root layout document schema."""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from rackplan.application.config.schemas.base import SUPPORTED_VERSIONS
from rackplan.application.config.schemas.layout_schema import (
    DeviceTypeConfig,
    EditorSettingsConfig,
    RackConfig,
)


class LayoutDocument(BaseModel):
    """Root model for a saved rack layout.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.2")
        rack: The rack and its placed devices
        device_types: Device types the layout defines
        settings: Editor settings

    Example:
        >>> doc = LayoutDocument(
        ...     schema_version="1.2",
        ...     rack=RackConfig(name="Homelab", height=12),
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    rack: RackConfig = Field(default_factory=RackConfig)
    device_types: list[DeviceTypeConfig] = Field(default_factory=list)
    settings: EditorSettingsConfig = Field(default_factory=EditorSettingsConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def validate_unique_slugs(self) -> "LayoutDocument":
        slugs = [dt.slug for dt in self.device_types]
        duplicates = sorted({s for s in slugs if slugs.count(s) > 1})
        if duplicates:
            raise ValueError(f"Duplicate device type slugs: {', '.join(duplicates)}")
        return self
