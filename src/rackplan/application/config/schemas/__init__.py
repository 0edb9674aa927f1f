"""Configuration schema models for rack layout documents.

The schemas are organized into the following modules:
- base.py: Version constants and enum aliases
- layout_schema.py: Rack, placed device, device type and settings models
- root.py: Root LayoutDocument model
"""

from rackplan.application.config.schemas.base import (
    CURRENT_VERSION as CURRENT_VERSION,
    SUPPORTED_VERSIONS as SUPPORTED_VERSIONS,
    DeviceFaceConfig as DeviceFaceConfig,
    FormFactorConfig as FormFactorConfig,
    RackWidthConfig as RackWidthConfig,
)
from rackplan.application.config.schemas.layout_schema import (
    DeviceTypeConfig as DeviceTypeConfig,
    EditorSettingsConfig as EditorSettingsConfig,
    PlacedDeviceConfig as PlacedDeviceConfig,
    RackConfig as RackConfig,
)
from rackplan.application.config.schemas.root import (
    LayoutDocument as LayoutDocument,
)
