"""Layout document schema and loading.

This package provides JSON-based layout loading and validation. It
includes Pydantic models for schema validation, a loader with error
handling, adapters to and from the domain model, and whole-rack semantic
checks.

Public API:
    - LayoutDocument: Root document model
    - RackConfig: Rack settings and placed devices
    - PlacedDeviceConfig: A mounted device
    - DeviceTypeConfig: An embedded device type
    - EditorSettingsConfig: Editor session settings
    - load_layout: Load a document from a JSON file
    - load_layout_from_dict: Load a document from a dictionary
    - save_layout: Write a document as JSON
    - ConfigError: Exception for document errors
    - config_to_layout: Build a validated RackLayout from a document
    - layout_to_document: Snapshot a RackLayout as a document
    - validate_layout_document: Whole-rack semantic checks
    - ValidationResult: Container for validation results
    - LayoutIssue: One error or warning found in a document

Example:
    >>> from pathlib import Path
    >>> from rackplan.application.config import load_layout, ConfigError
    >>>
    >>> try:
    ...     doc = load_layout(Path("homelab.json"))
    ...     print(f"{doc.rack.name}: {doc.rack.height}U")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from rackplan.application.config.adapter import (
    config_to_device_type,
    config_to_layout,
    config_to_rack,
    layout_to_document,
)
from rackplan.application.config.loader import (
    ConfigError,
    load_layout,
    load_layout_from_dict,
    save_layout,
)
from rackplan.application.config.schemas import (
    CURRENT_VERSION,
    SUPPORTED_VERSIONS,
    DeviceTypeConfig,
    EditorSettingsConfig,
    LayoutDocument,
    PlacedDeviceConfig,
    RackConfig,
)
from rackplan.application.config.validator import validate_layout_document
from rackplan.application.config.validators import (
    IssueSeverity,
    LayoutIssue,
    ValidationResult,
)

__all__ = [
    "CURRENT_VERSION",
    "ConfigError",
    "DeviceTypeConfig",
    "EditorSettingsConfig",
    "IssueSeverity",
    "LayoutDocument",
    "LayoutIssue",
    "PlacedDeviceConfig",
    "RackConfig",
    "SUPPORTED_VERSIONS",
    "ValidationResult",
    "config_to_device_type",
    "config_to_layout",
    "config_to_rack",
    "layout_to_document",
    "load_layout",
    "load_layout_from_dict",
    "save_layout",
    "validate_layout_document",
]
