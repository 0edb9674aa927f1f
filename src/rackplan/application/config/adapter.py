"""Conversion between layout documents and the domain model.

``config_to_layout`` builds a ``RackLayout`` from a validated
``LayoutDocument``; ``layout_to_document`` goes the other way for saving.
Loading goes through the same rack invariant checks as interactive
editing, so a document with colliding or out-of-bounds devices is rejected
rather than loaded in a broken state.
"""

from rackplan.application.config.loader import ConfigError
from rackplan.application.config.schemas import (
    CURRENT_VERSION,
    DeviceTypeConfig,
    EditorSettingsConfig,
    LayoutDocument,
    PlacedDeviceConfig,
    RackConfig,
)
from rackplan.contracts.protocols import CatalogSource
from rackplan.domain import (
    DeviceCatalog,
    DeviceType,
    PlacedDevice,
    PlacementValidator,
    Rack,
    RackLayout,
    new_instance_id,
)


def config_to_device_type(config: DeviceTypeConfig) -> DeviceType:
    return DeviceType(
        slug=config.slug,
        u_height=config.u_height,
        is_full_depth=config.is_full_depth,
        model=config.model,
        manufacturer=config.manufacturer,
        category=config.category,
        colour=config.colour,
    )


def config_to_rack(config: RackConfig) -> Rack:
    """Convert a rack schema to a Rack entity without placement checks."""
    return Rack(
        name=config.name,
        height=config.height,
        width=config.width,
        form_factor=config.form_factor,
        desc_units=config.desc_units,
        starting_unit=config.starting_unit,
        devices=[
            PlacedDevice(
                device_type=device.device_type,
                position=device.position,
                face=device.face,
                name=device.name,
                id=device.id or new_instance_id(),
            )
            for device in config.devices
        ],
    )


def config_to_layout(
    document: LayoutDocument,
    fallbacks: tuple[CatalogSource, ...] = (),
    validator: PlacementValidator | None = None,
) -> RackLayout:
    """Build a validated RackLayout from a layout document.

    Args:
        document: Validated layout document.
        fallbacks: Read-only device libraries consulted after the
            document's own device types.
        validator: Placement validator to attach to the layout.

    Returns:
        A RackLayout whose rack satisfies the placement invariant.

    Raises:
        ConfigError: With error_type "layout" if any device is out of
            bounds or collides with another device.
    """
    catalog = DeviceCatalog(
        (config_to_device_type(dt) for dt in document.device_types),
        fallbacks,
    )
    layout = RackLayout(catalog=catalog, validator=validator)
    rack = config_to_rack(document.rack)
    result = layout.replace_rack(rack)
    if not result:
        details = [
            {
                "path": f"rack.devices[{rack.devices.index(device)}]",
                "message": "Device is out of bounds or collides with another device",
                "value": device.id,
            }
            for device in result.conflicts
        ]
        raise ConfigError(
            message=f"Layout is not valid: {result.message}",
            error_type="layout",
            details=details,
        )
    return layout


def layout_to_document(
    layout: RackLayout,
    settings: EditorSettingsConfig | None = None,
) -> LayoutDocument:
    """Snapshot a layout as a document for saving.

    Only the layout's own device types are written; types resolved from
    fallback libraries are not embedded.
    """
    rack = layout.rack
    return LayoutDocument(
        schema_version=CURRENT_VERSION,
        rack=RackConfig(
            name=rack.name,
            height=rack.height,
            width=rack.width,
            form_factor=rack.form_factor,
            desc_units=rack.desc_units,
            starting_unit=rack.starting_unit,
            devices=[
                PlacedDeviceConfig(
                    id=device.id,
                    device_type=device.device_type,
                    position=device.position,
                    face=device.face,
                    name=device.name,
                )
                for device in rack.devices
            ],
        ),
        device_types=[
            DeviceTypeConfig(**device_type.to_dict())
            for device_type in layout.catalog
        ],
        settings=settings or EditorSettingsConfig(),
    )
