"""Semantic checks for layout documents.

Schema validation only guarantees that a document is well formed. These
checks look at the rack as a whole: devices that overflow the rack,
devices that collide, and device types that are missing or unused.
"""

from rackplan.application.config.adapter import config_to_device_type, config_to_rack
from rackplan.application.config.schemas import LayoutDocument
from rackplan.application.config.validators import ValidationResult
from rackplan.contracts.protocols import CatalogSource
from rackplan.domain import DeviceCatalog, PlacementValidator
from rackplan.domain.services import device_range_text


def validate_layout_document(
    document: LayoutDocument,
    fallbacks: tuple[CatalogSource, ...] = (),
) -> ValidationResult:
    """Check a layout document against the placement rules.

    Errors:
        - A device extends above the top of the rack
        - A device collides with another device on its face
    Warnings:
        - A device references a type that is not defined
        - A device type is defined but never placed

    Args:
        document: Schema-validated layout document.
        fallbacks: Device libraries consulted for types the document does
            not define itself.

    Returns:
        ValidationResult with errors and warnings.
    """
    result = ValidationResult()
    catalog = DeviceCatalog(
        (config_to_device_type(dt) for dt in document.device_types),
        fallbacks,
    )
    rack = config_to_rack(document.rack)
    validator = PlacementValidator()

    for index, device in enumerate(rack.devices):
        path = f"rack.devices[{index}]"
        device_type = catalog.get(device.device_type)
        if device_type is None:
            result.add_warning(
                path,
                f"Unknown device type '{device.device_type}'; "
                "the device is ignored by collision checks",
                suggestion="Add the device type to device_types",
            )
            continue

        top = device.position + device_type.u_height - 1
        if top > rack.height:
            result.add_error(
                path,
                f"{device_type.display_name} at {device_range_text(device, device_type)} "
                f"extends beyond the {rack.height}U rack",
                position=device.position,
            )
            continue

        blockers = validator.find_collisions(
            rack,
            catalog,
            device_type.u_height,
            device.position,
            device.id,
            device.face,
            device_type.full_depth,
        )
        if blockers:
            result.add_error(
                path,
                f"{device_type.display_name} at "
                f"{device_range_text(device, device_type)}: "
                f"{validator.collision_message(blockers, catalog)}",
                position=device.position,
            )

    placed_types = {device.device_type for device in rack.devices}
    for index, device_type_config in enumerate(document.device_types):
        if device_type_config.slug not in placed_types:
            result.add_warning(
                f"device_types[{index}]",
                f"Device type '{device_type_config.slug}' is never placed",
            )

    return result
