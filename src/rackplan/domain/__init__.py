"""Domain layer - rack model and placement rules."""

from .entities import DeviceCatalog, DeviceType, PlacedDevice, Rack, new_instance_id
from .layout import RackLayout
from .services import (
    DeviceMovementService,
    DropPositionResolver,
    PlacementValidator,
    can_resize_rack_to,
    faces_collide,
    range_of,
    ranges_overlap,
)
from .value_objects import (
    DeviceFace,
    DropFeedback,
    FailureReason,
    FormFactor,
    MoveReason,
    MoveResult,
    MutationResult,
    RackWidth,
    ResizeCheck,
    URange,
)

__all__ = [
    "DeviceCatalog",
    "DeviceFace",
    "DeviceMovementService",
    "DeviceType",
    "DropFeedback",
    "DropPositionResolver",
    "FailureReason",
    "FormFactor",
    "MoveReason",
    "MoveResult",
    "MutationResult",
    "PlacedDevice",
    "PlacementValidator",
    "Rack",
    "RackLayout",
    "RackWidth",
    "ResizeCheck",
    "URange",
    "can_resize_rack_to",
    "faces_collide",
    "new_instance_id",
    "range_of",
    "ranges_overlap",
]
