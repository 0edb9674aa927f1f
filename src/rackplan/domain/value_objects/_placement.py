"""Placement outcome value objects.

Rejected placements are an expected part of interactive editing, so the
mutation surface reports them as values rather than raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities import DeviceType, PlacedDevice


class DropFeedback(str, Enum):
    """Visual feedback state for a device hovering over a slot."""

    VALID = "valid"
    INVALID = "invalid"
    BLOCKED = "blocked"


class FailureReason(str, Enum):
    """Why a layout mutation was rejected."""

    INVALID_POSITION = "invalid_position"
    OUT_OF_BOUNDS = "out_of_bounds"
    COLLISION = "collision"
    NOT_FOUND = "not_found"
    UNKNOWN_DEVICE_TYPE = "unknown_device_type"
    DUPLICATE = "duplicate"
    INVALID_SLUG = "invalid_slug"
    INVALID_DEVICE_TYPE = "invalid_device_type"
    RESIZE_CONFLICT = "resize_conflict"
    INVALID_RACK = "invalid_rack"
    NO_VALID_POSITION = "no_valid_position"


class MoveReason(str, Enum):
    """Outcome of a stepwise (keyboard) move search."""

    MOVED = "moved"
    AT_BOUNDARY = "at_boundary"
    NO_VALID_POSITION = "no_valid_position"


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a layout mutation.

    Attributes:
        success: True if the mutation was applied (or would be, for the
            validate_* checks).
        reason: Failure category, None on success.
        message: Human-readable description suitable for a notification.
        device: The placed device created or updated, if any.
        device_type: The catalog entry created or updated, if any.
        devices: Devices removed as a side effect (clear, delete type).
        conflicts: Devices blocking the requested change.
    """

    success: bool
    reason: FailureReason | None = None
    message: str = ""
    device: PlacedDevice | None = None
    device_type: DeviceType | None = None
    devices: tuple[PlacedDevice, ...] = field(default_factory=tuple)
    conflicts: tuple[PlacedDevice, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(
        cls,
        device: PlacedDevice | None = None,
        device_type: DeviceType | None = None,
        devices: list[PlacedDevice] | tuple[PlacedDevice, ...] = (),
        message: str = "",
    ) -> MutationResult:
        """Create a successful result."""
        return cls(
            success=True,
            message=message,
            device=device,
            device_type=device_type,
            devices=tuple(devices),
        )

    @classmethod
    def fail(
        cls,
        reason: FailureReason,
        message: str,
        conflicts: list[PlacedDevice] | tuple[PlacedDevice, ...] = (),
        device: PlacedDevice | None = None,
    ) -> MutationResult:
        """Create a rejected result."""
        return cls(
            success=False,
            reason=reason,
            message=message,
            device=device,
            conflicts=tuple(conflicts),
        )


@dataclass(frozen=True)
class MoveResult:
    """Result of searching for the next valid position in one direction."""

    success: bool
    new_position: float | None
    reason: MoveReason


@dataclass(frozen=True)
class ResizeCheck:
    """Whether a rack may change to a new height.

    Attributes:
        allowed: True if every device still fits.
        conflicts: Devices whose top slot would exceed the new height.
    """

    allowed: bool
    conflicts: tuple[PlacedDevice, ...] = field(default_factory=tuple)
