"""Stepwise device movement used by keyboard and touch nudging."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..entities import Rack
from ..value_objects import MoveReason, MoveResult
from .placement import PlacementValidator

if TYPE_CHECKING:
    from rackplan.contracts.protocols import CatalogSource

__all__ = ["DeviceMovementService", "MOVE_UP", "MOVE_DOWN"]

MOVE_UP = 1
MOVE_DOWN = -1


class DeviceMovementService:
    """Finds the next position a device can move to in one direction.

    Moves step by the device's own height unless a step is given, and
    leapfrog over blocked positions until a free one or the rack edge is
    reached.
    """

    def __init__(self, validator: PlacementValidator | None = None) -> None:
        self.validator = validator or PlacementValidator()

    def find_next_valid_position(
        self,
        rack: Rack,
        catalog: CatalogSource,
        instance_id: str,
        direction: int,
        step: float | None = None,
    ) -> MoveResult:
        """Search for the next valid position above or below a device.

        Args:
            rack: Rack containing the device.
            catalog: Device type lookup.
            instance_id: Device to move.
            direction: MOVE_UP (+1) or MOVE_DOWN (-1).
            step: Distance per step. Defaults to the device height.

        Returns:
            MoveResult with reason ``moved`` and the new position,
            ``at_boundary`` if the first step already leaves the rack, or
            ``no_valid_position`` if every position up to the edge is
            blocked or the device cannot be resolved.

        Raises:
            ValueError: If ``direction`` is not +1 or -1, or ``step`` is
                not positive.
        """
        if direction not in (MOVE_UP, MOVE_DOWN):
            raise ValueError(f"direction must be 1 or -1, got {direction}")
        if step is not None and step <= 0:
            raise ValueError("step must be positive")

        failed = MoveResult(
            success=False, new_position=None, reason=MoveReason.NO_VALID_POSITION
        )
        device = rack.find_device(instance_id)
        if device is None:
            return failed
        device_type = catalog.get(device.device_type)
        if device_type is None:
            return failed

        height = device_type.u_height
        increment = direction * (step if step is not None else height)
        max_position = rack.height - height + 1

        candidate = device.position + increment
        if candidate < 1 or candidate > max_position:
            return MoveResult(
                success=False, new_position=None, reason=MoveReason.AT_BOUNDARY
            )

        while 1 <= candidate <= max_position:
            if self.validator.can_place(
                rack,
                catalog,
                height,
                candidate,
                device.id,
                device.face,
                device_type.full_depth,
            ):
                return MoveResult(
                    success=True, new_position=candidate, reason=MoveReason.MOVED
                )
            candidate += increment
        return failed

    def can_move_up(
        self, rack: Rack, catalog: CatalogSource, instance_id: str
    ) -> bool:
        return self.find_next_valid_position(
            rack, catalog, instance_id, MOVE_UP
        ).success

    def can_move_down(
        self, rack: Rack, catalog: CatalogSource, instance_id: str
    ) -> bool:
        return self.find_next_valid_position(
            rack, catalog, instance_id, MOVE_DOWN
        ).success
