"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rackplan.application.editor import LayoutEditor
    from rackplan.domain import (
        DeviceMovementService,
        DropPositionResolver,
        PlacementValidator,
        RackLayout,
    )
    from rackplan.infrastructure.formatters import (
        RackElevationFormatter,
        SlotListFormatter,
    )


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Centralizes service instantiation so tests can swap in their own
    collaborators. The placement services are stateless and cached; each
    editor gets its own layout and history.

    Attributes:
        history_depth: Undo depth for editors created by this factory.
    """

    history_depth: int = 50

    # Cached instances
    _placement_validator: "PlacementValidator | None" = field(
        default=None, init=False, repr=False
    )
    _drop_resolver: "DropPositionResolver | None" = field(
        default=None, init=False, repr=False
    )
    _movement_service: "DeviceMovementService | None" = field(
        default=None, init=False, repr=False
    )

    def get_placement_validator(self) -> "PlacementValidator":
        """Get or create placement validator instance."""
        if self._placement_validator is None:
            from rackplan.domain.services import PlacementValidator

            self._placement_validator = PlacementValidator()
        return self._placement_validator

    def get_drop_resolver(self) -> "DropPositionResolver":
        """Get or create drop position resolver instance."""
        if self._drop_resolver is None:
            from rackplan.domain.services import DropPositionResolver

            self._drop_resolver = DropPositionResolver(self.get_placement_validator())
        return self._drop_resolver

    def get_movement_service(self) -> "DeviceMovementService":
        """Get or create device movement service instance."""
        if self._movement_service is None:
            from rackplan.domain.services import DeviceMovementService

            self._movement_service = DeviceMovementService(
                self.get_placement_validator()
            )
        return self._movement_service

    def get_elevation_formatter(self) -> "RackElevationFormatter":
        """Create rack elevation formatter instance."""
        from rackplan.infrastructure.formatters import RackElevationFormatter

        return RackElevationFormatter(self.get_placement_validator())

    def get_slot_list_formatter(self) -> "SlotListFormatter":
        """Create slot list formatter instance."""
        from rackplan.infrastructure.formatters import SlotListFormatter

        return SlotListFormatter()

    def create_editor(
        self,
        layout: "RackLayout | None" = None,
        history_depth: int | None = None,
    ) -> "LayoutEditor":
        """Create an editor with a fresh history around ``layout``.

        Args:
            layout: Layout to edit. An empty default rack is used when
                omitted.
            history_depth: Undo depth, overriding the factory default.
        """
        from rackplan.application.editor import LayoutEditor
        from rackplan.application.history import CommandHistory
        from rackplan.domain import RackLayout

        if layout is None:
            layout = RackLayout(validator=self.get_placement_validator())
        return LayoutEditor(
            layout=layout,
            history=CommandHistory(history_depth or self.history_depth),
            resolver=self.get_drop_resolver(),
            movement=self.get_movement_service(),
        )


# Default factory instance
_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
