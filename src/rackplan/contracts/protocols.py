"""Service protocols shared across layers.

These protocols describe the collaborators the placement engine relies on
without tying it to concrete implementations: catalog providers supply
device types, and every undoable mutation is a command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rackplan.domain.entities import DeviceType


@runtime_checkable
class CatalogSource(Protocol):
    """Anything that can resolve a device type slug.

    A plain ``dict[str, DeviceType]`` satisfies this protocol, as does
    ``DeviceCatalog``. Brand packs and starter libraries are plugged in
    as catalog sources.

    Example:
        ```python
        library = {"1u-switch": DeviceType(slug="1u-switch", u_height=1)}
        catalog = DeviceCatalog(fallbacks=[library])
        ```
    """

    def get(self, slug: str) -> DeviceType | None:
        """Return the device type for ``slug`` or None if unknown."""
        ...


@runtime_checkable
class CommandProtocol(Protocol):
    """A reversible representation of one user action.

    ``undo()`` must be the exact inverse of ``execute()`` given the same
    starting state. The history stack does not verify this.
    """

    @property
    def description(self) -> str:
        """Human-readable summary, e.g. "Place PowerEdge R740"."""
        ...

    def execute(self) -> None:
        """Apply the action."""
        ...

    def undo(self) -> None:
        """Reverse the action."""
        ...
