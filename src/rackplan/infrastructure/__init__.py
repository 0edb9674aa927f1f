"""Infrastructure layer - external concerns and formatters."""

from .formatters import RackElevationFormatter, SlotListFormatter

__all__ = [
    "RackElevationFormatter",
    "SlotListFormatter",
]
