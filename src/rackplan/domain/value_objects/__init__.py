"""Value objects for the rack domain.

This module provides immutable data types used throughout the rack
placement engine. All classes are re-exported from sub-modules for
convenience.
"""

from __future__ import annotations

# Core rack geometry
from ._core_geometry import (
    MAX_RACK_HEIGHT,
    MIN_RACK_HEIGHT,
    DeviceFace,
    FormFactor,
    RackWidth,
    URange,
)

# Placement outcomes
from ._placement import (
    DropFeedback,
    FailureReason,
    MoveReason,
    MoveResult,
    MutationResult,
    ResizeCheck,
)

__all__ = [
    "DeviceFace",
    "DropFeedback",
    "FailureReason",
    "FormFactor",
    "MAX_RACK_HEIGHT",
    "MIN_RACK_HEIGHT",
    "MoveReason",
    "MoveResult",
    "MutationResult",
    "RackWidth",
    "ResizeCheck",
    "URange",
]
