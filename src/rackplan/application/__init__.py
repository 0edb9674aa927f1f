"""Application layer - editing session, commands and history."""

from .commands import CommandType, LayoutCommand
from .editor import LayoutEditor
from .factory import ServiceFactory, get_factory, reset_factory, set_factory
from .history import MAX_HISTORY_DEPTH, CommandHistory

__all__ = [
    "CommandHistory",
    "CommandType",
    "LayoutCommand",
    "LayoutEditor",
    "MAX_HISTORY_DEPTH",
    "ServiceFactory",
    "get_factory",
    "reset_factory",
    "set_factory",
]
