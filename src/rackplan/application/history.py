"""Bounded undo/redo history for layout commands."""

from __future__ import annotations

import logging

from rackplan.contracts.protocols import CommandProtocol

logger = logging.getLogger(__name__)

MAX_HISTORY_DEPTH = 50


class CommandHistory:
    """Undo and redo stacks of executed commands.

    Executing a new command clears the redo stack. When the undo stack
    grows past ``max_depth`` the oldest command is dropped, so it can no
    longer be undone.

    Usage::

        history = CommandHistory()
        history.execute(command)   # runs command.execute() and records it
        history.undo()             # runs command.undo()
        history.redo()             # runs command.execute() again
    """

    def __init__(self, max_depth: int = MAX_HISTORY_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.max_depth = max_depth
        self._undo_stack: list[CommandProtocol] = []
        self._redo_stack: list[CommandProtocol] = []

    @property
    def can_undo(self) -> bool:
        return len(self._undo_stack) > 0

    @property
    def can_redo(self) -> bool:
        return len(self._redo_stack) > 0

    @property
    def undo_description(self) -> str | None:
        """Label for an undo control, e.g. "Undo: Place Server"."""
        if not self._undo_stack:
            return None
        return f"Undo: {self._undo_stack[-1].description}"

    @property
    def redo_description(self) -> str | None:
        if not self._redo_stack:
            return None
        return f"Redo: {self._redo_stack[-1].description}"

    @property
    def history_length(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_length(self) -> int:
        return len(self._redo_stack)

    def execute(self, command: CommandProtocol) -> None:
        """Run a command and push it onto the undo stack.

        Args:
            command: Command to execute. It must already have been
                validated by the caller.
        """
        command.execute()
        self._undo_stack.append(command)
        if len(self._undo_stack) > self.max_depth:
            dropped = self._undo_stack.pop(0)
            logger.debug(f"History full, dropped '{dropped.description}'")
        self._redo_stack.clear()
        logger.debug(f"Executed '{command.description}'")

    def undo(self) -> bool:
        """Undo the most recent command. Returns False if there was none."""
        if not self._undo_stack:
            return False
        command = self._undo_stack.pop()
        command.undo()
        self._redo_stack.append(command)
        logger.debug(f"Undid '{command.description}'")
        return True

    def redo(self) -> bool:
        """Re-apply the most recently undone command."""
        if not self._redo_stack:
            return False
        command = self._redo_stack.pop()
        command.execute()
        self._undo_stack.append(command)
        logger.debug(f"Redid '{command.description}'")
        return True

    def clear(self) -> None:
        """Drop both stacks, e.g. when a new layout is loaded."""
        self._undo_stack.clear()
        self._redo_stack.clear()
        logger.info("Command history cleared")
