"""Errors raised by command registries."""

from __future__ import annotations

from typing import Hashable


class CommandError(RuntimeError):
    """Base class for every recoverable dispatch/history failure."""


class UnboundInputError(CommandError):
    """Raised when dispatching an input that has no command bound to it."""

    def __init__(self, input_id: Hashable) -> None:
        super().__init__(f"No command bound to input {input_id!r}")
        self.input_id = input_id


class HistoryBoundaryError(CommandError):
    """Raised when undo/redo runs past either end of the history."""


class NothingToUndoError(HistoryBoundaryError):
    def __init__(self) -> None:
        super().__init__("Nothing to undo")


class NothingToRedoError(HistoryBoundaryError):
    def __init__(self) -> None:
        super().__init__("Nothing to redo")


class ActionError(CommandError):
    """Wraps an exception raised by a command's own logic.

    The original exception is available as ``error`` and is also chained as
    ``__cause__`` by the registry.
    """

    verb = "run"

    def __init__(
        self, input_id: Hashable, command: object, error: BaseException
    ) -> None:
        super().__init__(
            f"Failed to {self.verb} {type(command).__name__} "
            f"bound to {input_id!r}: {error}"
        )
        self.input_id = input_id
        self.command = command
        self.error = error


class ActionExecutionError(ActionError):
    verb = "execute"


class ActionUndoError(ActionError):
    verb = "undo"


__all__ = [
    "CommandError",
    "UnboundInputError",
    "HistoryBoundaryError",
    "NothingToUndoError",
    "NothingToRedoError",
    "ActionError",
    "ActionExecutionError",
    "ActionUndoError",
]
