"""Command Pattern bindings for game input layers."""

from kbehdz.bindings import (
    ActionExecutionError,
    ActionUndoError,
    CommandError,
    CommandRegistry,
    KeyCode,
    NothingToRedoError,
    NothingToUndoError,
    UnboundInputError,
)
from kbehdz.commands import (
    Command,
    FunctionCommand,
    ReversibleCommand,
    UndoableCommand,
    command,
    supports_undo,
)

__all__ = [
    "bindings",
    "commands",
    "runtime",
    "ActionExecutionError",
    "ActionUndoError",
    "CommandError",
    "CommandRegistry",
    "KeyCode",
    "NothingToRedoError",
    "NothingToUndoError",
    "UnboundInputError",
    "Command",
    "FunctionCommand",
    "ReversibleCommand",
    "UndoableCommand",
    "command",
    "supports_undo",
]

__version__ = "0.1.0"
