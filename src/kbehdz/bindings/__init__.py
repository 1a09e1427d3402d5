"""Input bindings, dispatch and undo/redo history."""

from .errors import (
    ActionError,
    ActionExecutionError,
    ActionUndoError,
    CommandError,
    HistoryBoundaryError,
    NothingToRedoError,
    NothingToUndoError,
    UnboundInputError,
)
from .history import CommandHistory, HistoryEntry
from .models import KeyCode, RegistryStats
from .registry import CommandRegistry
from .defaults import DEFAULT_KEYCODES, load_default_bindings

__all__ = [
    "ActionError",
    "ActionExecutionError",
    "ActionUndoError",
    "CommandError",
    "HistoryBoundaryError",
    "NothingToRedoError",
    "NothingToUndoError",
    "UnboundInputError",
    "CommandHistory",
    "HistoryEntry",
    "KeyCode",
    "RegistryStats",
    "CommandRegistry",
    "DEFAULT_KEYCODES",
    "load_default_bindings",
]
