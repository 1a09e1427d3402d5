"""Command capabilities and ready-made command variants."""

from .base import Command, UndoableCommand, ensure_command, supports_undo
from .callables import FunctionCommand, ReversibleCommand, command

__all__ = [
    "Command",
    "UndoableCommand",
    "ensure_command",
    "supports_undo",
    "FunctionCommand",
    "ReversibleCommand",
    "command",
]
