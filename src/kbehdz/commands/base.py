"""Command capabilities: required ``execute`` and optional ``undo``."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Command(Protocol):
    """Anything that can act on a caller-supplied context."""

    def execute(self, context: Any) -> Any: ...


@runtime_checkable
class UndoableCommand(Command, Protocol):
    """A command that can also reverse its own effect.

    ``execute`` must be safe to replay after ``undo`` has fully reversed it;
    redo calls the same instance again.
    """

    def undo(self, context: Any) -> Any: ...


def supports_undo(command: object) -> bool:
    """Return True when ``command`` exposes a callable ``undo``."""

    return callable(getattr(command, "undo", None))


def ensure_command(command: object) -> Command:
    if not callable(getattr(command, "execute", None)):
        raise TypeError(
            f"{type(command).__name__} does not implement execute(context)"
        )
    return command  # type: ignore[return-value]


__all__ = ["Command", "UndoableCommand", "supports_undo", "ensure_command"]
