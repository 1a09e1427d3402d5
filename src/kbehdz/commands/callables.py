"""Adapters turning plain callables into commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

Handler = Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class FunctionCommand:
    """Fire-and-forget command backed by a single callable."""

    handler: Handler
    name: str = ""

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if not self.name:
            object.__setattr__(
                self, "name", getattr(self.handler, "__name__", "function")
            )

    def execute(self, context: Any) -> Any:
        return self.handler(context)


@dataclass(frozen=True, slots=True)
class ReversibleCommand:
    """Command backed by a callable and the callable that reverses it."""

    handler: Handler
    reverse: Handler
    name: str = ""

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        if not callable(self.reverse):
            raise TypeError("reverse must be callable")
        if not self.name:
            object.__setattr__(
                self, "name", getattr(self.handler, "__name__", "function")
            )

    def execute(self, context: Any) -> Any:
        return self.handler(context)

    def undo(self, context: Any) -> Any:
        return self.reverse(context)


def command(
    handler: Handler, undo: Optional[Handler] = None, *, name: str = ""
) -> FunctionCommand | ReversibleCommand:
    """Wrap ``handler`` (and ``undo`` when given) as a command object."""

    if undo is None:
        return FunctionCommand(handler, name=name)
    return ReversibleCommand(handler, undo, name=name)


__all__ = ["FunctionCommand", "ReversibleCommand", "command"]
