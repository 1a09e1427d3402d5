"""Built-in bindings used by demos and tests."""

from __future__ import annotations

from typing import Hashable, Iterable, Mapping

from kbehdz.commands import FunctionCommand
from kbehdz.commands import game as game_commands
from kbehdz.commands.base import Command

from .registry import CommandRegistry

DEFAULT_KEYCODES: tuple[tuple[str, Command], ...] = (
    ("X", FunctionCommand(game_commands.yell)),
    ("Y", FunctionCommand(game_commands.scream)),
)


def load_default_bindings(
    registry: CommandRegistry,
    *,
    include: Iterable[Hashable] | None = None,
    overrides: Mapping[Hashable, Command] | None = None,
) -> CommandRegistry:
    """Seed ``registry`` with ``DEFAULT_KEYCODES``.

    ``include`` restricts which default keys are bound; ``overrides`` binds
    extra or replacement commands after the defaults.
    """

    allowed = set(include) if include is not None else None
    for key, command in DEFAULT_KEYCODES:
        if allowed is not None and key not in allowed:
            continue
        registry.bind(key, command)
    if overrides:
        registry.bind_many(overrides)
    return registry


__all__ = ["DEFAULT_KEYCODES", "load_default_bindings"]
