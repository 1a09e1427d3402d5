"""Value objects used as input identifiers and registry snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True, order=True)
class KeyCode:
    """Hashable key press usable as an input identifier.

    Any hashable value works as an input id; ``KeyCode`` exists for callers
    that want modifier-aware keys without inventing their own type.
    """

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        if isinstance(self.modifiers, str):
            raise TypeError("modifiers must be a sequence of names, not a string")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @classmethod
    def parse(cls, token: str) -> "KeyCode":
        """Build a ``KeyCode`` from ``"ctrl+shift+z"`` style tokens."""

        parts = [part.strip() for part in token.split("+")]
        if not parts or not parts[-1]:
            raise ValueError(f"Invalid key token '{token}'")
        *modifiers, key = parts
        return cls(key, tuple(modifiers))

    def __str__(self) -> str:
        return self.token


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    history_size: int
    history_position: int


__all__ = ["KeyCode", "RegistryStats"]
