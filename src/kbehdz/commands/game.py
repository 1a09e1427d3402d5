"""Sample game-input commands acting on a small world model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

Position = Tuple[int, int]


class OutOfAmmoError(RuntimeError):
    """Raised by ``FireCommand`` when the shooter has nothing left to fire."""


@dataclass(slots=True)
class Entity:
    name: str
    position: Position = (0, 0)
    ammo: int = 0


@dataclass(slots=True)
class World:
    """Mutable game state handed to commands as their context."""

    entities: Dict[str, Entity] = field(default_factory=dict)
    projectiles: List[Tuple[str, Position]] = field(default_factory=list)
    paused: bool = False

    def spawn(self, entity: Entity) -> Entity:
        self.entities[entity.name] = entity
        return entity

    def entity(self, name: str) -> Entity:
        try:
            return self.entities[name]
        except KeyError as exc:
            raise KeyError(f"Unknown entity '{name}'") from exc


@dataclass(slots=True)
class MoveCommand:
    """Translate an entity by a fixed offset."""

    entity: str
    dx: int = 0
    dy: int = 0

    def execute(self, world: World) -> Position:
        target = world.entity(self.entity)
        x, y = target.position
        target.position = (x + self.dx, y + self.dy)
        return target.position

    def undo(self, world: World) -> Position:
        target = world.entity(self.entity)
        x, y = target.position
        target.position = (x - self.dx, y - self.dy)
        return target.position


@dataclass(slots=True)
class FireCommand:
    """Spend one round and spawn a projectile at the shooter's position.

    Undo is linear, so when this command is undone the shooter is back where
    it fired from and its newest projectile is the one this shot spawned. The
    same instance can therefore sit in the history several times.
    """

    entity: str

    def execute(self, world: World) -> Tuple[str, Position]:
        shooter = world.entity(self.entity)
        if shooter.ammo <= 0:
            raise OutOfAmmoError(f"{shooter.name} is out of ammo")
        shooter.ammo -= 1
        shot = (shooter.name, shooter.position)
        world.projectiles.append(shot)
        return shot

    def undo(self, world: World) -> Tuple[str, Position]:
        shooter = world.entity(self.entity)
        shot = (shooter.name, shooter.position)
        for index in range(len(world.projectiles) - 1, -1, -1):
            if world.projectiles[index] == shot:
                del world.projectiles[index]
                break
        else:
            raise LookupError(f"No projectile fired by {shooter.name} to recall")
        shooter.ammo += 1
        return shot


@dataclass(slots=True)
class TogglePauseCommand:
    """Flip the pause flag; intentionally absent from undo history."""

    def execute(self, world: World) -> bool:
        world.paused = not world.paused
        return world.paused


def yell(context: object) -> str:
    del context
    return "yell"


def scream(context: object) -> str:
    del context
    return "scream"


__all__ = [
    "OutOfAmmoError",
    "Entity",
    "World",
    "MoveCommand",
    "FireCommand",
    "TogglePauseCommand",
    "yell",
    "scream",
]
