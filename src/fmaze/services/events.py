"""Events emitted by the game controller and its services."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from fmaze.core.types import Direction, Position


@dataclass(slots=True)
class GameEvent:
    """Base game event."""


@dataclass(slots=True)
class BoardGeneratedEvent(GameEvent):
    size: int
    seed: int | None
    entity_counts: dict[str, int]


@dataclass(slots=True)
class PlayerMovedEvent(GameEvent):
    direction: Direction
    position: Position


@dataclass(slots=True)
class EncounterStartedEvent(GameEvent):
    entity_tag: str
    position: Position
    labels: List[str]


@dataclass(slots=True)
class SelectionChangedEvent(GameEvent):
    index: int


@dataclass(slots=True)
class RouletteStoppedEvent(GameEvent):
    index: int
    label: str


@dataclass(slots=True)
class OutcomeAppliedEvent(GameEvent):
    entity_tag: str
    label: str
    action: str


@dataclass(slots=True)
class EntityRemovedEvent(GameEvent):
    entity_tag: str
    position: Position


@dataclass(slots=True)
class HealthChangedEvent(GameEvent):
    before: int
    after: int


@dataclass(slots=True)
class GameLostEvent(GameEvent):
    reason: str


@dataclass(slots=True)
class GameWonEvent(GameEvent):
    position: Position


@dataclass(slots=True)
class KeyTakenEvent(GameEvent):
    position: Position


@dataclass(slots=True)
class MazeShuffledEvent(GameEvent):
    board_generation: int


@dataclass(slots=True)
class TeleportedEvent(GameEvent):
    source: Position
    target: Position


@dataclass(slots=True)
class MobsSpawnedEvent(GameEvent):
    entity_tag: str
    positions: Tuple[Position, ...]
    requested: int


@dataclass(slots=True)
class ExitRevealedEvent(GameEvent):
    turns: int


@dataclass(slots=True)
class ExitLockedEvent(GameEvent):
    pass


@dataclass(slots=True)
class UnknownActionEvent(GameEvent):
    action: str
