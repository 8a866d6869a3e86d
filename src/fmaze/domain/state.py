"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field

from fmaze.core.rng import RNG
from fmaze.core.types import GameResult, Position
from fmaze.domain.encounter_models import EncounterState
from fmaze.domain.entity_sets import EntitySets
from fmaze.domain.maze import Grid

MAX_HEALTH = 100


def clamp_health(value: int, maximum: int = MAX_HEALTH) -> int:
    return max(0, min(maximum, value))


@dataclass
class PlayerState:
    position: Position = (0, 0)
    health: int = MAX_HEALTH
    has_key: bool = False


@dataclass
class GameState:
    """The single mutable aggregate owned by the game controller."""

    seed: int | None
    rng: RNG
    grid: Grid
    entities: EntitySets = field(default_factory=EntitySets)
    player: PlayerState = field(default_factory=PlayerState)
    encounter: EncounterState = field(default_factory=EncounterState)
    result: GameResult = "in_progress"
    reveal_exit_turns: int = 0
    exit_locked: bool = False
    # Bumped whenever grid and entities are rebuilt.
    board_generation: int = 0

    @property
    def is_over(self) -> bool:
        return self.result != "in_progress"
