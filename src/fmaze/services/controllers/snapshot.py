"""Read-only view of the game handed to presentation code."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from fmaze.core.types import GameResult, Position
from fmaze.domain.encounter_models import EncounterDescriptor
from fmaze.domain.state import GameState


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    grid: Tuple[Tuple[int, ...], ...]
    player: Position
    health: int
    has_key: bool
    entities: Dict[str, Tuple[Position, ...]]
    encounter: EncounterDescriptor | None
    spinning: bool
    selected_index: int | None
    result: GameResult
    reveal_exit_turns: int
    exit_locked: bool

    @property
    def size(self) -> int:
        return len(self.grid)

    @classmethod
    def from_state(cls, state: GameState) -> "GameSnapshot":
        encounter = state.encounter
        return cls(
            grid=tuple(tuple(int(cell) for cell in row) for row in state.grid.rows()),
            player=state.player.position,
            health=state.player.health,
            has_key=state.player.has_key,
            entities={tag: tuple(positions) for tag, positions in state.entities.as_sorted_lists().items()},
            encounter=encounter.descriptor,
            spinning=encounter.is_spinning,
            selected_index=encounter.selected_index,
            result=state.result,
            reveal_exit_turns=state.reveal_exit_turns,
            exit_locked=state.exit_locked,
        )
