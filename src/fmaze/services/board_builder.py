"""Builds a fresh grid and entity placement, retrying on unsolvable boards."""
from __future__ import annotations

import logging
from typing import Sequence, Tuple

from fmaze.core.rng import RNG
from fmaze.domain.defs import EntityDef, GameSettings
from fmaze.domain.entity_sets import split_tags
from fmaze.domain.maze import Grid
from fmaze.domain.state import GameState
from fmaze.services.entity_placer import EntityPlacer, Placement
from fmaze.services.errors import GenerationError, UnsolvableMazeError
from fmaze.services.maze_generator import MazeGenerator

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 5


class BoardBuilder:
    """Pairs the maze generator with the entity placer."""

    def __init__(
        self,
        settings: GameSettings,
        entity_defs: Sequence[EntityDef],
        generator: MazeGenerator | None = None,
        placer: EntityPlacer | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self._settings = settings
        self._entity_defs = tuple(entity_defs)
        self._creature_tags, self._item_tags = split_tags(self._entity_defs)
        self._generator = generator or MazeGenerator(noise_ratio=settings.noise_ratio)
        self._placer = placer or EntityPlacer(settings)
        self._max_retries = max_retries

    @property
    def placer(self) -> EntityPlacer:
        return self._placer

    @property
    def creature_tags(self) -> Tuple[str, ...]:
        return self._creature_tags

    @property
    def item_tags(self) -> Tuple[str, ...]:
        return self._item_tags

    @property
    def collision_order(self) -> Tuple[str, ...]:
        return self._creature_tags + self._item_tags

    def build(self, rng: RNG) -> Tuple[Grid, Placement]:
        size = self._settings.maze_size
        for attempt in range(1, self._max_retries + 1):
            grid = self._generator.generate(size, rng)
            try:
                placement = self._placer.place(grid, grid.start, self._entity_defs, rng)
            except UnsolvableMazeError as exc:
                logger.error("Discarding unsolvable maze (attempt %d/%d): %s", attempt, self._max_retries, exc)
                continue
            return grid, placement
        raise GenerationError(f"Could not build a solvable {size}x{size} maze in {self._max_retries} attempts.")

    def rebuild(self, state: GameState) -> None:
        """Replace grid and entities in place, sending the player back to the start.

        Health and the game result are left untouched.
        """
        grid, placement = self.build(state.rng)
        state.grid = grid
        state.entities = placement.entities
        state.player.position = grid.start
        state.player.has_key = False
        state.reveal_exit_turns = 0
        state.exit_locked = False
        state.board_generation += 1
