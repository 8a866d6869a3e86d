"""UI-agnostic game controller that owns the game state aggregate."""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from fmaze.core.rng import RNG
from fmaze.core.types import DIRECTION_DELTAS, Direction
from fmaze.data.repositories import EntitiesRepository, SettingsRepository
from fmaze.domain.defs import EntityDef, GameSettings
from fmaze.domain.state import GameState, PlayerState
from fmaze.services.action_dispatcher import ActionDispatcher
from fmaze.services.board_builder import BoardBuilder
from fmaze.services.controllers.commands import Command, Confirm, Move, Regenerate
from fmaze.services.controllers.snapshot import GameSnapshot
from fmaze.services.encounter_engine import EncounterEngine, SelectionListener
from fmaze.services.events import (
    BoardGeneratedEvent,
    GameEvent,
    GameWonEvent,
    PlayerMovedEvent,
)
from fmaze.services.roulette_ticker import RouletteTicker

logger = logging.getLogger(__name__)


class GameController:
    """
    Orchestrates generation, movement and encounters for one player.

    Responsibilities:
    - Own the single GameState aggregate and rebuild it on regenerate
    - Turn Move/Confirm/Regenerate commands into state changes and events
    - Start encounters on collision in the same call as the move
    - Expose a read-only GameSnapshot

    Non-responsibilities (handled by presentation layer):
    - Rendering the grid or the roulette
    - Reading keys or other input devices
    """

    def __init__(
        self,
        settings: GameSettings,
        entity_defs: Sequence[EntityDef],
        *,
        seed: int | None = None,
        rng: RNG | None = None,
        ticker: RouletteTicker | None = None,
        on_selection: SelectionListener | None = None,
    ) -> None:
        self._settings = settings
        self._entity_defs: Dict[str, EntityDef] = {entity.id: entity for entity in entity_defs}
        self._seed = seed
        self._rng = rng or RNG(seed)
        self._builder = BoardBuilder(settings, entity_defs)
        self._dispatcher = ActionDispatcher(self._builder, max_health=settings.max_health)
        self._engine = EncounterEngine(
            self._dispatcher,
            ticker=ticker or RouletteTicker(settings.spin_interval_ms),
            on_selection=on_selection,
            item_tags=self._builder.item_tags,
        )
        self._state = self._new_state()

    @classmethod
    def from_repositories(
        cls,
        settings_repo: SettingsRepository,
        entities_repo: EntitiesRepository,
        *,
        profile: str = "default",
        seed: int | None = None,
        on_selection: SelectionListener | None = None,
    ) -> "GameController":
        return cls(
            settings_repo.get(profile),
            entities_repo.all(),
            seed=seed,
            on_selection=on_selection,
        )

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def engine(self) -> EncounterEngine:
        return self._engine

    def entity_name(self, tag: str) -> str:
        entity = self._entity_defs.get(tag)
        return entity.name if entity else tag

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot.from_state(self._state)

    def handle(self, command: Command) -> List[GameEvent]:
        if isinstance(command, Move):
            return self.move(command.direction)
        if isinstance(command, Confirm):
            return self.confirm()
        if isinstance(command, Regenerate):
            return self.regenerate()
        raise ValueError(f"Unknown command: {command!r}")

    def regenerate(self) -> List[GameEvent]:
        """Cancel any roulette and replace the whole aggregate."""
        self._engine.cancel(self._state)
        self._state = self._new_state()
        return [
            BoardGeneratedEvent(
                size=self._state.grid.size,
                seed=self._seed,
                entity_counts={tag: len(positions) for tag, positions in self._state.entities.by_tag.items()},
            )
        ]

    def move(self, direction: Direction) -> List[GameEvent]:
        state = self._state
        if state.is_over or not state.encounter.is_idle:
            return []
        try:
            dr, dc = DIRECTION_DELTAS[direction]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {direction!r}") from exc
        row, col = state.player.position
        target = (row + dr, col + dc)
        if not state.grid.is_open(target):
            return []

        state.player.position = target
        if state.reveal_exit_turns > 0:
            state.reveal_exit_turns -= 1
        events: List[GameEvent] = [PlayerMovedEvent(direction=direction, position=target)]

        tag = state.entities.tag_at(target, self._builder.collision_order)
        if tag is not None:
            entity = self._entity_defs.get(tag)
            options = entity.outcomes if entity else ()
            events.extend(self._engine.trigger(state, tag, target, options))
            if not state.encounter.is_idle:
                return events

        events.extend(self._check_exit())
        return events

    def confirm(self) -> List[GameEvent]:
        state = self._state
        if state.is_over:
            return self.regenerate()
        if state.encounter.is_spinning:
            return self._engine.stop(state)
        if state.encounter.phase == "resolved":
            events = self._engine.confirm(state)
            events.extend(self._check_exit())
            return events
        return []

    def tick(self) -> List[GameEvent]:
        """Advance the roulette by hand, for front ends without an event loop."""
        event = self._engine.tick(self._state)
        return [event] if event is not None else []

    def _check_exit(self) -> List[GameEvent]:
        state = self._state
        if state.is_over or state.player.position != state.grid.exit:
            return []
        if not state.player.has_key:
            logger.debug("Reached the exit without the key")
            return []
        state.result = "won"
        return [GameWonEvent(position=state.player.position)]

    def _new_state(self) -> GameState:
        grid, placement = self._builder.build(self._rng)
        logger.info(
            "New %dx%d board: %s",
            grid.size,
            grid.size,
            ", ".join(f"{tag}={len(positions)}" for tag, positions in sorted(placement.entities.by_tag.items())),
        )
        return GameState(
            seed=self._seed,
            rng=self._rng,
            grid=grid,
            entities=placement.entities,
            player=PlayerState(position=grid.start, health=self._settings.max_health),
        )
