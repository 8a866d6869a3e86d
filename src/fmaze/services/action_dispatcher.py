"""Applies symbolic encounter outcomes to the game state."""
from __future__ import annotations

import logging
from typing import List

from fmaze.domain.defs import OutcomeDef
from fmaze.domain.state import MAX_HEALTH, GameState, clamp_health
from fmaze.services.board_builder import BoardBuilder
from fmaze.services.events import (
    ExitLockedEvent,
    ExitRevealedEvent,
    GameEvent,
    GameLostEvent,
    HealthChangedEvent,
    KeyTakenEvent,
    MazeShuffledEvent,
    MobsSpawnedEvent,
    TeleportedEvent,
    UnknownActionEvent,
)

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Maps an outcome's action name onto a state change.

    Unknown names are logged and ignored. Health is clamped to
    ``[0, max_health]`` and reaching zero is the only health-based loss.
    """

    def __init__(self, board_builder: BoardBuilder, max_health: int = MAX_HEALTH) -> None:
        self._board_builder = board_builder
        self._max_health = max_health

    def apply(self, option: OutcomeDef, state: GameState, *, source_tag: str | None = None) -> List[GameEvent]:
        action = option.action
        events: List[GameEvent] = []
        if action == "set_hp":
            if option.amount is None:
                logger.warning("set_hp outcome '%s' has no amount; ignoring", option.label)
                return events
            self._set_health(state, option.amount, events)
        elif action == "hp_gain":
            if option.amount is None:
                logger.warning("hp_gain outcome '%s' has no amount; ignoring", option.label)
                return events
            self._set_health(state, state.player.health + option.amount, events)
        elif action == "defeat":
            # Removal of the creature is the engine's job.
            pass
        elif action == "lose":
            self._lose(state, "lose", events)
        elif action == "shuffle_maze":
            self._board_builder.rebuild(state)
            events.append(MazeShuffledEvent(board_generation=state.board_generation))
        elif action == "teleport":
            self._teleport(state, events)
        elif action == "spawn_mob":
            self._spawn(state, option, source_tag, events)
        elif action == "reveal_exit":
            turns = option.turns if option.turns is not None else (option.amount or 0)
            state.reveal_exit_turns = max(0, turns)
            events.append(ExitRevealedEvent(turns=state.reveal_exit_turns))
        elif action == "lock_exit":
            state.exit_locked = True
            events.append(ExitLockedEvent())
        elif action == "take_key":
            state.player.has_key = True
            events.append(KeyTakenEvent(position=state.player.position))
        else:
            logger.warning("Unknown action %r in outcome '%s'; ignoring", action, option.label)
            events.append(UnknownActionEvent(action=action))
        return events

    def _set_health(self, state: GameState, value: int, events: List[GameEvent]) -> None:
        before = state.player.health
        after = clamp_health(value, self._max_health)
        state.player.health = after
        if after != before:
            events.append(HealthChangedEvent(before=before, after=after))
        if after <= 0:
            self._lose(state, "health", events)

    @staticmethod
    def _lose(state: GameState, reason: str, events: List[GameEvent]) -> None:
        if state.result == "lost":
            return
        state.result = "lost"
        events.append(GameLostEvent(reason=reason))

    @staticmethod
    def _teleport(state: GameState, events: List[GameEvent]) -> None:
        grid = state.grid
        blocked = {grid.start, grid.exit, state.player.position} | state.entities.occupied()
        targets = [pos for pos in grid.open_cells() if pos not in blocked]
        if not targets:
            logger.info("Teleport found no free open cell; player stays at %s", state.player.position)
            return
        source = state.player.position
        state.player.position = state.rng.choice(targets)
        events.append(TeleportedEvent(source=source, target=state.player.position))

    def _spawn(self, state: GameState, option: OutcomeDef, source_tag: str | None, events: List[GameEvent]) -> None:
        tag = option.mob_type
        if tag is None and source_tag in self._board_builder.creature_tags:
            tag = source_tag
        if tag is None:
            logger.warning("spawn_mob outcome '%s' names no creature; ignoring", option.label)
            return
        count = option.amount if option.amount is not None else 1
        placed = self._board_builder.placer.spawn(
            state.grid, state.entities, tag, max(0, count), state.player.position, state.rng
        )
        if len(placed) < count:
            logger.debug("Spawned %d/%d '%s'", len(placed), count, tag)
        events.append(MobsSpawnedEvent(entity_tag=tag, positions=tuple(placed), requested=count))
