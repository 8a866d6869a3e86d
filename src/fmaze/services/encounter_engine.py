"""Roulette-style encounter state machine.

An encounter moves through ``idle -> spinning -> resolved -> applied -> idle``.
While spinning, each tick redraws the highlighted option with a weighted
draw. ``stop`` freezes the highlight, and ``confirm`` hands the chosen
outcome to the action dispatcher exactly once before removing the entity
that started the encounter.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from fmaze.core.rng import RNG
from fmaze.core.types import Position
from fmaze.domain.defs import OutcomeDef
from fmaze.domain.encounter_models import EncounterDescriptor
from fmaze.domain.state import GameState
from fmaze.services.action_dispatcher import ActionDispatcher
from fmaze.services.events import (
    EncounterStartedEvent,
    EntityRemovedEvent,
    GameEvent,
    OutcomeAppliedEvent,
    RouletteStoppedEvent,
    SelectionChangedEvent,
)
from fmaze.services.roulette_ticker import RouletteTicker

logger = logging.getLogger(__name__)

SelectionListener = Callable[[int], None]


def weighted_index(options: Sequence[OutcomeDef], rng: RNG) -> int:
    """Pick an index with probability proportional to each option's weight."""
    if not options:
        raise ValueError("Cannot draw from an empty option list.")
    total = sum(option.weight for option in options)
    roll = rng.uniform(total)
    for idx, option in enumerate(options):
        if roll < option.weight:
            return idx
        roll -= option.weight
    # Floating-point remainder can leave roll just past the last band.
    return len(options) - 1


class EncounterEngine:
    """Owns the single active encounter and its roulette ticker."""

    def __init__(
        self,
        dispatcher: ActionDispatcher,
        ticker: RouletteTicker | None = None,
        on_selection: SelectionListener | None = None,
        item_tags: Sequence[str] = (),
    ) -> None:
        self._dispatcher = dispatcher
        self._ticker = ticker or RouletteTicker()
        self._on_selection = on_selection
        self._item_tags = tuple(item_tags)

    @property
    def ticker(self) -> RouletteTicker:
        return self._ticker

    def set_selection_listener(self, listener: SelectionListener | None) -> None:
        self._on_selection = listener

    def trigger(
        self,
        state: GameState,
        entity_tag: str,
        position: Position,
        options: Sequence[OutcomeDef],
    ) -> List[GameEvent]:
        """Open an encounter with the entity at ``position`` and start spinning."""
        if not state.encounter.is_idle:
            logger.debug("Ignoring trigger for %s at %s: encounter already active", entity_tag, position)
            return []

        if not options:
            logger.warning("Entity '%s' has no outcomes; removing it without an encounter", entity_tag)
            return self._remove_entity(state, entity_tag, position)

        descriptor = EncounterDescriptor(entity_tag=entity_tag, position=position, options=tuple(options))
        encounter = state.encounter
        encounter.descriptor = descriptor
        encounter.phase = "spinning"
        encounter.selected_index = weighted_index(descriptor.options, state.rng)
        events: List[GameEvent] = [
            EncounterStartedEvent(
                entity_tag=entity_tag,
                position=position,
                labels=[option.label for option in descriptor.options],
            )
        ]
        self._ticker.start(lambda: self.tick(state))
        return events

    def tick(self, state: GameState) -> SelectionChangedEvent | None:
        """Redraw the highlighted option; a no-op unless the roulette is spinning."""
        encounter = state.encounter
        if not encounter.is_spinning or encounter.descriptor is None:
            return None
        idx = weighted_index(encounter.descriptor.options, state.rng)
        encounter.selected_index = idx
        if self._on_selection is not None:
            self._on_selection(idx)
        return SelectionChangedEvent(index=idx)

    def stop(self, state: GameState) -> List[GameEvent]:
        encounter = state.encounter
        if not encounter.is_spinning or encounter.descriptor is None:
            return []
        self._ticker.cancel()
        if encounter.selected_index is None:
            encounter.selected_index = weighted_index(encounter.descriptor.options, state.rng)
        encounter.phase = "resolved"
        option = encounter.descriptor.options[encounter.selected_index]
        return [RouletteStoppedEvent(index=encounter.selected_index, label=option.label)]

    def confirm(self, state: GameState) -> List[GameEvent]:
        """Apply the resolved outcome, remove the triggering entity and return to idle."""
        encounter = state.encounter
        if encounter.phase != "resolved" or encounter.descriptor is None or encounter.selected_index is None:
            return []
        descriptor = encounter.descriptor
        option = descriptor.options[encounter.selected_index]
        encounter.phase = "applied"

        generation = state.board_generation
        events: List[GameEvent] = [
            OutcomeAppliedEvent(entity_tag=descriptor.entity_tag, label=option.label, action=option.action)
        ]
        try:
            events.extend(self._dispatcher.apply(option, state, source_tag=descriptor.entity_tag))
            if state.board_generation == generation:
                events.extend(self._remove_entity(state, descriptor.entity_tag, descriptor.position))
        finally:
            encounter.reset()
        return events

    def cancel(self, state: GameState | None = None) -> None:
        """Stop any scheduled tick and, given a state, drop its encounter."""
        self._ticker.cancel()
        if state is not None:
            state.encounter.reset()

    def _remove_entity(self, state: GameState, entity_tag: str, position: Position) -> List[GameEvent]:
        # Items go by position alone; creatures by tag and position.
        if entity_tag in self._item_tags:
            removed = state.entities.remove_at(position, self._item_tags)
        else:
            removed = state.entities.remove(entity_tag, position)
        if not removed:
            return []
        return [EntityRemovedEvent(entity_tag=entity_tag, position=position)]
