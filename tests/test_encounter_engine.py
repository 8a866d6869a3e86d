import asyncio

import pytest

from fmaze.core.rng import RNG
from fmaze.domain.defs import OutcomeDef
from fmaze.services.action_dispatcher import ActionDispatcher
from fmaze.services.encounter_engine import EncounterEngine, weighted_index
from fmaze.services.errors import GenerationError
from fmaze.services.events import EntityRemovedEvent, MazeShuffledEvent, RouletteStoppedEvent
from fmaze.services.roulette_ticker import RouletteTicker
from tests.helpers.boards import build_engine, heal_hurt_outcomes, make_state, open_grid


class _MaxRNG:
    """Always returns the top of the requested range."""

    def uniform(self, total: float) -> float:
        return total


def test_equal_weights_split_evenly() -> None:
    rng = RNG(2024)
    options = heal_hurt_outcomes()

    first = sum(1 for _ in range(10_000) if weighted_index(options, rng) == 0)

    assert 0.47 < first / 10_000 < 0.53


def test_weights_bias_the_draw() -> None:
    rng = RNG(7)
    options = (
        OutcomeDef(label="Common", action="defeat", weight=3),
        OutcomeDef(label="Rare", action="lose", weight=1),
    )

    common = sum(1 for _ in range(10_000) if weighted_index(options, rng) == 0)

    assert 0.72 < common / 10_000 < 0.78


def test_draw_at_the_top_edge_falls_back_to_last_option() -> None:
    assert weighted_index(heal_hurt_outcomes(), _MaxRNG()) == 1  # type: ignore[arg-type]


def test_draw_from_nothing_raises() -> None:
    with pytest.raises(ValueError):
        weighted_index((), RNG(0))


def test_stop_then_confirm_applies_hurt_and_removes_entity() -> None:
    engine, _, _ = build_engine()
    state = make_state(open_grid(5), health=50)
    state.entities.add("bones", (1, 1))
    state.player.position = (1, 1)

    engine.trigger(state, "bones", (1, 1), heal_hurt_outcomes())
    assert state.encounter.phase == "spinning"
    state.encounter.selected_index = 1

    stop_events = engine.stop(state)
    assert state.encounter.phase == "resolved"
    assert stop_events == [RouletteStoppedEvent(index=1, label="Hurt")]

    events = engine.confirm(state)

    assert state.player.health == 30
    assert (1, 1) not in state.entities.positions("bones")
    assert EntityRemovedEvent(entity_tag="bones", position=(1, 1)) in events
    assert state.encounter.phase == "idle"
    assert state.encounter.descriptor is None


def test_outcome_is_applied_exactly_once() -> None:
    engine, _, _ = build_engine()
    state = make_state(open_grid(5), health=50)
    state.entities.add("bones", (2, 2))
    engine.trigger(state, "bones", (2, 2), heal_hurt_outcomes())

    # Confirm before stop is not valid.
    assert engine.confirm(state) == []
    assert state.player.health == 50

    engine.stop(state)
    engine.confirm(state)
    health_after = state.player.health

    assert engine.confirm(state) == []
    assert engine.stop(state) == []
    assert state.player.health == health_after
    assert health_after in (30, 70)


def test_stopped_roulette_no_longer_redraws() -> None:
    engine, _, _ = build_engine()
    state = make_state(open_grid(5))
    engine.trigger(state, "bones", (1, 1), heal_hurt_outcomes())
    assert engine.tick(state) is not None

    engine.stop(state)
    frozen = state.encounter.selected_index

    for _ in range(20):
        assert engine.tick(state) is None
    assert state.encounter.selected_index == frozen


def test_second_trigger_is_ignored_while_active() -> None:
    engine, _, _ = build_engine()
    state = make_state(open_grid(5))
    engine.trigger(state, "bones", (1, 1), heal_hurt_outcomes())

    assert engine.trigger(state, "wolf", (2, 2), heal_hurt_outcomes()) == []
    assert state.encounter.descriptor is not None
    assert state.encounter.descriptor.entity_tag == "bones"


def test_item_is_removed_by_position() -> None:
    engine, _, _ = build_engine()
    state = make_state(open_grid(5), health=40)
    state.entities.add("hp_vial", (3, 3))
    vial = (OutcomeDef(label="+10", action="hp_gain", amount=10),)

    engine.trigger(state, "hp_vial", (3, 3), vial)
    engine.stop(state)
    engine.confirm(state)

    assert state.player.health == 50
    assert state.entities.count("hp_vial") == 0


def test_entity_without_outcomes_is_removed_without_spinning() -> None:
    engine, _, _ = build_engine()
    state = make_state(open_grid(5))
    state.entities.add("wolf", (1, 2))

    events = engine.trigger(state, "wolf", (1, 2), ())

    assert state.encounter.is_idle
    assert state.entities.count("wolf") == 0
    assert events == [EntityRemovedEvent(entity_tag="wolf", position=(1, 2))]


def test_shuffle_outcome_skips_removal_on_the_new_board() -> None:
    engine, _, builder = build_engine()
    grid, placement = builder.build(RNG(3))
    state = make_state(grid, health=45)
    state.entities = placement.entities
    tag, pos = next(iter(placement.entities.all_positions()))
    shuffle = (OutcomeDef(label="Walls Shift", action="shuffle_maze"),)

    engine.trigger(state, tag, pos, shuffle)
    engine.stop(state)
    events = engine.confirm(state)

    assert any(isinstance(event, MazeShuffledEvent) for event in events)
    assert not any(isinstance(event, EntityRemovedEvent) for event in events)
    assert state.board_generation == 1
    assert state.player.health == 45
    assert state.encounter.is_idle


def test_selection_listener_hears_each_tick() -> None:
    heard: list[int] = []
    engine, _, _ = build_engine()
    engine.set_selection_listener(heard.append)
    state = make_state(open_grid(5))
    engine.trigger(state, "bones", (1, 1), heal_hurt_outcomes())

    for _ in range(5):
        engine.tick(state)

    assert len(heard) == 5
    assert heard[-1] == state.encounter.selected_index


def test_ticker_spins_until_stopped() -> None:
    async def scenario() -> None:
        heard: list[int] = []
        _, dispatcher, _ = build_engine()
        engine = EncounterEngine(dispatcher, ticker=RouletteTicker(interval_ms=1), on_selection=heard.append)
        state = make_state(open_grid(5))

        engine.trigger(state, "bones", (1, 1), heal_hurt_outcomes())
        assert engine.ticker.running
        await asyncio.sleep(0.05)
        assert heard

        engine.stop(state)
        assert not engine.ticker.running
        count = len(heard)
        await asyncio.sleep(0.02)
        assert len(heard) == count

    asyncio.run(scenario())


def test_cancel_drops_encounter_and_tick() -> None:
    async def scenario() -> None:
        _, dispatcher, _ = build_engine()
        engine = EncounterEngine(dispatcher, ticker=RouletteTicker(interval_ms=1))
        state = make_state(open_grid(5))
        engine.trigger(state, "bones", (1, 1), heal_hurt_outcomes())

        engine.cancel(state)

        assert not engine.ticker.running
        assert state.encounter.is_idle

    asyncio.run(scenario())


def test_ticker_without_loop_is_manual() -> None:
    ticker = RouletteTicker(interval_ms=80)

    assert ticker.start(lambda: None) is False
    assert not ticker.running
    assert ticker.interval_ms == 80


def test_ticker_rejects_bad_interval() -> None:
    with pytest.raises(ValueError):
        RouletteTicker(interval_ms=0)


def test_dispatcher_is_the_only_writer(monkeypatch) -> None:
    engine, dispatcher, _ = build_engine()
    state = make_state(open_grid(5))
    calls: list[str] = []
    original = ActionDispatcher.apply

    def _spy(self, option, game_state, *, source_tag=None):
        calls.append(option.label)
        return original(self, option, game_state, source_tag=source_tag)

    monkeypatch.setattr(ActionDispatcher, "apply", _spy)
    engine.trigger(state, "bones", (1, 1), heal_hurt_outcomes())
    engine.stop(state)
    engine.confirm(state)
    engine.confirm(state)

    assert len(calls) == 1


def test_failed_outcome_still_returns_to_idle(monkeypatch) -> None:
    engine, _, builder = build_engine()
    state = make_state(open_grid(5), health=45)
    state.entities.add("bones", (1, 1))
    shuffle = (OutcomeDef(label="Walls Shift", action="shuffle_maze"),)

    def _fail(rng):
        raise GenerationError("no board")

    monkeypatch.setattr(builder, "build", _fail)
    engine.trigger(state, "bones", (1, 1), shuffle)
    engine.stop(state)

    with pytest.raises(GenerationError):
        engine.confirm(state)

    assert state.encounter.is_idle
    assert state.encounter.descriptor is None
    assert engine.trigger(state, "bones", (1, 1), heal_hurt_outcomes()) != []


def test_restarting_ticker_replaces_the_previous_task() -> None:
    async def scenario() -> None:
        first: list[int] = []
        second: list[int] = []
        ticker = RouletteTicker(interval_ms=1)

        ticker.start(lambda: first.append(1))
        await asyncio.sleep(0.01)
        ticker.start(lambda: second.append(1))
        fired = len(first)
        await asyncio.sleep(0.03)

        assert len(first) == fired
        assert second
        assert ticker.running
        pending = [task for task in asyncio.all_tasks() if task is not asyncio.current_task()]
        assert len(pending) == 1
        ticker.cancel()

    asyncio.run(scenario())
