import logging
from itertools import combinations

import pytest

from fmaze.core.rng import RNG
from fmaze.core.types import manhattan
from fmaze.domain.defs import EntityDef, GameSettings
from fmaze.domain.entity_sets import EntitySets, split_tags
from fmaze.services.entity_placer import EntityPlacer
from fmaze.services.errors import UnsolvableMazeError
from fmaze.services.maze_generator import MazeGenerator
from tests.helpers.boards import SMALL_SETTINGS, build_entity_defs, grid_from_rows, open_grid

CREATURES, _ = split_tags(build_entity_defs())


def _place(seed: int, settings: GameSettings = SMALL_SETTINGS):
    rng = RNG(seed)
    grid = MazeGenerator(settings.noise_ratio).generate(settings.maze_size, rng)
    placement = EntityPlacer(settings).place(grid, grid.start, build_entity_defs(), rng)
    return grid, placement


@pytest.mark.parametrize("seed", range(20))
def test_non_forced_creatures_respect_min_dist(seed: int) -> None:
    grid, placement = _place(seed)
    creatures = [
        pos
        for tag in CREATURES
        for pos in placement.entities.positions(tag)
        if pos not in placement.forced
    ]

    for a, b in combinations(creatures, 2):
        assert manhattan(a, b) >= SMALL_SETTINGS.min_dist
    for pos in creatures:
        assert manhattan(pos, grid.start) >= SMALL_SETTINGS.min_dist


@pytest.mark.parametrize("seed", range(20))
def test_placement_shape(seed: int) -> None:
    grid, placement = _place(seed)
    entities = placement.entities
    defs = {entity.id: entity for entity in build_entity_defs()}

    # No cell is shared between tags and nothing sits on the start corner.
    assert len(entities.occupied()) == entities.count()
    assert grid.start not in entities.occupied()
    assert all(grid.is_open(pos) for _, pos in entities.all_positions())

    assert set(placement.forced) <= set(placement.path[1:-1])
    for tag in ("bones", "wolf"):
        assert entities.count(tag) <= defs[tag].max + len(placement.forced)

    assert 1 <= entities.count("hp_vial") <= 3
    assert entities.count("key") == 1
    for tag in ("hp_vial", "key"):
        assert grid.exit not in entities.positions(tag)


def test_forced_encounters_sit_on_the_solution_path() -> None:
    hits = 0
    for seed in range(20):
        _, placement = _place(seed)
        assert placement.forced <= placement.entities.occupied()
        hits += bool(placement.forced)
    # A forced cell is only dropped next to another creature; most boards keep some.
    assert hits >= 15


def test_same_seed_same_placement() -> None:
    _, first = _place(99)
    _, second = _place(99)

    assert first.entities.as_sorted_lists() == second.entities.as_sorted_lists()


def test_underfill_is_not_an_error() -> None:
    grid = open_grid(3)
    defs = [EntityDef(id="bones", name="Bones", kind="creature", min=20, max=20)]

    placement = EntityPlacer(SMALL_SETTINGS).place(grid, grid.start, defs, RNG(4))

    assert 0 < placement.entities.count("bones") < 20


def test_unsolvable_grid_raises() -> None:
    grid = grid_from_rows(
        [
            "...",
            "..#",
            ".#.",
        ]
    )

    with pytest.raises(UnsolvableMazeError):
        EntityPlacer(SMALL_SETTINGS).place(grid, grid.start, build_entity_defs(), RNG(0))


def test_key_is_absent_when_no_cell_is_free(caplog) -> None:
    grid = grid_from_rows(
        [
            "..#",
            "#.#",
            "#..",
        ]
    )
    settings = GameSettings(min_dist=0, forced_min=3, forced_max=3)
    defs = [
        EntityDef(id="bones", name="Bones", kind="creature", min=0, max=0),
        EntityDef(id="hp_vial", name="Vial", kind="item", min=1, max=1),
        EntityDef(id="key", name="Key", kind="item", min=1, max=1),
    ]

    with caplog.at_level(logging.WARNING):
        placement = EntityPlacer(settings).place(grid, grid.start, defs, RNG(1))

    assert placement.entities.positions("bones") == {(0, 1), (1, 1), (2, 1)}
    assert placement.entities.count("key") == 0
    assert placement.entities.count("hp_vial") == 0
    assert "key" in caplog.text


def test_forced_positions_dropped_when_too_close() -> None:
    grid = grid_from_rows(
        [
            "..#",
            "#.#",
            "#..",
        ]
    )
    settings = GameSettings(min_dist=2, forced_min=3, forced_max=3)
    defs = [EntityDef(id="bones", name="Bones", kind="creature", min=0, max=0)]

    placement = EntityPlacer(settings).place(grid, grid.start, defs, RNG(1))

    # (0, 1) touches the start; (1, 1) and (2, 1) are adjacent, so only one of them survives.
    bones = placement.entities.positions("bones")
    assert (0, 1) not in bones
    assert len(bones) == 1
    assert bones <= {(1, 1), (2, 1)}


def test_spawn_keeps_spacing() -> None:
    grid = open_grid(9)
    entities = EntitySets()
    entities.add("bones", (4, 4))

    placed = EntityPlacer(SMALL_SETTINGS).spawn(grid, entities, "wolf", 3, (0, 0), RNG(6))

    assert len(placed) == 3
    assert entities.positions("wolf") == set(placed)
    blockers = [(4, 4), (0, 0)]
    for pos in placed:
        assert pos not in (grid.start, grid.exit)
        assert all(manhattan(pos, other) >= 2 for other in blockers)
    for a, b in combinations(placed, 2):
        assert manhattan(a, b) >= 2
