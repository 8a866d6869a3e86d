"""Constrained scattering of creatures and items over a maze."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Set

from fmaze.core.rng import RNG
from fmaze.core.types import Position, manhattan
from fmaze.domain.defs import EntityDef, GameSettings
from fmaze.domain.entity_sets import EntitySets
from fmaze.domain.maze import Grid
from fmaze.services.errors import UnsolvableMazeError
from fmaze.services.path_finder import shortest_path

logger = logging.getLogger(__name__)

HP_VIAL_TAG = "hp_vial"
KEY_TAG = "key"


@dataclass(slots=True)
class Placement:
    """Result of one placement pass."""

    entities: EntitySets
    forced: Set[Position] = field(default_factory=set)
    path: List[Position] = field(default_factory=list)


class EntityPlacer:
    """Scatters creatures under a Manhattan spacing floor and pins a few onto the solution path."""

    def __init__(self, settings: GameSettings) -> None:
        self._settings = settings

    def place(
        self,
        grid: Grid,
        player_start: Position,
        entity_defs: Sequence[EntityDef],
        rng: RNG,
    ) -> Placement:
        min_dist = self._settings.min_dist
        candidates = [pos for pos in grid.open_cells() if pos != grid.start]

        path = shortest_path(grid, grid.start, grid.exit)
        if not path:
            raise UnsolvableMazeError(f"No path from {grid.start} to {grid.exit}.")
        forced = self._pick_forced(grid, path, rng)

        entities = EntitySets()
        creatures = [entity for entity in entity_defs if entity.is_creature]
        blockers: List[Position] = [player_start, *forced]
        for creature in creatures:
            target = rng.randint(creature.min, creature.max)
            chosen = self._sample_spread(candidates, target, blockers, rng, excluded=set(forced))
            if len(chosen) < target:
                logger.debug("Placed %d/%d '%s' (attempts exhausted)", len(chosen), target, creature.id)
            for pos in chosen:
                entities.add(creature.id, pos)
            blockers.extend(chosen)

        assigned: Set[Position] = set()
        if creatures:
            for pos in forced:
                creature = rng.choice(creatures)
                placed = [p for p in blockers if p not in forced] + sorted(assigned)
                if pos in entities.occupied() or not _far_enough(pos, placed, min_dist):
                    logger.debug("Dropped forced encounter at %s", pos)
                    continue
                entities.add(creature.id, pos)
                assigned.add(pos)

        self._place_items(grid, candidates, entity_defs, entities, rng)
        return Placement(entities=entities, forced=assigned, path=path)

    def spawn(
        self,
        grid: Grid,
        entities: EntitySets,
        tag: str,
        count: int,
        player: Position,
        rng: RNG,
    ) -> List[Position]:
        """Add up to ``count`` instances of ``tag`` at open cells spaced from every current entity."""
        occupied = entities.occupied()
        corners = {grid.start, grid.exit}
        candidates = [pos for pos in grid.open_cells() if pos not in corners and pos not in occupied]
        blockers = [player, *occupied]
        chosen = self._sample_spread(candidates, count, blockers, rng)
        for pos in chosen:
            entities.add(tag, pos)
        return chosen

    def _pick_forced(self, grid: Grid, path: List[Position], rng: RNG) -> List[Position]:
        interior = [pos for pos in path if pos not in (grid.start, grid.exit)]
        if not interior:
            return []
        count = len(interior) // 5
        count = max(self._settings.forced_min, min(self._settings.forced_max, count))
        return rng.sample(interior, min(count, len(interior)))

    def _sample_spread(
        self,
        candidates: Sequence[Position],
        count: int,
        blockers: Iterable[Position],
        rng: RNG,
        excluded: Set[Position] | None = None,
    ) -> List[Position]:
        """Rejection-sample ``count`` candidates, each at least min_dist from the rest."""
        if count <= 0 or not candidates:
            return []
        min_dist = self._settings.min_dist
        others = list(blockers)
        excluded = excluded or set()
        chosen: List[Position] = []
        taken: Set[Position] = set(others)
        tries = 0
        while len(chosen) < count and tries < self._settings.max_attempts:
            tries += 1
            pos = candidates[rng.randrange(len(candidates))]
            if pos in excluded or pos in taken:
                continue
            if not _far_enough(pos, chosen, min_dist) or not _far_enough(pos, others, min_dist):
                continue
            chosen.append(pos)
            taken.add(pos)
        return chosen

    @staticmethod
    def _place_items(
        grid: Grid,
        candidates: Sequence[Position],
        entity_defs: Sequence[EntityDef],
        entities: EntitySets,
        rng: RNG,
    ) -> None:
        occupied = entities.occupied()
        free = [pos for pos in candidates if pos != grid.exit and pos not in occupied]

        vial_def = next((entity for entity in entity_defs if entity.id == HP_VIAL_TAG), None)
        if vial_def is not None:
            count = min(rng.randint(vial_def.min, vial_def.max), len(free))
            vials = rng.sample(free, count)
            for pos in vials:
                entities.add(HP_VIAL_TAG, pos)
            taken = set(vials)
            free = [pos for pos in free if pos not in taken]

        if not any(entity.id == KEY_TAG for entity in entity_defs):
            return
        if not free:
            logger.warning("No free cell left for the key; the exit cannot be won this round")
            return
        entities.add(KEY_TAG, rng.choice(free))


def _far_enough(pos: Position, others: Iterable[Position], min_dist: int) -> bool:
    return all(manhattan(pos, other) >= min_dist for other in others)
