"""Per-tag entity position sets."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Set, Tuple

from fmaze.core.types import Position
from fmaze.domain.defs import EntityDef


def split_tags(entity_defs: Iterable[EntityDef]) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """Return ``(creature_tags, item_tags)`` in definition order."""
    creatures: List[str] = []
    items: List[str] = []
    for entity in entity_defs:
        (creatures if entity.is_creature else items).append(entity.id)
    return tuple(creatures), tuple(items)


def collision_order(entity_defs: Iterable[EntityDef]) -> Tuple[str, ...]:
    """Collision priority: creatures before items."""
    creatures, items = split_tags(entity_defs)
    return creatures + items


@dataclass(slots=True)
class EntitySets:
    """Entity positions grouped by tag; no duplicate positions within a tag."""

    by_tag: Dict[str, Set[Position]] = field(default_factory=dict)

    def add(self, tag: str, pos: Position) -> None:
        self.by_tag.setdefault(tag, set()).add(pos)

    def remove(self, tag: str, pos: Position) -> bool:
        positions = self.by_tag.get(tag)
        if not positions or pos not in positions:
            return False
        positions.discard(pos)
        return True

    def remove_at(self, pos: Position, tags: Iterable[str]) -> bool:
        """Remove whatever of the given tags sits on ``pos``."""
        removed = False
        for tag in tags:
            removed = self.remove(tag, pos) or removed
        return removed

    def positions(self, tag: str) -> Set[Position]:
        return self.by_tag.get(tag, set())

    def tag_at(self, pos: Position, order: Tuple[str, ...] = ()) -> str | None:
        """Return the first tag in ``order`` occupying ``pos``, then any other tag there."""
        for tag in order:
            if pos in self.by_tag.get(tag, ()):
                return tag
        for tag, positions in self.by_tag.items():
            if tag not in order and pos in positions:
                return tag
        return None

    def occupied(self) -> Set[Position]:
        result: Set[Position] = set()
        for positions in self.by_tag.values():
            result |= positions
        return result

    def all_positions(self) -> Iterator[Tuple[str, Position]]:
        for tag, positions in self.by_tag.items():
            for pos in positions:
                yield tag, pos

    def count(self, tag: str | None = None) -> int:
        if tag is not None:
            return len(self.by_tag.get(tag, ()))
        return sum(len(positions) for positions in self.by_tag.values())

    def as_sorted_lists(self) -> Dict[str, List[Position]]:
        return {tag: sorted(positions) for tag, positions in self.by_tag.items()}
