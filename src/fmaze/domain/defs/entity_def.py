"""Entity definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from fmaze.core.types import EntityKind
from fmaze.domain.defs.outcome_def import OutcomeDef


@dataclass(frozen=True, slots=True)
class EntityDef:
    """Placement range and encounter outcomes for one entity tag."""

    id: str
    name: str
    kind: EntityKind
    min: int
    max: int
    outcomes: Tuple[OutcomeDef, ...] = ()

    @property
    def is_creature(self) -> bool:
        return self.kind == "creature"
