"""Encounter domain models."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from fmaze.core.types import Position
from fmaze.domain.defs import OutcomeDef

EncounterPhase = Literal["idle", "spinning", "resolved", "applied"]


@dataclass(frozen=True, slots=True)
class EncounterDescriptor:
    """The entity that was hit and the roulette it offers."""

    entity_tag: str
    position: Position
    options: Tuple[OutcomeDef, ...]


@dataclass(slots=True)
class EncounterState:
    """Tracks the single active encounter, if any."""

    phase: EncounterPhase = "idle"
    descriptor: EncounterDescriptor | None = None
    selected_index: int | None = None

    @property
    def is_idle(self) -> bool:
        return self.phase == "idle"

    @property
    def is_spinning(self) -> bool:
        return self.phase == "spinning"

    def reset(self) -> None:
        self.phase = "idle"
        self.descriptor = None
        self.selected_index = None
