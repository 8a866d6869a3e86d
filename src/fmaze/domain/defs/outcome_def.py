"""Outcome definition primitives."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class OutcomeDef:
    """One roulette slot: a label plus a symbolic action and optional magnitude."""

    label: str
    action: str
    amount: int | None = None
    weight: float = 1.0
    mob_type: str | None = None
    turns: int | None = None
