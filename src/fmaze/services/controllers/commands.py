"""Commands accepted by the game controller."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from fmaze.core.types import Direction


@dataclass(frozen=True, slots=True)
class Move:
    direction: Direction


@dataclass(frozen=True, slots=True)
class Confirm:
    """Stops a spinning roulette, or applies a resolved one."""


@dataclass(frozen=True, slots=True)
class Regenerate:
    pass


Command = Union[Move, Confirm, Regenerate]
