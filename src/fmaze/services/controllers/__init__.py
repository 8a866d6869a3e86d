"""UI-agnostic controllers for game flow orchestration."""
from __future__ import annotations

from .commands import Command, Confirm, Move, Regenerate
from .game_controller import GameController
from .snapshot import GameSnapshot

__all__ = [
    "Command",
    "Confirm",
    "GameController",
    "GameSnapshot",
    "Move",
    "Regenerate",
]
