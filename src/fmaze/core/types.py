"""Shared type aliases for the core and domain layers."""
from typing import Dict, Literal, Tuple

Position = Tuple[int, int]
Direction = Literal["up", "down", "left", "right"]
EntityKind = Literal["creature", "item"]
GameResult = Literal["in_progress", "won", "lost"]

DIRECTION_DELTAS: Dict[str, Position] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


def manhattan(a: Position, b: Position) -> int:
    """Return |drow| + |dcol| between two positions."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


__all__ = ["Direction", "DIRECTION_DELTAS", "EntityKind", "GameResult", "Position", "manhattan"]
