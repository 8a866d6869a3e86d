"""Breadth-first shortest paths over open cells."""
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List

from fmaze.core.types import Position
from fmaze.domain.maze import Grid
from fmaze.services.maze_generator import DIRS


def shortest_path(grid: Grid, start: Position, goal: Position) -> List[Position]:
    """Return the shortest open-cell path from ``start`` to ``goal`` inclusive.

    Neighbours are expanded right, down, left, up, so ties always resolve the
    same way. An unreachable goal, or a walled endpoint, yields ``[]``.
    """
    if not grid.is_open(start) or not grid.is_open(goal):
        return []

    came_from: Dict[Position, Position | None] = {start: None}
    queue: Deque[Position] = deque([start])
    while queue:
        current = queue.popleft()
        if current == goal:
            return _rebuild(came_from, goal)
        row, col = current
        for dr, dc in DIRS:
            nxt = (row + dr, col + dc)
            if nxt in came_from or not grid.is_open(nxt):
                continue
            came_from[nxt] = current
            queue.append(nxt)
    return []


def _rebuild(came_from: Dict[Position, Position | None], goal: Position) -> List[Position]:
    path: List[Position] = []
    node: Position | None = goal
    while node is not None:
        path.append(node)
        node = came_from[node]
    path.reverse()
    return path
