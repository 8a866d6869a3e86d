"""Randomized spanning-tree maze generation."""
from __future__ import annotations

import logging
from typing import Iterator, List, Tuple

from fmaze.core.rng import RNG
from fmaze.core.types import Position
from fmaze.domain.maze import Cell, Grid

logger = logging.getLogger(__name__)

# right, down, left, up
DIRS: Tuple[Position, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
DEFAULT_NOISE_RATIO = 0.15


class MazeGenerator:
    """Builds solvable square grids from an injected RNG.

    Rooms sit on even coordinates and are joined by a depth-first carve, which
    yields a spanning tree over every room. A noise pass then opens extra
    walls to add loops; it only ever opens cells, so connectivity survives.
    """

    def __init__(self, noise_ratio: float = DEFAULT_NOISE_RATIO) -> None:
        self._noise_ratio = noise_ratio

    def generate(self, size: int, rng: RNG) -> Grid:
        grid = self.carve(size, rng)
        opened = self.add_noise(grid, rng)
        logger.debug("Generated %dx%d maze (%d cells opened by noise)", size, size, opened)
        return grid

    def carve(self, size: int, rng: RNG) -> Grid:
        """Run the spanning-tree carve and open both corners, without noise."""
        if size < 3:
            raise ValueError(f"Maze size must be at least 3 (got {size}).")
        grid = Grid.filled(size, Cell.WALL)
        grid.set((0, 0), Cell.OPEN)

        # Each frame is a room plus the directions it has yet to try.
        stack: List[Tuple[Position, Iterator[Position]]] = [((0, 0), self._shuffled_dirs(rng))]
        while stack:
            (row, col), pending = stack[-1]
            step = next(pending, None)
            if step is None:
                stack.pop()
                continue
            dr, dc = step
            room = (row + dr * 2, col + dc * 2)
            if not grid.in_bounds(room) or grid.get(room) is not Cell.WALL:
                continue
            grid.set((row + dr, col + dc), Cell.OPEN)
            grid.set(room, Cell.OPEN)
            stack.append((room, self._shuffled_dirs(rng)))

        self._open_exit(grid)
        return grid

    def add_noise(self, grid: Grid, rng: RNG) -> int:
        """Open a fixed share of the remaining walls; returns how many were opened."""
        target = int(grid.size * grid.size * self._noise_ratio)
        corners = {grid.start, grid.exit}
        walls = [
            divmod(idx, grid.size)
            for idx, cell in enumerate(grid.cells)
            if cell is Cell.WALL and divmod(idx, grid.size) not in corners
        ]
        chosen = rng.sample(walls, min(target, len(walls)))
        for pos in chosen:
            grid.set(pos, Cell.OPEN)
        return len(chosen)

    @staticmethod
    def _shuffled_dirs(rng: RNG) -> Iterator[Position]:
        dirs = list(DIRS)
        rng.shuffle(dirs)
        return iter(dirs)

    @staticmethod
    def _open_exit(grid: Grid) -> None:
        exit_row, exit_col = grid.exit
        grid.set(grid.exit, Cell.OPEN)
        above = (exit_row - 1, exit_col)
        left = (exit_row, exit_col - 1)
        if grid.is_open(above) or grid.is_open(left):
            return
        if exit_row > 0:
            grid.set(above, Cell.OPEN)
        elif exit_col > 0:
            grid.set(left, Cell.OPEN)
