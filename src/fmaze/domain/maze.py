"""Grid model for the maze."""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List

from fmaze.core.types import Position


class Cell(IntEnum):
    OPEN = 0
    WALL = 1


@dataclass(slots=True)
class Grid:
    """Square grid stored as a flat, row-major arena of cells."""

    size: int
    cells: List[Cell]

    @classmethod
    def filled(cls, size: int, cell: Cell = Cell.WALL) -> "Grid":
        return cls(size=size, cells=[cell] * (size * size))

    @property
    def start(self) -> Position:
        return (0, 0)

    @property
    def exit(self) -> Position:
        return (self.size - 1, self.size - 1)

    def index(self, pos: Position) -> int:
        return pos[0] * self.size + pos[1]

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, pos: Position) -> Cell:
        return self.cells[self.index(pos)]

    def set(self, pos: Position, cell: Cell) -> None:
        self.cells[self.index(pos)] = cell

    def is_open(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self.cells[self.index(pos)] is Cell.OPEN

    def open_cells(self) -> Iterator[Position]:
        """Yield open positions in row-major order."""
        for idx, cell in enumerate(self.cells):
            if cell is Cell.OPEN:
                yield divmod(idx, self.size)

    def open_count(self) -> int:
        return sum(1 for cell in self.cells if cell is Cell.OPEN)

    def rows(self) -> List[List[Cell]]:
        """Return a nested-list copy for presentation code."""
        return [self.cells[r * self.size : (r + 1) * self.size] for r in range(self.size)]

    def copy(self) -> "Grid":
        return Grid(size=self.size, cells=list(self.cells))
