from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .pieces import Shape


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class Cell:
    filled: bool = False
    color: Optional[str] = None


EMPTY = Cell()


class GameGrid:
    """Fixed-size board of filled/empty cells.

    Row 0 is the top. Positions are the top-left offset of a shape matrix and
    may lie partly outside the board; shape cells above row 0 never collide.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"board must be at least 1x1, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.filled = np.zeros((self.height, self.width), dtype=np.bool_)
        self.colors = np.full((self.height, self.width), None, dtype=object)

    def reset(self) -> None:
        self.filled.fill(False)
        self.colors.fill(None)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _shape_cells(self, shape: Shape, position: Coordinate) -> List[Coordinate]:
        px, py = position
        return [(px + int(dx), py + int(dy)) for dy, dx in zip(*np.nonzero(shape))]

    def collides(self, shape: Shape, position: Coordinate) -> bool:
        for x, y in self._shape_cells(shape, position):
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.filled[y, x]:
                return True
        return False

    def stamp(self, shape: Shape, position: Coordinate, color: str) -> None:
        """Fill the board cells covered by `shape`; cells off the board are dropped."""
        for x, y in self._shape_cells(shape, position):
            if self.is_inside(x, y):
                self.filled[y, x] = True
                self.colors[y, x] = color

    def clear_full_rows(self) -> int:
        full_rows = np.where(np.all(self.filled, axis=1))[0]
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Remove full rows and add empty rows at the top
        self.filled = np.vstack(
            (np.zeros((num, self.width), dtype=np.bool_), np.delete(self.filled, full_rows, axis=0))
        )
        self.colors = np.vstack(
            (np.full((num, self.width), None, dtype=object), np.delete(self.colors, full_rows, axis=0))
        )
        return num

    def cell(self, x: int, y: int) -> Cell:
        if not self.filled[y, x]:
            return EMPTY
        return Cell(True, self.colors[y, x])

    def rows(self) -> List[List[Cell]]:
        return [[self.cell(x, y) for x in range(self.width)] for y in range(self.height)]

    def get_max_height(self) -> int:
        non_empty_rows = np.where(np.any(self.filled, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def clone(self) -> "GameGrid":
        other = GameGrid(self.width, self.height)
        other.filled = self.filled.copy()
        other.colors = self.colors.copy()
        return other
