from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class PieceKind(IntEnum):
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.bool_)
    arr.setflags(write=False)
    return arr


CATALOG: Dict[PieceKind, Tuple[Shape, str]] = {
    PieceKind.I: (_frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]), "#00ffff"),
    PieceKind.J: (_frozen([[1, 0, 0], [1, 1, 1], [0, 0, 0]]), "#0000ff"),
    PieceKind.L: (_frozen([[0, 0, 1], [1, 1, 1], [0, 0, 0]]), "#ff7f00"),
    PieceKind.O: (_frozen([[1, 1], [1, 1]]), "#ffff00"),
    PieceKind.S: (_frozen([[0, 1, 1], [1, 1, 0], [0, 0, 0]]), "#00ff00"),
    PieceKind.T: (_frozen([[0, 1, 0], [1, 1, 1], [0, 0, 0]]), "#800080"),
    PieceKind.Z: (_frozen([[1, 1, 0], [0, 1, 1], [0, 0, 0]]), "#ff0000"),
}


def catalog(kind: PieceKind) -> Tuple[Shape, str]:
    """Return the orientation-0 shape and display color of `kind`."""
    return CATALOG[PieceKind(kind)]


def rotate(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise: new[i][j] = old[N-1-j][i]."""
    rotated = np.rot90(shape, 1, axes=(1, 0)).copy()
    rotated.setflags(write=False)
    return rotated


@dataclass(frozen=True, eq=False)
class Piece:
    kind: PieceKind
    shape: Shape
    color: str

    @classmethod
    def spawn(cls, kind: PieceKind) -> "Piece":
        shape, color = catalog(kind)
        return cls(PieceKind(kind), shape, color)

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate(self.shape), self.color)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        for dy, dx in zip(*np.nonzero(self.shape)):
            cells.append((origin_x + int(dx), origin_y + int(dy)))
        return cells

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.color == other.color
            and np.array_equal(self.shape, other.shape)
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.color, self.shape.shape, self.shape.tobytes()))
