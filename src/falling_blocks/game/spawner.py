from __future__ import annotations

import random
from typing import Optional, Protocol

from .pieces import Piece, PieceKind


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        ...


class PieceSpawner:
    """Draws pieces uniformly at random, independently on every call.

    Any object with ``randrange(stop)`` can be injected; ``random.Random``
    is used when none is given.
    """

    KINDS = tuple(PieceKind)

    def __init__(self, rng: Optional[RandomSource] = None, seed: Optional[int] = None) -> None:
        self.rng: RandomSource = rng if rng is not None else random.Random(seed)

    def next_piece(self) -> Piece:
        kind = self.KINDS[self.rng.randrange(len(self.KINDS))]
        return Piece.spawn(kind)
