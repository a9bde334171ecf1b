"""Game engine for the falling-block puzzle.

Exports the core game engine and supporting classes:
- PieceKind, Piece, catalog, rotate: piece catalog and clockwise rotation
- GameGrid, Cell: board cells, collision, stamping and line clearing
- PieceSpawner: uniform random piece selection with an injectable source
- ScoringRules, SpeedRamp: points and drop-interval progression
- FallingBlockGame: session state machine and command surface
"""

from .grid import Cell, GameGrid
from .pieces import Piece, PieceKind, catalog, rotate
from .rules import ScoringRules, SpeedRamp
from .spawner import PieceSpawner, RandomSource
from .core import (
    Action,
    DropResult,
    FallingBlockGame,
    GameConfig,
    GameState,
    LockResult,
    Overlay,
)

__all__ = [
    "Cell",
    "GameGrid",
    "Piece",
    "PieceKind",
    "catalog",
    "rotate",
    "ScoringRules",
    "SpeedRamp",
    "PieceSpawner",
    "RandomSource",
    "Action",
    "DropResult",
    "FallingBlockGame",
    "GameConfig",
    "GameState",
    "LockResult",
    "Overlay",
]
