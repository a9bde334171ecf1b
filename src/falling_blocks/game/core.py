from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import CATALOG, Piece
from .rules import ScoringRules, SpeedRamp
from .spawner import PieceSpawner, RandomSource


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


class GameState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


class Overlay(Enum):
    INTRO = "intro"
    NONE = "none"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 16
    height: int = 24
    random_seed: Optional[int] = None
    spawn_y: int = 0


@dataclass(frozen=True)
class LockResult:
    lines_cleared: int
    game_over: bool


@dataclass(frozen=True)
class DropResult:
    distance: int
    lines_cleared: int
    game_over: bool


class FallingBlockGame:
    """One game session: board, active piece, lookahead, score and state.

    Commands return a falsy result when the session is not running or has no
    active piece. Locking, line clearing and spawning the next piece happen in
    one synchronous step.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        ramp: Optional[SpeedRamp] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.ramp = ramp or SpeedRamp()
        self.spawner = PieceSpawner(rng=rng, seed=self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.state = GameState.NOT_STARTED
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.last_lock: Optional[LockResult] = None
        self.current_piece: Optional[Piece] = None
        self.current_x = 0
        self.current_y = 0
        self.next_piece: Piece = self.spawner.next_piece()

    def start(self) -> bool:
        if self.state is not GameState.NOT_STARTED:
            return False
        self.state = GameState.RUNNING
        logger.info("game started on %dx%d board", self.grid.width, self.grid.height)
        self._spawn_piece()
        return True

    def reset(self) -> None:
        self.grid.reset()
        self.state = GameState.NOT_STARTED
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.last_lock = None
        self.current_piece = None
        self.current_x = 0
        self.current_y = 0
        self.next_piece = self.spawner.next_piece()

    @property
    def board(self) -> GameGrid:
        return self.grid

    @property
    def current_position(self) -> Tuple[int, int]:
        return self.current_x, self.current_y

    @property
    def drop_interval_ms(self) -> int:
        return self.ramp.interval_for_score(self.score)

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    @property
    def final_score(self) -> Optional[int]:
        return self.score if self.state is GameState.GAME_OVER else None

    def overlay(self) -> Overlay:
        if self.state is GameState.NOT_STARTED:
            return Overlay.INTRO
        if self.state is GameState.GAME_OVER:
            return Overlay.GAME_OVER
        return Overlay.NONE

    def _active(self) -> bool:
        return self.state is GameState.RUNNING and self.current_piece is not None

    def spawn_position(self, piece: Piece) -> Tuple[int, int]:
        return self.grid.width // 2 - piece.width // 2, self.config.spawn_y

    def _spawn_piece(self) -> None:
        piece = self.next_piece
        self.next_piece = self.spawner.next_piece()
        x, y = self.spawn_position(piece)
        # Immediate collision check: if overlaps, game over
        if self.grid.collides(piece.shape, (x, y)):
            self.current_piece = None
            self.state = GameState.GAME_OVER
            logger.info("game over: spawn of %s blocked, final score %d", piece.kind.name, self.score)
            return
        self.current_piece = piece
        self.current_x = x
        self.current_y = y

    def _lock_piece(self) -> LockResult:
        assert self.current_piece is not None
        piece = self.current_piece
        self.grid.stamp(piece.shape, self.current_position, piece.color)
        self.current_piece = None
        self.pieces_locked += 1
        lines = self.grid.clear_full_rows()
        self.lines_cleared_total += lines
        self.score += self.rules.score_for_lines(lines)
        if lines:
            logger.debug("cleared %d line(s), score %d", lines, self.score)
        self._spawn_piece()
        self.last_lock = LockResult(lines_cleared=lines, game_over=self.game_over)
        return self.last_lock

    def move(self, dx: int, dy: int) -> bool:
        if not self._active():
            return False
        new_x = self.current_x + dx
        new_y = self.current_y + dy
        if self.grid.collides(self.current_piece.shape, (new_x, new_y)):
            return False
        self.current_x = new_x
        self.current_y = new_y
        return True

    def rotate(self) -> bool:
        if not self._active():
            return False
        rotated = self.current_piece.rotated()
        if self.grid.collides(rotated.shape, self.current_position):
            return False
        self.current_piece = rotated
        return True

    def soft_drop(self) -> bool:
        if not self._active():
            return False
        if self.move(0, 1):
            return True
        self._lock_piece()
        return False

    def tick(self) -> bool:
        return self.soft_drop()

    def hard_drop(self) -> Optional[DropResult]:
        if not self._active():
            return None
        distance = 0
        while self.move(0, 1):
            distance += 1
        self.score += self.rules.score_for_hard_drop(distance)
        result = self._lock_piece()
        return DropResult(distance, result.lines_cleared, result.game_over)

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.state is GameState.NOT_STARTED:
            self.start()
        if self.game_over:
            return self.get_state(), 0, True, self._info()

        before = self.score
        if action == Action.LEFT:
            self.move(-1, 0)
        elif action == Action.RIGHT:
            self.move(1, 0)
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass

        return self.get_state(), self.score - before, self.game_over, self._info()

    def _info(self) -> dict:
        return {
            "score": self.score,
            "lines_cleared_total": self.lines_cleared_total,
            "pieces_locked": self.pieces_locked,
            "drop_interval_ms": self.drop_interval_ms,
        }

    def get_state(self) -> np.ndarray:
        # Locked cells carry their kind code; the falling piece is negative
        state = np.zeros((self.grid.height, self.grid.width), dtype=np.int8)
        for y, x in np.argwhere(self.grid.filled):
            state[y, x] = _KIND_BY_COLOR.get(self.grid.colors[y, x], 1)
        if self.current_piece is not None and self.state is GameState.RUNNING:
            for x, y in self.current_piece.cells_at(self.current_x, self.current_y):
                if self.grid.is_inside(x, y):
                    state[y, x] = -int(self.current_piece.kind)
        return state


_KIND_BY_COLOR = {color: int(kind) for kind, (_, color) in CATALOG.items()}
