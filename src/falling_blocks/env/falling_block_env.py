from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlockGame, GameConfig, PieceKind
from falling_blocks.game.pieces import CATALOG


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


_PALETTE = {int(kind): _hex_to_rgb(color) for kind, (_, color) in CATALOG.items()}


class FallingBlockEnv(gym.Env):
    """Single-player falling-block game driven by discrete commands.

    Each step applies one `Action`; gravity is not applied implicitly, so an
    agent has to soft-drop or hard-drop to make progress. Reward is the change
    in game score.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 10000,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = FallingBlockGame(self.config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.config.height, self.config.width
        n_kinds = len(PieceKind)
        # Board: 0 empty, 1..7 locked kind, -1..-7 falling piece
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8),
                "next_piece": spaces.Discrete(n_kinds),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.get_state(),
            "next_piece": int(self.game.next_piece.kind) - 1,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_locked": self.game.pieces_locked,
            "max_height": self.game.grid.get_max_height(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.spawner.rng = random.Random(seed)
        self.game.reset()
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        _, reward, terminated, _ = self.game.step(Action(int(action)))
        self._steps += 1
        truncated = not terminated and self._steps >= self.max_episode_steps
        return self._get_obs(), float(reward), bool(terminated), truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        board = self.game.get_state()
        cell = 12
        h, w = board.shape
        img = np.full((h * cell, w * cell, 3), 30, dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = abs(int(board[y, x]))
                if v:
                    img[y * cell : (y + 1) * cell - 1, x * cell : (x + 1) * cell - 1, :] = _PALETTE[v]
        return img

    def close(self) -> None:
        pass
