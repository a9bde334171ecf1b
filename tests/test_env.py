# tests/test_env.py
from __future__ import annotations

import gymnasium as gym
import numpy as np

import falling_blocks.env  # noqa: F401
from falling_blocks.env.falling_block_env import FallingBlockEnv
from falling_blocks.game import Action, GameState


def test_reset_starts_a_running_game() -> None:
    env = FallingBlockEnv()
    obs, info = env.reset(seed=1)
    assert env.observation_space.contains(obs)
    assert env.game.state is GameState.RUNNING
    assert info["score"] == 0
    assert (obs["board"] < 0).sum() == 4


def test_hard_drop_reward_is_score_delta() -> None:
    env = FallingBlockEnv()
    env.reset(seed=3)
    obs, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
    assert reward > 0
    assert reward == float(info["score"])
    assert not terminated and not truncated
    assert info["pieces_locked"] == 1


def test_episode_terminates_when_stack_reaches_top() -> None:
    env = FallingBlockEnv()
    env.reset(seed=0)
    terminated = False
    for _ in range(500):
        _, _, terminated, truncated, _ = env.step(int(Action.HARD_DROP))
        if terminated:
            break
    assert terminated
    assert env.game.final_score is not None


def test_truncates_at_step_limit() -> None:
    env = FallingBlockEnv(max_episode_steps=3)
    env.reset(seed=0)
    results = [env.step(int(Action.NONE)) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_same_seed_gives_same_pieces() -> None:
    env = FallingBlockEnv()
    first, _ = env.reset(seed=11)
    second, _ = env.reset(seed=11)
    assert np.array_equal(first["board"], second["board"])
    assert first["next_piece"] == second["next_piece"]


def test_registered_env_and_rgb_render() -> None:
    env = gym.make("FallingBlocks-16x24-v0", render_mode="rgb_array")
    env.reset(seed=5)
    frame = env.render()
    assert frame.shape == (24 * 12, 16 * 12, 3)
    assert frame.dtype == np.uint8
    env.close()
