"""Gymnasium environments for the falling-block game."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="FallingBlocks-16x24-v0",
    entry_point="falling_blocks.env.falling_block_env:FallingBlockEnv",
)

__all__ = ["FallingBlocks-16x24-v0"]
