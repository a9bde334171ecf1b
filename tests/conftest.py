# tests/conftest.py
from __future__ import annotations

from typing import Callable, List

import pytest

from falling_blocks.game import FallingBlockGame, GameConfig, PieceKind


KIND_INDEX = {kind: i for i, kind in enumerate(PieceKind)}


class ScriptedRandom:
    """Random source that replays a fixed cycle of indices."""

    def __init__(self, indices: List[int]) -> None:
        self.indices = indices
        self.calls: List[int] = []
        self._pos = 0

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        value = self.indices[self._pos % len(self.indices)]
        self._pos += 1
        return value


@pytest.fixture
def scripted() -> Callable[..., ScriptedRandom]:
    def make(*kinds: PieceKind) -> ScriptedRandom:
        return ScriptedRandom([KIND_INDEX[k] for k in kinds])

    return make


@pytest.fixture
def make_game(scripted) -> Callable[..., FallingBlockGame]:
    def make(*kinds: PieceKind, width: int = 16, height: int = 24) -> FallingBlockGame:
        return FallingBlockGame(GameConfig(width=width, height=height), rng=scripted(*kinds))

    return make
