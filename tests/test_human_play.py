# tests/test_human_play.py
from __future__ import annotations

from pathlib import Path

import numpy as np
import pygame

from falling_blocks.game import GameState, PieceKind
from falling_blocks.records import Leaderboard
from falling_blocks.visualization.human_play import apply_key, build_parser, record_final_score
from falling_blocks.visualization.renderer import Renderer


def test_keys_drive_the_session(make_game) -> None:
    game = make_game(PieceKind.O)
    assert not apply_key(game, pygame.K_LEFT)
    assert not apply_key(game, pygame.K_r)
    assert apply_key(game, pygame.K_RETURN)
    assert game.state is GameState.RUNNING

    assert apply_key(game, pygame.K_LEFT)
    assert game.current_position == (6, 0)
    apply_key(game, pygame.K_SPACE)
    assert game.score == 44
    assert not apply_key(game, pygame.K_a)

    assert apply_key(game, pygame.K_r)
    assert game.state is GameState.NOT_STARTED
    assert game.score == 0


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.records == "records.json"
    assert args.seed is None


def test_window_fits_board_and_panel(make_game) -> None:
    game = make_game(PieceKind.O)
    w, h = Renderer(cell_size=20, margin=20).window_size(game)
    assert w == 20 * 3 + 16 * 20 + 8 * 20
    assert h == 20 * 2 + 24 * 20


def test_unwritable_records_file_does_not_crash(make_game, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    leaderboard = Leaderboard(str(blocker / "records.json"))

    game = make_game(PieceKind.O)
    game.board.stamp(np.ones((1, 1), dtype=bool), (7, 0), "#888888")
    game.start()
    assert game.final_score == 0

    assert record_final_score(leaderboard, "x", game) is None
    assert [r.name for r in leaderboard.records] == ["x"]
    assert not (blocker / "records.json").exists()
