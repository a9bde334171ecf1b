from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from falling_blocks.game import Action, FallingBlockGame, GameConfig, GameState
from falling_blocks.records import Leaderboard
from .renderer import Renderer


logger = logging.getLogger(__name__)


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-block game.")
    p.add_argument("--name", type=str, default="player", help="Name stored with your score")
    p.add_argument("--records", type=str, default="records.json", help="Leaderboard JSON file")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=20)
    p.add_argument("--log-level", type=str, default="info")
    return p


def apply_key(game: FallingBlockGame, key: int) -> bool:
    """Route a key press to the session. Returns False when the key does not apply."""
    if key == pygame.K_RETURN:
        return game.start()
    if key == pygame.K_r:
        if game.state is GameState.NOT_STARTED:
            return False
        game.reset()
        return True
    action = KEY_TO_ACTION.get(key)
    if action is None or game.state is not GameState.RUNNING:
        return False
    game.step(action)
    return True


def record_final_score(leaderboard: Leaderboard, name: str, game: FallingBlockGame) -> Optional[int]:
    """Add the finished game's score to the leaderboard; an unwritable records file is not fatal."""
    try:
        rank = leaderboard.add(name, game.final_score)
    except OSError as e:
        logger.warning("could not save score to %s: %s", leaderboard.path, e)
        return None
    if rank is not None:
        logger.info("%s placed #%d with %d points", name, rank, game.final_score)
    return rank


def run(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="[FALLING_BLOCKS] %(asctime)s - %(levelname)s: %(message)s",
    )
    leaderboard = Leaderboard(args.records)

    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlockGame(GameConfig(random_seed=args.seed))
        renderer = Renderer(cell_size=args.cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game))
        pygame.display.set_caption("Falling Blocks")

        last_fall = pygame.time.get_ticks()
        recorded = False

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif apply_key(game, event.key) and event.key in (pygame.K_RETURN, pygame.K_r):
                        last_fall = pygame.time.get_ticks()
                        recorded = False

            # Gravity; interval is re-read every frame since score may have changed
            now = pygame.time.get_ticks()
            if game.state is GameState.RUNNING and now - last_fall >= game.drop_interval_ms:
                game.tick()
                last_fall = now

            if game.final_score is not None and not recorded:
                record_final_score(leaderboard, args.name, game)
                recorded = True

            renderer.draw(screen, game, leaderboard.records)
            clock.tick(60)
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
