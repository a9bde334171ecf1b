from __future__ import annotations

from typing import List, Optional, Tuple

import pygame

from falling_blocks.game import FallingBlockGame, Overlay, Piece
from falling_blocks.records import ScoreRecord


EMPTY_COLOR = (34, 34, 34)
BACKGROUND = (26, 26, 26)
GRID_LINE = (51, 51, 51)
TEXT = (230, 230, 230)
ACCENT = (76, 175, 80)
ALERT = (255, 68, 68)


class Renderer:
    def __init__(self, cell_size: int = 20, margin: int = 20, panel_cells: int = 8) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    def window_size(self, game: FallingBlockGame) -> Tuple[int, int]:
        board_w = game.grid.width * self.cell_size
        board_h = game.grid.height * self.cell_size
        return (
            self.margin * 3 + board_w + self.panel_cells * self.cell_size,
            self.margin * 2 + board_h,
        )

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 24)
            self._big_font = pygame.font.SysFont(None, 48)
        return self._font, self._big_font

    def _cell_rect(self, x: int, y: int, origin: Tuple[int, int]) -> pygame.Rect:
        return pygame.Rect(
            origin[0] + x * self.cell_size,
            origin[1] + y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _draw_board(self, screen: pygame.Surface, game: FallingBlockGame) -> None:
        origin = (self.margin, self.margin)
        for y, row in enumerate(game.grid.rows()):
            for x, cell in enumerate(row):
                color = pygame.Color(cell.color) if cell.filled and cell.color else EMPTY_COLOR
                pygame.draw.rect(screen, color, self._cell_rect(x, y, origin))
        # Active piece is composited at render time only
        piece = game.current_piece
        if piece is not None:
            for x, y in piece.cells_at(*game.current_position):
                if game.grid.is_inside(x, y):
                    pygame.draw.rect(screen, pygame.Color(piece.color), self._cell_rect(x, y, origin))

    def _draw_preview(self, screen: pygame.Surface, piece: Piece, origin: Tuple[int, int]) -> None:
        for x, y in piece.cells_at(0, 0):
            pygame.draw.rect(screen, pygame.Color(piece.color), self._cell_rect(x, y, origin))

    def _draw_panel(self, screen: pygame.Surface, game: FallingBlockGame) -> None:
        font, _ = self._fonts()
        x0 = self.margin * 2 + game.grid.width * self.cell_size
        y0 = self.margin
        lines = [
            f"Score: {game.score}",
            f"Lines: {game.lines_cleared_total}",
            f"Speed: {game.drop_interval_ms} ms",
            "Next:",
        ]
        for i, txt in enumerate(lines):
            screen.blit(font.render(txt, True, TEXT), (x0, y0 + i * 24))
        self._draw_preview(screen, game.next_piece, (x0, y0 + len(lines) * 24 + 8))

    def _draw_overlay(self, screen: pygame.Surface, game: FallingBlockGame, records: List[ScoreRecord]) -> None:
        overlay = game.overlay()
        if overlay is Overlay.NONE:
            return
        font, big_font = self._fonts()
        shade = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 230))
        screen.blit(shade, (0, 0))
        cx = screen.get_width() // 2
        y = self.margin * 3
        if overlay is Overlay.INTRO:
            title = big_font.render("FALLING BLOCKS", True, ACCENT)
            body = [
                "Left / Right : move",
                "Up : rotate",
                "Down : soft drop",
                "Space : hard drop (2 points per cell)",
                "Speed increases every 1000 points",
                "Press Enter to start",
            ]
        else:
            title = big_font.render("Game Over!", True, ALERT)
            body = [f"Final Score: {game.final_score}", "Press R to restart", "", "Ranking:"]
            body += [f"{i + 1:2d}. {r.name:<12} {r.score:>7}" for i, r in enumerate(records)]
        screen.blit(title, title.get_rect(center=(cx, y)))
        y += 48
        for txt in body:
            img = font.render(txt, True, TEXT)
            screen.blit(img, img.get_rect(center=(cx, y)))
            y += 24

    def draw(self, screen: pygame.Surface, game: FallingBlockGame, records: Optional[List[ScoreRecord]] = None) -> None:
        screen.fill(BACKGROUND)
        self._draw_board(screen, game)
        self._draw_panel(screen, game)
        self._draw_overlay(screen, game, records or [])
        pygame.display.flip()
