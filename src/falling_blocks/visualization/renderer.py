from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
import pygame

from falling_blocks.game import SessionSnapshot, create_piece, illustration_tier


Color = Tuple[int, int, int]

# Index 0 is unused; 1-7 follow the piece identities
COLORS: List[Optional[Color]] = [
    None,
    (255, 13, 114),   # T
    (13, 194, 255),   # O
    (13, 255, 114),   # L
    (245, 56, 255),   # J
    (255, 142, 13),   # I
    (255, 225, 56),   # S
    (56, 119, 255),   # Z
]

BACKGROUND: Color = (0, 0, 0)
PANEL: Color = (10, 10, 14)
TEXT: Color = (255, 255, 255)


def color_for_value(v: int) -> Color:
    v = abs(int(v))
    if 1 <= v < len(COLORS):
        return COLORS[v]  # type: ignore[return-value]
    return (200, 200, 200)


def cell_size_for(window_w: int, window_h: int, panel_cells: int = 7) -> int:
    """Largest cell keeping the 1:2 board plus side panel inside the window."""
    return max(4, min(window_w // (10 + panel_cells), window_h // 20))


class Renderer:
    def __init__(self, cell_size: int = 30, panel_cells: int = 7) -> None:
        self.cell_size = cell_size
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None
        self._font_size = 0

    def window_size(self, board_shape: Tuple[int, int]) -> Tuple[int, int]:
        h, w = board_shape
        return (w + self.panel_cells) * self.cell_size, h * self.cell_size

    def resize(self, window_w: int, window_h: int) -> None:
        self.cell_size = cell_size_for(window_w, window_h, self.panel_cells)

    def font(self) -> pygame.font.Font:
        size = max(12, self.cell_size)
        if self._font is None or size != self._font_size:
            self._font = pygame.font.SysFont(None, size)
            self._font_size = size
        return self._font

    def _draw_matrix(self, surf: pygame.Surface, matrix: np.ndarray, offset: Tuple[int, int]) -> None:
        ox, oy = offset
        for y in range(matrix.shape[0]):
            for x in range(matrix.shape[1]):
                v = int(matrix[y, x])
                if v == 0:
                    continue
                rect = pygame.Rect(
                    (x + ox) * self.cell_size,
                    (y + oy) * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color_for_value(v), rect)

    def _text(self, screen: pygame.Surface, text: str, x: int, y: int) -> None:
        screen.blit(self.font().render(text, True, TEXT), (x, y))

    def draw(
        self,
        screen: pygame.Surface,
        snap: SessionSnapshot,
        ranking: Sequence[int] = (),
    ) -> None:
        h, w = snap.board.shape
        screen.fill(PANEL)
        board_rect = pygame.Rect(0, 0, w * self.cell_size, h * self.cell_size)
        pygame.draw.rect(screen, BACKGROUND, board_rect)

        self._draw_matrix(screen, snap.board, (0, 0))
        if (snap.running or snap.paused) and snap.piece.size:
            self._draw_matrix(screen, snap.piece, snap.position)

        px = (w + 1) * self.cell_size
        line = self.cell_size
        self._text(screen, f"Score: {snap.score}", px, line)
        self._text(screen, f"Lines: {snap.lines}", px, line * 2)
        self._text(screen, f"Stage: {illustration_tier(snap.score)}", px, line * 3)
        if snap.next_piece is not None:
            self._text(screen, "Next", px, line * 4)
            self._draw_matrix(screen, create_piece(snap.next_piece), (w + 1, 5))

        self._text(screen, "Ranking", px, line * 9)
        for i, score in enumerate(ranking):
            self._text(screen, f"{i + 1}. {score}", px, line * (10 + i))

        if snap.game_over:
            self._banner(screen, board_rect, ["GAME OVER", f"Score: {snap.score}", "Q to restart"])
        elif snap.paused:
            self._banner(screen, board_rect, ["PAUSED"])
        elif not snap.running:
            self._banner(screen, board_rect, ["Press Q to start"])
        pygame.display.flip()

    def _banner(self, screen: pygame.Surface, area: pygame.Rect, lines: Sequence[str]) -> None:
        font = self.font()
        for i, text in enumerate(lines):
            img = font.render(text, True, TEXT)
            rect = img.get_rect(center=(area.centerx, area.centery + (i - len(lines) // 2) * font.get_linesize()))
            screen.blit(img, rect)
