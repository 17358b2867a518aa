from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import pygame

from blockfall.game import ROTATIONS, TetrominoType


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (0, 0, 240),    # J
        3: (240, 160, 0),  # L
        4: (240, 240, 0),  # O
        5: (0, 240, 0),    # S
        6: (160, 0, 240),  # T
        7: (240, 0, 0),    # Z
    }
    return palette.get(abs(v), (200, 200, 200))


GHOST_COLOR = (108, 124, 134)
TEXT_COLOR = (230, 230, 230)


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        board_w = width * self.cell_size
        board_h = height * self.cell_size
        panel_w = self.panel_cells * self.cell_size
        return self.margin * 3 + board_w + panel_w, self.margin * 2 + board_h

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _cell_rect(self, x: int, y: int, inset: int = 0) -> pygame.Rect:
        return pygame.Rect(
            self.margin + x * self.cell_size + inset,
            self.margin + y * self.cell_size + inset,
            self.cell_size - 1 - 2 * inset,
            self.cell_size - 1 - 2 * inset,
        )

    def _draw_cells(self, surf: pygame.Surface, kind: TetrominoType, rotation: int, ax: int, ay: int,
                    color: Tuple[int, int, int], width: int = 0, inset: int = 0) -> None:
        for dx, dy in ROTATIONS[kind][rotation]:
            if ay + dy >= 0:
                pygame.draw.rect(surf, color, self._cell_rect(ax + dx, ay + dy, inset), width)

    def _draw_preview(self, surf: pygame.Surface, kind: TetrominoType, x0: int, y0: int, size: int) -> None:
        for dx, dy in ROTATIONS[kind][0]:
            rect = pygame.Rect(x0 + (dx + 1) * size, y0 + (dy + 1) * size, size - 2, size - 2)
            pygame.draw.rect(surf, _color_for_value(int(kind)), rect)

    def draw(self, screen: pygame.Surface, state: Dict[str, Any]) -> None:
        grid = state["grid"]
        h, w = grid.shape
        screen.fill((10, 10, 14))

        # Placed blocks
        for y in range(h):
            for x in range(w):
                pygame.draw.rect(screen, _color_for_value(int(grid[y, x])), self._cell_rect(x, y))

        piece = state["piece"]
        if piece is not None and not state["game_over"]:
            ghost_y = state["ghost_y"]
            if ghost_y is not None:
                self._draw_cells(screen, piece.kind, piece.rotation, piece.x, ghost_y, GHOST_COLOR, width=2, inset=3)
            best = state["best"]
            if best is not None:
                faded = tuple(c // 2 for c in _color_for_value(int(piece.kind)))
                self._draw_cells(screen, piece.kind, best.rotation, best.x, best.y, faded, width=2)
            self._draw_cells(screen, piece.kind, piece.rotation, piece.x, piece.y, _color_for_value(int(piece.kind)))

        self._draw_panel(screen, state, w)
        pygame.display.flip()

    def _draw_panel(self, screen: pygame.Surface, state: Dict[str, Any], grid_w: int) -> None:
        font = self._font_obj()
        x0 = self.margin * 2 + grid_w * self.cell_size
        y = self.margin
        small = self.cell_size // 2

        lines = [f"Score: {state['score']}", f"Lines: {state['lines']}", f"Level: {state['level']}"]
        for txt in lines:
            screen.blit(font.render(txt, True, TEXT_COLOR), (x0, y))
            y += 22

        y += 10
        screen.blit(font.render("Hold", True, TEXT_COLOR), (x0, y))
        y += 22
        if state["hold"] is not None:
            self._draw_preview(screen, state["hold"], x0, y, small)
        y += small * 4

        screen.blit(font.render("Next", True, TEXT_COLOR), (x0, y))
        y += 22
        for kind in state["queue"]:
            self._draw_preview(screen, kind, x0, y, small)
            y += small * 3

        assist = state["assist"]
        if assist is not None:
            y += 10
            screen.blit(font.render(f"Assist: column {assist.x} (A)", True, TEXT_COLOR), (x0, y))
            screen.blit(font.render(assist.reason, True, TEXT_COLOR), (x0, y + 20))

        banner = None
        if state["game_over"]:
            banner = "Game Over - R to restart"
        elif state["paused"]:
            banner = "Paused - P to resume"
        if banner:
            text = font.render(banner, True, (255, 255, 255))
            rect = text.get_rect(center=(self.margin + grid_w * self.cell_size // 2, screen.get_height() // 2))
            screen.blit(text, rect)
