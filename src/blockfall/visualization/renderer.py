from __future__ import annotations

import numpy as np
import pygame

from blockfall.game import BASE_SHAPES, Phase, Snapshot
from .colors import BACKGROUND, color_for_value


class Renderer:
    """Draws a `Snapshot`: board in the centre, stats and next piece on the right."""

    def __init__(self, cell_size: int = 28, margin: int = 20, panel_cells: int = 7) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font = None

    def window_size(self, width: int, height: int) -> tuple[int, int]:
        w = self.margin * 3 + (width + self.panel_cells) * self.cell_size
        h = self.margin * 2 + height * self.cell_size
        return w, h

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 24)
        return self._font

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color_for_value(int(state[y, x])), rect)
        return surf

    def _draw_next(self, screen: pygame.Surface, snapshot: Snapshot, x0: int, y0: int) -> None:
        shape = BASE_SHAPES[snapshot.next_kind]
        color = color_for_value(int(snapshot.next_kind))
        for py in range(shape.shape[0]):
            for px in range(shape.shape[1]):
                if shape[py, px]:
                    rect = pygame.Rect(
                        x0 + px * self.cell_size,
                        y0 + py * self.cell_size,
                        self.cell_size - 1,
                        self.cell_size - 1,
                    )
                    pygame.draw.rect(screen, color, rect)

    def _draw_overlay(self, screen: pygame.Surface, text: str) -> None:
        img = self._font_obj().render(text, True, (255, 255, 255))
        rect = img.get_rect(center=(screen.get_width() // 2, self.margin // 2 + 2))
        screen.blit(img, rect)

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        screen.fill(BACKGROUND)
        screen.blit(self._grid_surface(snapshot.composite()), (self.margin, self.margin))

        font = self._font_obj()
        x_panel = self.margin * 2 + snapshot.width * self.cell_size
        info_lines = [
            f"Score: {snapshot.score}",
            f"High score: {snapshot.best_score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.total_lines_cleared}",
            "Next:",
        ]
        for i, txt in enumerate(info_lines):
            img = font.render(txt, True, (230, 230, 230))
            screen.blit(img, (x_panel, self.margin + i * 22))
        self._draw_next(screen, snapshot, x_panel, self.margin + len(info_lines) * 22 + 4)

        help_lines = [
            "Move: Left/Right or A/D",
            "Rotate: Up or W",
            "Soft drop: Down or S",
            "Hard drop: Space",
            "Pause: P  Undo: U",
            "Restart: R  Quit: X/Esc",
        ]
        y_help = self.margin + len(info_lines) * 22 + 5 * self.cell_size
        for i, txt in enumerate(help_lines):
            img = font.render(txt, True, (150, 150, 160))
            screen.blit(img, (x_panel, y_help + i * 20))

        if snapshot.phase == Phase.PAUSED:
            self._draw_overlay(screen, "Paused - press P to resume")
        elif snapshot.phase == Phase.GAME_OVER:
            msg = "Game Over - R to restart, X to quit"
            if snapshot.is_new_high_score:
                msg = "New high score! " + msg
            self._draw_overlay(screen, msg)
        pygame.display.flip()
