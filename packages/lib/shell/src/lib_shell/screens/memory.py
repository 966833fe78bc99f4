from __future__ import annotations

from typing import List, Optional, Tuple

import pygame
from lib_puzzle import MemoryEngine

from .base import EngineScreen
from .widgets import WHITE, draw_text, grid_of_rects, hit_index

COLUMNS = 4
ROWS = 2
CARD_SIZE = 150


class MemoryScreen(EngineScreen[MemoryEngine]):
    title = "Kart Eşleştirme"

    def __init__(self, manager=None):
        super().__init__(manager)
        self._cards: List[pygame.Rect] = []

    def create_engine(self) -> MemoryEngine:
        width, height = self.manager.window_size
        gap = 16
        grid_w = COLUMNS * CARD_SIZE + (COLUMNS - 1) * gap
        grid_h = ROWS * CARD_SIZE + (ROWS - 1) * gap
        origin = ((width - grid_w) // 2, max(80, (height - grid_h) // 2 + 20))
        self._cards = grid_of_rects(COLUMNS, ROWS, origin, CARD_SIZE, gap)
        return MemoryEngine(
            self.win_handler(),
            self.session.scheduler,
            narrator=self.session.narrator,
            rng=self.session.rng,
        )

    def render_game(self, surface: pygame.Surface, engine: MemoryEngine) -> None:
        for index, rect in enumerate(self._cards):
            if engine.matched[index]:
                pygame.draw.rect(surface, (220, 252, 231), rect, border_radius=18)
                pygame.draw.rect(surface, (74, 222, 128), rect, 4, border_radius=18)
                draw_text(surface, engine.cards[index], rect.center, 72, emoji=True)
            elif engine.flipped[index]:
                pygame.draw.rect(surface, WHITE, rect, border_radius=18)
                pygame.draw.rect(surface, (249, 168, 212), rect, 4, border_radius=18)
                draw_text(surface, engine.cards[index], rect.center, 72, emoji=True)
            else:
                pygame.draw.rect(surface, (236, 72, 153), rect, border_radius=18)
                pygame.draw.rect(surface, WHITE, rect, 4, border_radius=18)
                draw_text(surface, "❓", rect.center, 56, emoji=True)

    def handle_game_event(
        self,
        event: pygame.event.Event,
        pos: Optional[Tuple[int, int]],
        engine: MemoryEngine,
    ) -> None:
        if pos is None:
            return
        index = hit_index(self._cards, pos)
        if index is not None:
            engine.click(index)
