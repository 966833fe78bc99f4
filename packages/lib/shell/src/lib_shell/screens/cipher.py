from __future__ import annotations

from typing import List, Optional, Tuple

import pygame
from lib_puzzle import CipherEngine
from lib_puzzle.cipher import CIPHER_VALUES

from .base import EngineScreen
from .widgets import INK, WHITE, Button, draw_text, row_of_rects

_VALUE_KEYS = {
    pygame.K_1: 1,
    pygame.K_2: 2,
    pygame.K_3: 3,
    pygame.K_KP1: 1,
    pygame.K_KP2: 2,
    pygame.K_KP3: 3,
}


class CipherScreen(EngineScreen[CipherEngine]):
    title = "Şifre Çözme"

    def __init__(self, manager=None):
        super().__init__(manager)
        self._controls: List[Button] = []

    def create_engine(self) -> CipherEngine:
        width, height = self.manager.window_size
        rects = row_of_rects(len(CIPHER_VALUES), height - 130, (120, 100), width)
        self._controls = [
            Button(rect, str(value), "primary") for value, rect in zip(CIPHER_VALUES, rects)
        ]
        return CipherEngine(
            self.win_handler(),
            self.session.scheduler,
            narrator=self.session.narrator,
            rng=self.session.rng,
        )

    def render_game(self, surface: pygame.Surface, engine: CipherEngine) -> None:
        width, _ = surface.get_size()
        level = engine.level

        # legend: symbol = number
        for (symbol, value), rect in zip(level.legend, row_of_rects(len(level.legend), 80, (130, 56), width)):
            pygame.draw.rect(surface, WHITE, rect, border_radius=14)
            draw_text(surface, symbol, (rect.centerx - 30, rect.centery), 36, emoji=True)
            draw_text(surface, f"= {value}", (rect.centerx + 25, rect.centery), 32, INK)

        draw_text(surface, level.story, (width // 2, 170), 30)

        story_rects = row_of_rects(len(level.sequence), 200, (100, 100), width)
        for symbol, rect in zip(level.story_symbols(), story_rects):
            pygame.draw.rect(surface, WHITE, rect, border_radius=18)
            draw_text(surface, symbol or "?", rect.center, 64, emoji=True)

        slot_rects = row_of_rects(len(level.sequence), 320, (100, 80), width)
        for index, rect in enumerate(slot_rects):
            filled = index < len(engine.user_sequence)
            fill = (134, 239, 172) if engine.solved else ((224, 231, 255) if filled else WHITE)
            pygame.draw.rect(surface, fill, rect, border_radius=18)
            label = str(engine.user_sequence[index]) if filled else "?"
            draw_text(surface, label, rect.center, 56, INK)

        for button in self._controls:
            button.draw(surface, 56, dimmed=engine.solved)

    def handle_game_event(
        self,
        event: pygame.event.Event,
        pos: Optional[Tuple[int, int]],
        engine: CipherEngine,
    ) -> None:
        if pos is not None:
            for value, button in zip(CIPHER_VALUES, self._controls):
                if button.hit(pos):
                    engine.press(value)
                    return
            return

        if event.type == pygame.KEYDOWN and event.key in _VALUE_KEYS:
            engine.press(_VALUE_KEYS[event.key])
