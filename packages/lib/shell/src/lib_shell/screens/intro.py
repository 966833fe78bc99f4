import logging
from typing import Optional

import pygame

from ..sequence import SceneInterface
from .widgets import Button, click_pos, draw_background, draw_text, key_pressed

logger = logging.getLogger(__name__)

START_KEYS = (pygame.K_RETURN, pygame.K_SPACE, pygame.K_s)


class IntroScreen(SceneInterface):
    def __init__(self, manager=None):
        super().__init__(manager)
        self._elapsed = 0.0
        self._start_button: Optional[Button] = None

    def enter(self):
        logger.debug("IntroScreen: enter")
        self._elapsed = 0.0
        width, height = self.manager.window_size
        self._start_button = Button(
            pygame.Rect(width // 2 - 140, int(height * 0.72), 280, 72), "Başla", "success"
        )
        self.session.speak(
            "Şifre Kahramanları oyununa hoş geldin! Hadi başla düğmesine bas!", True
        )

    def exit(self):
        logger.debug("IntroScreen: exit")
        self._start_button = None

    def update(self, dt: float) -> None:
        self._elapsed += dt

    def render(self, surface: Optional[pygame.Surface]) -> None:
        if surface is None:
            return

        draw_background(surface, self.session.active_theme())
        width, height = surface.get_size()
        # gentle bounce on the hero
        bounce = int(abs(((self._elapsed * 2.0) % 2.0) - 1.0) * 24)
        draw_text(surface, "🦸", (width // 2, height // 4 + bounce), 120, emoji=True)
        draw_text(surface, "Şifre Kahramanları", (width // 2, int(height * 0.5)), 64)
        draw_text(surface, "Oyununa Hoş Geldin!", (width // 2, int(height * 0.6)), 32)
        if self._start_button is not None:
            self._start_button.draw(surface, 40)

    def handle_event(self, event) -> None:
        """Start button, or Enter/Space/S, moves on to character select."""
        if event is None:
            return

        pos = click_pos(event, self.manager.window_size)
        if pos is not None and self._start_button is not None and self._start_button.hit(pos):
            self.session.start()
        elif key_pressed(event, START_KEYS):
            self.session.start()
