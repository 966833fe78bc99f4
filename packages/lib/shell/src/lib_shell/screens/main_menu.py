from __future__ import annotations

import logging
from typing import List, Optional

import pygame

from ..models import Screen
from ..sequence import SceneInterface
from .widgets import (
    Button,
    back_button,
    click_pos,
    draw_background,
    draw_text,
    key_pressed,
)

logger = logging.getLogger(__name__)

MENU_ITEMS = (
    (Screen.CIPHER_GAME, "Şifre Çözme", "primary"),
    (Screen.MEMORY_GAME, "Kart Eşleştirme", "secondary"),
    (Screen.TILE_SWAP_GAME, "Yapboz", "success"),
    (Screen.STICKER_ROOM, "Kahraman Odası", "danger"),
)
_NUMBER_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4)


class MainMenuScreen(SceneInterface):
    def __init__(self, manager=None):
        super().__init__(manager)
        self._buttons: List[Button] = []
        self._back = back_button()

    def enter(self) -> None:
        logger.debug("MainMenuScreen: enter")
        if not self.session.ensure_character():
            return
        width, height = self.manager.window_size
        self._buttons = []
        for i, (_screen, label, color) in enumerate(MENU_ITEMS):
            col, row = i % 2, i // 2
            rect = pygame.Rect(0, 0, 360, 110)
            rect.center = (width // 2 + (col * 2 - 1) * 200, int(height * 0.4) + row * 140)
            self._buttons.append(Button(rect, label, color))
        self.session.speak("Bir oyun seç bakalım!", True)

    def exit(self) -> None:
        logger.debug("MainMenuScreen: exit")
        self._buttons = []

    def status_line(self) -> str:
        profile = self.session.current_profile
        if profile is None:
            return ""
        return f"Seviye: {profile.level} • Çıkartmalar: {len(profile.unlocked_rewards)}"

    def render(self, surface: Optional[pygame.Surface]) -> None:
        if surface is None:
            return

        theme = self.session.active_theme()
        draw_background(surface, theme)
        width, height = surface.get_size()
        profile = self.session.current_profile
        if profile is not None:
            draw_text(surface, profile.emoji, (width // 2 - 180, 70), 64, emoji=True)
            draw_text(surface, profile.name, (width // 2 + 40, 70), 44, theme.text)
        for button in self._buttons:
            button.draw(surface, 36)
        draw_text(surface, self.status_line(), (width // 2, height - 50), 28, theme.text)
        self._back.draw(surface, 28)

    def handle_event(self, event) -> None:
        if event is None:
            return

        pos = click_pos(event, self.manager.window_size)
        if pos is not None:
            if self._back.hit(pos):
                self.session.back()
                return
            for (screen, _label, _color), button in zip(MENU_ITEMS, self._buttons):
                if button.hit(pos):
                    self.session.choose(screen)
                    return
            return

        if key_pressed(event, (pygame.K_ESCAPE, pygame.K_BACKSPACE)):
            self.session.back()
        elif event.type == pygame.KEYDOWN and event.key in _NUMBER_KEYS:
            self.session.choose(MENU_ITEMS[_NUMBER_KEYS.index(event.key)][0])
