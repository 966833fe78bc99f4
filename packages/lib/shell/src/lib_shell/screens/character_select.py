from __future__ import annotations

import logging
from typing import List, Optional

import pygame

from ..catalog import CHARACTERS, CharacterInfo, theme_for
from ..sequence import SceneInterface
from .widgets import INK, WHITE, click_pos, draw_background, draw_text, hit_index, row_of_rects

logger = logging.getLogger(__name__)

_NUMBER_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4)


class CharacterSelectScreen(SceneInterface):
    """Four character cards; hovering previews the character's theme."""

    def __init__(self, manager=None):
        super().__init__(manager)
        self._cards: List[pygame.Rect] = []

    def enter(self) -> None:
        logger.debug("CharacterSelectScreen: enter")
        width, height = self.manager.window_size
        self._cards = row_of_rects(len(CHARACTERS), int(height * 0.3), (200, 240), width)
        self.session.speak("Lütfen bir kahraman seç!", True)

    def exit(self) -> None:
        logger.debug("CharacterSelectScreen: exit")
        self.session.preview(None)
        self._cards = []

    def render(self, surface: Optional[pygame.Surface]) -> None:
        if surface is None:
            return

        draw_background(surface, self.session.active_theme())
        width, _ = surface.get_size()
        draw_text(surface, "Kahramanını Seç", (width // 2, 80), 56)

        profiles = self.session.profiles
        for info, rect in zip(CHARACTERS, self._cards):
            theme = theme_for(info.theme_id)
            pygame.draw.rect(surface, theme.background, rect, border_radius=24)
            border = 8 if self.session.preview_character_id == info.id else 4
            pygame.draw.rect(surface, WHITE, rect, border, border_radius=24)
            draw_text(surface, info.emoji, (rect.centerx, rect.top + 80), 80, emoji=True)
            draw_text(surface, info.name, (rect.centerx, rect.top + 160), 22, theme.text)
            saved = profiles.get(info.id)
            level = saved.level if saved is not None else 1
            badge = pygame.Rect(0, 0, 110, 30)
            badge.center = (rect.centerx, rect.bottom - 30)
            pygame.draw.rect(surface, WHITE, badge, border_radius=15)
            draw_text(surface, f"Seviye {level}", badge.center, 22, INK)

    def handle_event(self, event) -> None:
        if event is None:
            return

        if event.type == pygame.MOUSEMOTION:
            index = hit_index(self._cards, tuple(event.pos))
            self.session.preview(CHARACTERS[index].id if index is not None else None)
            return

        pos = click_pos(event, self.manager.window_size)
        if pos is not None:
            index = hit_index(self._cards, pos)
            if index is not None:
                # touch screens have no hover, so preview on press as well
                self.session.preview(CHARACTERS[index].id)
                self._select(CHARACTERS[index])
            return

        if event.type == pygame.KEYDOWN and event.key in _NUMBER_KEYS:
            index = _NUMBER_KEYS.index(event.key)
            if index < len(CHARACTERS):
                self._select(CHARACTERS[index])

    def _select(self, info: CharacterInfo) -> None:
        self.session.speak(f"{info.name} seçildi. Hadi oynayalım!")
        self.session.select_character(info.id)
