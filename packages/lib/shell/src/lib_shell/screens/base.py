from __future__ import annotations

import abc
import functools
import logging
from typing import Callable, Generic, Optional, Tuple, TypeVar

import pygame
from lib_puzzle import MiniGameEngine

from ..sequence import SceneInterface
from .widgets import back_button, click_pos, draw_background, draw_text, key_pressed

logger = logging.getLogger(__name__)

EngineT = TypeVar("EngineT", bound=MiniGameEngine)


class EngineScreen(SceneInterface, Generic[EngineT]):
    """Screen hosting one mini-game engine.

    A fresh engine is built on every `enter` and disposed on `exit`, so a
    reset scheduled by a left-behind engine never touches the new one.
    Wins go to `SessionOrchestrator.handle_win`, credited to the character
    that was playing when the engine was built.
    """

    title = ""

    def __init__(self, manager=None):
        super().__init__(manager)
        self.engine: Optional[EngineT] = None
        self._back = back_button()

    @abc.abstractmethod
    def create_engine(self) -> EngineT:
        """Build the engine bound to the session's timers, narrator and rng."""

    def win_handler(self) -> Callable[[], None]:
        return functools.partial(self.session.handle_win, self.session.current_character_id)

    def enter(self) -> None:
        logger.debug("%s: enter", type(self).__name__)
        if not self.session.ensure_character():
            return
        self.engine = self.create_engine()

    def exit(self) -> None:
        logger.debug("%s: exit", type(self).__name__)
        if self.engine is not None:
            self.engine.dispose()
        self.engine = None

    def render(self, surface: Optional[pygame.Surface]) -> None:
        if surface is None or self.engine is None:
            return

        draw_background(surface, self.session.active_theme())
        width, _ = surface.get_size()
        title_rect = pygame.Rect(0, 0, 320, 44)
        title_rect.center = (width // 2, 40)
        veil = pygame.Surface(title_rect.size, pygame.SRCALPHA)
        veil.fill((255, 255, 255, 128))
        surface.blit(veil, title_rect)
        draw_text(surface, self.title, title_rect.center, 32, (55, 48, 163))
        self.render_game(surface, self.engine)
        self._back.draw(surface, 28)

    @abc.abstractmethod
    def render_game(self, surface: pygame.Surface, engine: EngineT) -> None:
        """Draw the puzzle itself."""

    def handle_event(self, event) -> None:
        if event is None or self.engine is None:
            return

        pos = click_pos(event, self.manager.window_size)
        if pos is not None and self._back.hit(pos):
            self.session.back()
            return
        if key_pressed(event, (pygame.K_ESCAPE, pygame.K_BACKSPACE)):
            self.session.back()
            return
        self.handle_game_event(event, pos, self.engine)

    @abc.abstractmethod
    def handle_game_event(
        self,
        event: pygame.event.Event,
        pos: Optional[Tuple[int, int]],
        engine: EngineT,
    ) -> None:
        """Translate a click (`pos`) or key press into engine input."""
