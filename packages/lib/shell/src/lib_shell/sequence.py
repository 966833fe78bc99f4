"""Sequence manager and Scene interface for lib_shell.

The manager owns the `SessionOrchestrator` and keeps the active scene in
step with `session.current_screen`: scenes only ask the session to move,
and the manager performs the exit/enter calls afterwards.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Dict, Optional, Tuple

import pygame

from .models import Screen
from .session import SessionOrchestrator

logger = logging.getLogger(__name__)


class SceneInterface(abc.ABC):
    """One screen of the shell, driven by `SequenceManager`.

    Every hook is a no-op by default; screens override what they use and
    read or change state only through `self.session`.
    """

    def __init__(self, manager: Optional["SequenceManager"] = None) -> None:
        self.manager = manager

    @property
    def session(self) -> SessionOrchestrator:
        if self.manager is None:
            raise RuntimeError(f"{type(self).__name__}: no manager assigned")
        return self.manager.session

    def enter(self) -> None:
        """The session just moved onto this scene's screen."""
        return None

    def exit(self) -> None:
        """The session left this screen; drop per-visit state here."""
        return None

    def update(self, dt: float) -> None:
        """Per-frame tick, `dt` in seconds. Shared timers already advanced."""
        return None

    def render(self, surface: Optional[pygame.Surface]) -> None:
        """Draw onto the window surface; a None surface means headless."""
        return None

    def handle_event(self, event: Optional[pygame.event.Event]) -> None:
        """Mouse or key input routed here by the manager."""
        return None


class SequenceManager:
    """Manager for screens.

    Responsibilities:
    - register one scene per `Screen` plus the reward overlay
    - follow `session.current_screen`, calling lifecycle hooks on change
    - route input to the overlay while a reward is on display
    - advance the shared timers and forward update/render calls
    """

    def __init__(
        self,
        session: SessionOrchestrator,
        *,
        window_size: Tuple[int, int] = (1024, 576),
    ) -> None:
        self.session = session
        self.window_size = window_size
        self._scenes: Dict[Screen, SceneInterface] = {}
        self._current: Optional[SceneInterface] = None
        self._current_screen: Optional[Screen] = None
        self.overlay: Optional[SceneInterface] = None
        self.running: bool = False

    @property
    def current_scene(self) -> Optional[SceneInterface]:
        return self._current

    @property
    def current_screen(self) -> Optional[Screen]:
        return self._current_screen

    def initialize(self) -> None:
        """Enter the scene for the restored session. Call before the loop."""
        self.running = True
        self._sync()

    def register_scene(self, screen: Screen, scene: SceneInterface) -> None:
        """Register a scene instance for a screen."""
        scene.manager = self
        self._scenes[screen] = scene

    def register_overlay(self, overlay: SceneInterface) -> None:
        overlay.manager = self
        self.overlay = overlay

    def start(self, screen: Screen) -> None:
        """Switch to the scene for `screen`, calling lifecycle hooks."""
        if self._current is not None:
            self._current.exit()

        self._current_screen = screen
        self._current = self._scenes.get(screen)
        if self._current is None:
            logger.warning("SequenceManager: no scene registered for %s", screen.value)
            return
        self._current.enter()
        # enter() may itself redirect (e.g. no character selected)
        self._sync()

    def _sync(self) -> None:
        if self.session.current_screen != self._current_screen:
            self.start(self.session.current_screen)

    def update(self, dt: float) -> None:
        """Advance timers, then the current scene."""
        self.session.scheduler.advance(dt)
        if self._current is not None:
            self._current.update(dt)
        self._sync()

    def render(self, surface: Any) -> None:
        """Forward render to the current scene, overlay on top."""
        if self._current is not None:
            self._current.render(surface)
        if self.overlay is not None and self.session.reward is not None:
            self.overlay.render(surface)

    def handle_event(self, event: Any) -> None:
        """Forward event to the overlay when a reward is shown, else the scene."""
        if event is None:
            return
        if self.session.reward is not None and self.overlay is not None:
            self.overlay.handle_event(event)
        elif self._current is not None:
            self._current.handle_event(event)
        self._sync()

    def shutdown(self) -> None:
        """Shutdown manager and active scene."""
        if self._current is not None:
            self._current.exit()
        self._current = None
        self._current_screen = None
        self.running = False
