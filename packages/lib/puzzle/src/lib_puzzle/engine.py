"""Common base for the mini-game engines."""

from __future__ import annotations

import abc
import logging
from typing import Callable, Optional

import numpy as np

from .narration import LoggingNarrator, NarrationPort
from .timers import Scheduler

logger = logging.getLogger(__name__)


class MiniGameEngine(abc.ABC):
    """Puzzle state machine that reports one win per solved puzzle.

    Subclasses build their board in `new_puzzle()`. After a win they
    schedule `new_puzzle()` again through `_schedule_reset`, which turns
    into a no-op once the engine has been disposed (its screen was left).
    """

    def __init__(
        self,
        on_win: Callable[[], None],
        scheduler: Scheduler,
        *,
        narrator: Optional[NarrationPort] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self._on_win = on_win
        self._scheduler = scheduler
        self._narrator = narrator or LoggingNarrator()
        self._rng = rng or np.random.default_rng()
        self._disposed = False
        self.wins = 0

    @property
    def disposed(self) -> bool:
        return self._disposed

    @abc.abstractmethod
    def new_puzzle(self) -> None:
        """Generate a fresh puzzle instance."""

    def dispose(self) -> None:
        """Detach from the screen; outstanding resets become no-ops."""
        self._disposed = True

    def _speak(self, text: str, interrupt: bool = False) -> None:
        self._narrator.speak(text, interrupt)

    def _report_win(self) -> None:
        self.wins += 1
        logger.info("%s: puzzle solved (wins=%d)", type(self).__name__, self.wins)
        self._on_win()

    def _schedule_reset(self, delay: float) -> None:
        def _reset() -> None:
            if self._disposed:
                return
            self.new_puzzle()

        self._scheduler.call_later(delay, _reset)
