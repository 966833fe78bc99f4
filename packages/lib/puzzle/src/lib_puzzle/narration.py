"""Narration boundary: spoken prompts are fire-and-forget side effects."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class NarrationPort(Protocol):
    def speak(self, text: str, interrupt: bool = False) -> None:
        """Queue `text` for speech; `interrupt` cancels in-flight narration first."""
        ...


class LoggingNarrator:
    """Narrator that writes every line to the log instead of a speech engine."""

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level

    def speak(self, text: str, interrupt: bool = False) -> None:
        try:
            logger.log(self._level, "%s%s", "(interrupt) " if interrupt else "", text)
        except Exception:  # narration must never break gameplay
            pass
