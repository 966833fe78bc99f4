"""Memory-match mini-game: four pairs of face-down cards."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import numpy as np

from .engine import MiniGameEngine
from .narration import NarrationPort
from .timers import Scheduler

MEMORY_CARDS_POOL = ("🐶", "🐱", "🐻", "🐰", "🌞", "⭐", "🍎", "🌸", "🎈", "🐾")
PAIR_COUNT = 4
MEMORY_MISMATCH_DELAY = 0.9
MEMORY_WIN_DELAY = 1.0
MEMORY_RESET_DELAY = 1.0


def deal_cards(pool: Sequence[str], rng: np.random.Generator, pairs: int = PAIR_COUNT) -> List[str]:
    """Draw `pairs` distinct symbols, duplicate each and shuffle the result."""
    if len(set(pool)) < pairs:
        raise ValueError(f"pool needs at least {pairs} distinct symbols")
    distinct = list(dict.fromkeys(pool))
    chosen = [distinct[i] for i in rng.choice(len(distinct), size=pairs, replace=False)]
    cards = chosen + chosen
    order = rng.permutation(len(cards))
    return [cards[i] for i in order]


class MemoryEngine(MiniGameEngine):
    def __init__(
        self,
        on_win: Callable[[], None],
        scheduler: Scheduler,
        *,
        pool: Sequence[str] = MEMORY_CARDS_POOL,
        narrator: Optional[NarrationPort] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__(on_win, scheduler, narrator=narrator, rng=rng)
        self.pool = tuple(pool)
        self.cards: List[str] = []
        self.flipped: List[bool] = []
        self.matched: List[bool] = []
        self.choices: List[int] = []
        # bumped on every deal so timers from an older board do nothing
        self._board = 0
        self.new_puzzle()

    def new_puzzle(self) -> None:
        self._board += 1
        self.cards = deal_cards(self.pool, self._rng)
        self.flipped = [False] * len(self.cards)
        self.matched = [False] * len(self.cards)
        self.choices = []
        self._speak("Kartları eşleştir!")

    @property
    def complete(self) -> bool:
        return bool(self.matched) and all(self.matched)

    def is_face_up(self, index: int) -> bool:
        return self.flipped[index] or self.matched[index]

    def click(self, index: int) -> None:
        if not 0 <= index < len(self.cards):
            raise ValueError(f"card index out of range: {index}")
        if self.matched[index] or self.flipped[index] or len(self.choices) >= 2:
            return

        self.flipped[index] = True
        self.choices.append(index)
        if len(self.choices) < 2:
            return

        first, second = self.choices
        if self.cards[first] == self.cards[second]:
            self._speak("Aferin!")
            self.matched[first] = True
            self.matched[second] = True
            self.choices = []
            if self.complete:
                self._scheduler.call_later(MEMORY_WIN_DELAY, self._celebrate)
        else:
            self._speak("Hımm, değil.")
            board = self._board
            self._scheduler.call_later(
                MEMORY_MISMATCH_DELAY, lambda: self._hide(board, first, second)
            )

    def _hide(self, board: int, first: int, second: int) -> None:
        if self._disposed or board != self._board:
            return
        self.flipped[first] = False
        self.flipped[second] = False
        self.choices = []

    def _celebrate(self) -> None:
        self._speak("Tebrikler! Hepsini buldun!")
        self._report_win()
        self._schedule_reset(MEMORY_RESET_DELAY)
