"""Sequence-cipher mini-game.

The player sees a short picture story (three symbols) and a legend that
maps each symbol to a number 1-3, then types the story back as numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .engine import MiniGameEngine
from .narration import NarrationPort
from .timers import Scheduler

CIPHER_VALUES = (1, 2, 3)
# solved row stays on screen this long before the win is reported
CIPHER_WIN_DELAY = 2.0
CIPHER_RESET_DELAY = 1.0
# upper bound for the "pick a different level" redraw
_MAX_LEVEL_DRAWS = 32

ENCOURAGEMENTS = ("Süper", "Devam et", "Aferin")


@dataclass(frozen=True)
class CipherLevel:
    story: str
    sequence: Tuple[int, int, int]
    legend: Tuple[Tuple[str, int], ...]

    def symbol_for(self, value: int) -> Optional[str]:
        """Legend lookup by value, not by position."""
        for symbol, legend_value in self.legend:
            if legend_value == value:
                return symbol
        return None

    def story_symbols(self) -> List[Optional[str]]:
        return [self.symbol_for(value) for value in self.sequence]


LEVELS: Tuple[CipherLevel, ...] = (
    CipherLevel(
        "Çiçekler açtı, arılar geldi!",
        (1, 2, 1),
        (("🌸", 1), ("🐝", 2), ("☀️", 3)),
    ),
    CipherLevel(
        "Gece oldu, yıldızlar parladı.",
        (3, 2, 3),
        (("🌙", 1), ("☁️", 2), ("⭐", 3)),
    ),
    CipherLevel(
        "Balıklar suda yüzüyor.",
        (1, 1, 2),
        (("🐟", 1), ("🦀", 2), ("🌊", 3)),
    ),
    CipherLevel(
        "Kuşlar ağaca kondu.",
        (2, 1, 3),
        (("🌳", 1), ("🐦", 2), ("🍏", 3)),
    ),
    CipherLevel(
        "Arabalar yolda gidiyor.",
        (3, 1, 2),
        (("🚗", 1), ("🚦", 2), ("⛽", 3)),
    ),
)


class CipherEngine(MiniGameEngine):
    def __init__(
        self,
        on_win: Callable[[], None],
        scheduler: Scheduler,
        *,
        levels: Sequence[CipherLevel] = LEVELS,
        narrator: Optional[NarrationPort] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__(on_win, scheduler, narrator=narrator, rng=rng)
        if not levels:
            raise ValueError("cipher needs at least one level")
        self.levels = tuple(levels)
        self.level_index = 0
        self.user_sequence: List[int] = []
        self.solved = False
        self._start_level(self._draw_level_index(None))

    @property
    def level(self) -> CipherLevel:
        return self.levels[self.level_index]

    @property
    def target_sequence(self) -> Tuple[int, ...]:
        return self.level.sequence

    def new_puzzle(self) -> None:
        self._start_level(self._draw_level_index(self.level_index))

    def _start_level(self, index: int) -> None:
        self.level_index = index
        self.user_sequence = []
        self.solved = False
        self._speak(self.level.story + " Şifreyi çöz!")

    def _draw_level_index(self, previous: Optional[int]) -> int:
        count = len(self.levels)
        index = int(self._rng.integers(count))
        if count > 1 and previous is not None:
            draws = 1
            while index == previous and draws < _MAX_LEVEL_DRAWS:
                index = int(self._rng.integers(count))
                draws += 1
            if index == previous:
                # unlucky streak: step to the neighbour instead
                index = (index + 1) % count
        return index

    def press(self, value: int) -> None:
        """Feed one number; a wrong number clears all progress."""
        if value not in CIPHER_VALUES:
            raise ValueError(f"cipher input must be one of {CIPHER_VALUES}, got {value}")
        if self.solved:
            return

        self.user_sequence.append(value)
        position = len(self.user_sequence) - 1
        target = self.target_sequence

        if self.user_sequence[position] != target[position]:
            self.user_sequence = []
            self._speak("Hayır, bu değil. Tekrar dene.")
            return

        if len(self.user_sequence) == len(target):
            self.solved = True
            self._speak("Harika! Şifre çözüldü!")
            self._scheduler.call_later(CIPHER_WIN_DELAY, self._celebrate)
        else:
            pick = ENCOURAGEMENTS[int(self._rng.integers(len(ENCOURAGEMENTS)))]
            self._speak(pick)

    def _celebrate(self) -> None:
        self._report_win()
        self._schedule_reset(CIPHER_RESET_DELAY)
