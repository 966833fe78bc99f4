"""Tile-swap picture puzzle on a 3x3 grid.

`tiles[slot]` holds the piece value shown in that slot; the puzzle is
solved when every slot holds its own value (the identity permutation).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .engine import MiniGameEngine
from .narration import NarrationPort
from .timers import Scheduler

GRID_SIZE = 3
TILE_COUNT = GRID_SIZE * GRID_SIZE
TILE_WIN_DELAY = 3.0
TILE_RESET_DELAY = 1.0


@dataclass(frozen=True)
class PuzzleImage:
    id: str
    emoji: str
    color: Tuple[int, int, int]


PUZZLE_IMAGES: Tuple[PuzzleImage, ...] = (
    PuzzleImage("cat", "🐱", (254, 215, 170)),
    PuzzleImage("bear", "🐻", (253, 230, 138)),
    PuzzleImage("tiger", "🐯", (253, 186, 116)),
    PuzzleImage("panda", "🐼", (167, 243, 208)),
    PuzzleImage("lion", "🦁", (254, 240, 138)),
    PuzzleImage("pig", "🐷", (251, 207, 232)),
    PuzzleImage("koala", "🐨", (203, 213, 225)),
    PuzzleImage("sun", "🌞", (186, 230, 253)),
)


@dataclass(frozen=True)
class PiecePlacement:
    value: int
    slot: Tuple[int, int]
    offset: Tuple[int, int]


def is_identity(tiles: Sequence[int]) -> bool:
    return all(value == slot for slot, value in enumerate(tiles))


def shuffled_tiles(rng: np.random.Generator, count: int = TILE_COUNT) -> List[int]:
    """Random permutation of ``0..count-1`` that is never already solved."""
    if count < 2:
        raise ValueError("need at least two tiles to shuffle")
    tiles = [int(v) for v in rng.permutation(count)]
    while is_identity(tiles):
        tiles = [int(v) for v in rng.permutation(count)]
    return tiles


def piece_layout(tiles: Sequence[int], grid: int = GRID_SIZE) -> List[PiecePlacement]:
    """Where each piece sits and which part of the picture it shows.

    The slot comes from the index of the value in `tiles`; the picture
    offset comes from the value itself. Keeping the two apart is what
    makes a solved grid show the whole picture.
    """
    placements = []
    for value in range(len(tiles)):
        slot_index = list(tiles).index(value)
        placements.append(
            PiecePlacement(
                value=value,
                slot=(slot_index % grid, slot_index // grid),
                offset=(value % grid, value // grid),
            )
        )
    return placements


class TileSwapEngine(MiniGameEngine):
    def __init__(
        self,
        on_win: Callable[[], None],
        scheduler: Scheduler,
        *,
        images: Sequence[PuzzleImage] = PUZZLE_IMAGES,
        narrator: Optional[NarrationPort] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__(on_win, scheduler, narrator=narrator, rng=rng)
        if not images:
            raise ValueError("tile swap needs at least one image")
        self.images = tuple(images)
        self.tiles: List[int] = list(range(TILE_COUNT))
        self.selected_index: Optional[int] = None
        self.image = self.images[0]
        self.celebrating = False
        self.new_puzzle()

    def new_puzzle(self) -> None:
        self.celebrating = False
        self.selected_index = None
        self.image = self.images[int(self._rng.integers(len(self.images)))]
        self._speak("Parçaları karıştırıyorum. Numaralara bakarak düzeltebilir misin?")
        self.tiles = shuffled_tiles(self._rng)

    @property
    def solved(self) -> bool:
        return is_identity(self.tiles)

    def layout(self) -> List[PiecePlacement]:
        return piece_layout(self.tiles)

    def click(self, index: int) -> None:
        if not 0 <= index < TILE_COUNT:
            raise ValueError(f"tile index out of range: {index}")
        if self.celebrating:
            return

        if self.selected_index is None:
            self.selected_index = index
            self._speak("Şimdi değiştireceğin parçaya bas.")
            return

        first = self.selected_index
        self.tiles[first], self.tiles[index] = self.tiles[index], self.tiles[first]
        self.selected_index = None

        if self.solved:
            self.celebrating = True
            self._speak("Harika! Yapbozu tamamladın!")
            self._scheduler.call_later(TILE_WIN_DELAY, self._celebrate)

    def _celebrate(self) -> None:
        self._report_win()
        self._schedule_reset(TILE_RESET_DELAY)
