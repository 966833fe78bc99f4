from __future__ import annotations

from typing import List, Optional, Tuple

import pygame
from lib_puzzle import TileSwapEngine
from lib_puzzle.tile_swap import GRID_SIZE

from .base import EngineScreen
from .widgets import INK, WHITE, draw_text, get_font, grid_of_rects, hit_index

BOARD_SIZE = 390


class TileSwapScreen(EngineScreen[TileSwapEngine]):
    """3x3 picture puzzle.

    Each piece is drawn at the slot where its value currently sits and
    shows the part of the picture that belongs to its value.
    """

    title = "Yapboz"

    def __init__(self, manager=None):
        super().__init__(manager)
        self._slots: List[pygame.Rect] = []
        self._origin = (0, 0)
        self._picture: Optional[pygame.Surface] = None
        self._picture_id: Optional[str] = None
        self._elapsed = 0.0

    @property
    def cell(self) -> int:
        return BOARD_SIZE // GRID_SIZE

    def create_engine(self) -> TileSwapEngine:
        width, height = self.manager.window_size
        self._origin = ((width - BOARD_SIZE) // 2, max(80, (height - BOARD_SIZE) // 2 + 20))
        self._slots = grid_of_rects(GRID_SIZE, GRID_SIZE, self._origin, self.cell, gap=0)
        self._picture = None
        self._picture_id = None
        return TileSwapEngine(
            self.win_handler(),
            self.session.scheduler,
            narrator=self.session.narrator,
            rng=self.session.rng,
        )

    def update(self, dt: float) -> None:
        self._elapsed += dt

    def _full_picture(self, engine: TileSwapEngine) -> pygame.Surface:
        # rebuilt whenever the engine picked a new target image
        if self._picture is None or self._picture_id != engine.image.id:
            picture = pygame.Surface((BOARD_SIZE, BOARD_SIZE))
            picture.fill(engine.image.color)
            glyph = get_font(int(BOARD_SIZE * 0.8), emoji=True).render(engine.image.emoji, True, INK)
            picture.blit(glyph, glyph.get_rect(center=(BOARD_SIZE // 2, BOARD_SIZE // 2)))
            self._picture = picture
            self._picture_id = engine.image.id
        return self._picture

    def render_game(self, surface: pygame.Surface, engine: TileSwapEngine) -> None:
        picture = self._full_picture(engine)
        cell = self.cell
        for piece in engine.layout():
            slot_x, slot_y = piece.slot
            off_x, off_y = piece.offset
            dest = pygame.Rect(
                self._origin[0] + slot_x * cell, self._origin[1] + slot_y * cell, cell, cell
            )
            surface.blit(picture, dest, pygame.Rect(off_x * cell, off_y * cell, cell, cell))
            slot_index = slot_y * GRID_SIZE + slot_x
            selected = engine.selected_index == slot_index
            pygame.draw.rect(surface, (250, 204, 21) if selected else WHITE, dest, 6 if selected else 2)
            if not engine.celebrating:
                draw_text(surface, str(piece.value + 1), (dest.left + 18, dest.top + 18), 24, INK)

        if engine.celebrating:
            self._draw_confetti(surface)

    def _draw_confetti(self, surface: pygame.Surface) -> None:
        width, height = surface.get_size()
        colors = ((255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0), (255, 0, 255), (0, 255, 255))
        for i in range(50):
            x = (i * 97) % width
            y = int((self._elapsed * (120 + (i % 7) * 30) + i * 53) % height)
            pygame.draw.rect(surface, colors[i % len(colors)], pygame.Rect(x, y, 10, 10))

    def handle_game_event(
        self,
        event: pygame.event.Event,
        pos: Optional[Tuple[int, int]],
        engine: TileSwapEngine,
    ) -> None:
        if pos is None:
            return
        index = hit_index(self._slots, pos)
        if index is not None:
            engine.click(index)
