from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

import pygame

from ..catalog import BRUSH_SIZES, DRAWING_COLORS, Color
from ..drawing import CanvasSurface, decode_image
from ..sequence import SceneInterface
from .widgets import (
    INK,
    WHITE,
    Button,
    back_button,
    click_pos,
    draw_background,
    draw_text,
    hit_index,
    key_pressed,
)

logger = logging.getLogger(__name__)

THUMB_SIZE = 64


class StickerRoomScreen(SceneInterface):
    """Free drawing with unlocked stickers and a small gallery.

    Layout: tools on the left, canvas in the middle, gallery on the right.
    """

    def __init__(self, manager=None):
        super().__init__(manager)
        self.canvas: Optional[CanvasSurface] = None
        self.color: Color = DRAWING_COLORS[0][1]
        self.brush: int = 8
        self.selected_sticker: Optional[str] = None
        self._stroke: Optional[List[Tuple[int, int]]] = None
        self._back = back_button()
        self._canvas_rect = pygame.Rect(0, 0, 0, 0)
        self._swatches: List[pygame.Rect] = []
        self._brushes: List[pygame.Rect] = []
        self._stickers: List[pygame.Rect] = []
        self._gallery: List[pygame.Rect] = []
        self._clear_button: Optional[Button] = None
        self._save_button: Optional[Button] = None
        self._thumbs: Dict[str, Optional[pygame.Surface]] = {}

    def enter(self) -> None:
        logger.debug("StickerRoomScreen: enter")
        if not self.session.ensure_character():
            return
        width, height = self.manager.window_size
        self.canvas = CanvasSurface()
        canvas_w, canvas_h = self.canvas.size
        self._canvas_rect = pygame.Rect((width - canvas_w) // 2, max(70, height - canvas_h - 6), canvas_w, canvas_h)

        left = 16
        self._swatches = [pygame.Rect(left + (i % 4) * 40, 90 + (i // 4) * 40, 32, 32) for i in range(len(DRAWING_COLORS))]
        self._brushes = [pygame.Rect(left + i * 40, 190, 32, 32) for i in range(len(BRUSH_SIZES))]
        self._layout_stickers()
        gallery_x = self._canvas_rect.right + 16
        self._gallery = [
            pygame.Rect(gallery_x + (i % 2) * (THUMB_SIZE + 8), 90 + (i // 2) * (THUMB_SIZE + 8), THUMB_SIZE, THUMB_SIZE)
            for i in range(10)
        ]
        self._clear_button = Button(pygame.Rect(width - 260, 16, 110, 44), "Temizle", "danger")
        self._save_button = Button(pygame.Rect(width - 136, 16, 120, 44), "Kaydet", "success")

        self.color = DRAWING_COLORS[0][1]
        self.brush = 8
        self.selected_sticker = None
        self._stroke = None
        self.session.speak("Burası senin odan. Resim yap ve çıkartma yapıştır!")

    def exit(self) -> None:
        logger.debug("StickerRoomScreen: exit")
        self.canvas = None
        self._stroke = None
        self._thumbs = {}

    def _layout_stickers(self) -> None:
        profile = self.session.current_profile
        count = len(profile.unlocked_rewards) if profile is not None else 0
        self._stickers = [pygame.Rect(16 + (i % 4) * 40, 260 + (i // 4) * 40, 36, 36) for i in range(count)]

    def _to_canvas(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        return pos[0] - self._canvas_rect.left, pos[1] - self._canvas_rect.top

    # -------- Actions --------
    def pick_color(self, index: int) -> None:
        self.color = DRAWING_COLORS[index][1]
        self.selected_sticker = None

    def pick_brush(self, index: int) -> None:
        self.brush = BRUSH_SIZES[index][1]

    def pick_sticker(self, index: int) -> None:
        profile = self.session.current_profile
        if profile is not None and index < len(profile.unlocked_rewards):
            self.selected_sticker = profile.unlocked_rewards[index]

    def clear(self) -> None:
        if self.canvas is not None:
            self.canvas.clear()
            self.session.speak("Tertemiz oldu!")

    def save(self) -> None:
        if self.canvas is None:
            return
        self.session.save_drawing(self.canvas.export())
        self.session.speak("Resim kaydedildi!")

    def open_saved(self, index: int) -> None:
        profile = self.session.current_profile
        if self.canvas is None or profile is None or index >= len(profile.saved_images):
            return
        self.canvas.load(profile.saved_images[index])

    def press_canvas(self, point: Tuple[int, int]) -> None:
        if self.canvas is None:
            return
        if self.selected_sticker is not None:
            # a sticker is a single tap, then back to the brush
            self.canvas.place_sticker(self.selected_sticker, point)
            self.selected_sticker = None
            self.session.speak("Yapıştı!")
            return
        self._stroke = [point]
        self.canvas.stroke(self._stroke, self.color, self.brush)

    def drag_canvas(self, point: Tuple[int, int]) -> None:
        if self.canvas is None or self._stroke is None:
            return
        self.canvas.stroke([self._stroke[-1], point], self.color, self.brush)
        self._stroke.append(point)

    def release_canvas(self) -> None:
        self._stroke = None

    # -------- Scene hooks --------
    def render(self, surface: Optional[pygame.Surface]) -> None:
        if surface is None or self.canvas is None:
            return

        draw_background(surface, self.session.active_theme())
        self._back.draw(surface, 28)
        for button in (self._clear_button, self._save_button):
            if button is not None:
                button.draw(surface, 24)

        draw_text(surface, "Renkler", (90, 76), 20, INK)
        for (_name, rgb), rect in zip(DRAWING_COLORS, self._swatches):
            pygame.draw.rect(surface, rgb, rect, border_radius=16)
            pygame.draw.rect(surface, INK if rgb == self.color else WHITE, rect, 3, border_radius=16)

        draw_text(surface, "Kalınlık", (90, 176), 20, INK)
        for (_label, size), rect in zip(BRUSH_SIZES, self._brushes):
            pygame.draw.rect(surface, (224, 231, 255) if size == self.brush else WHITE, rect, border_radius=8)
            pygame.draw.circle(surface, INK, rect.center, min(size, 16) // 2)

        draw_text(surface, "Çıkartmalar", (90, 246), 20, INK)
        profile = self.session.current_profile
        stickers = profile.unlocked_rewards if profile is not None else []
        if not stickers:
            draw_text(surface, "Henüz yok", (90, 280), 16, (148, 163, 184))
        for token, rect in zip(stickers, self._stickers):
            fill = (254, 240, 138) if token == self.selected_sticker else WHITE
            pygame.draw.rect(surface, fill, rect, border_radius=8)
            draw_text(surface, token, rect.center, 28, emoji=True)

        surface.blit(self.canvas.surface, self._canvas_rect)
        pygame.draw.rect(surface, WHITE, self._canvas_rect, 4)

        if profile is not None:
            gallery_center = self._gallery[0].left + THUMB_SIZE + 4 if self._gallery else 0
            draw_text(surface, "Galeri", (gallery_center, 76), 20, INK)
            for blob, rect in zip(profile.saved_images, self._gallery):
                thumb = self._thumbnail(blob)
                if thumb is not None:
                    surface.blit(thumb, rect)
                pygame.draw.rect(surface, WHITE, rect, 2)

    def _thumbnail(self, blob: str) -> Optional[pygame.Surface]:
        if blob not in self._thumbs:
            image = decode_image(blob)
            self._thumbs[blob] = (
                pygame.transform.smoothscale(image, (THUMB_SIZE, THUMB_SIZE)) if image is not None else None
            )
        return self._thumbs[blob]

    def handle_event(self, event) -> None:
        if event is None or self.canvas is None:
            return

        if event.type == pygame.MOUSEMOTION:
            if self._canvas_rect.collidepoint(event.pos):
                self.drag_canvas(self._to_canvas(event.pos))
            else:
                self.release_canvas()
            return
        if event.type in (pygame.MOUSEBUTTONUP, pygame.FINGERUP):
            self.release_canvas()
            return

        if key_pressed(event, (pygame.K_ESCAPE, pygame.K_BACKSPACE)):
            self.session.back()
            return

        pos = click_pos(event, self.manager.window_size)
        if pos is None:
            return

        if self._back.hit(pos):
            self.session.back()
        elif self._clear_button is not None and self._clear_button.hit(pos):
            self.clear()
        elif self._save_button is not None and self._save_button.hit(pos):
            self.save()
        elif self._canvas_rect.collidepoint(pos):
            self.press_canvas(self._to_canvas(pos))
        else:
            self._layout_stickers()
            for rects, action in (
                (self._swatches, self.pick_color),
                (self._brushes, self.pick_brush),
                (self._stickers, self.pick_sticker),
                (self._gallery, self.open_saved),
            ):
                index = hit_index(rects, pos)
                if index is not None:
                    action(index)
                    return
