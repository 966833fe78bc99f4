"""Small drawing and hit-testing helpers shared by the screens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import pygame

from ..catalog import Color, Theme

BUTTON_COLORS: Dict[str, Color] = {
    "primary": (59, 130, 246),
    "secondary": (168, 85, 247),
    "success": (34, 197, 94),
    "danger": (239, 68, 68),
}
WHITE: Color = (255, 255, 255)
INK: Color = (30, 41, 59)

# fonts that carry colour emoji on the common desktop platforms
_EMOJI_FONTS = "segoeuiemoji,notocoloremoji,applecoloremoji,symbola"

_fonts: Dict[Tuple[int, bool], pygame.font.Font] = {}


def get_font(size: int, emoji: bool = False) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    key = (size, emoji)
    font = _fonts.get(key)
    if font is None:
        font = pygame.font.SysFont(_EMOJI_FONTS if emoji else None, size)
        _fonts[key] = font
    return font


def draw_text(
    surface: pygame.Surface,
    text: str,
    center: Tuple[int, int],
    size: int = 32,
    color: Color = WHITE,
    emoji: bool = False,
) -> pygame.Rect:
    rendered = get_font(size, emoji).render(text, True, color)
    rect = rendered.get_rect(center=center)
    surface.blit(rendered, rect)
    return rect


def draw_background(surface: pygame.Surface, theme: Theme) -> None:
    """Fill with the theme colour and lay the decorative pattern on top."""
    surface.fill(theme.background)
    width, height = surface.get_size()
    pattern = pygame.Surface((width, height), pygame.SRCALPHA)
    rgba = (*theme.pattern, theme.pattern_alpha)
    if theme.pattern_kind == "grid":
        for x in range(0, width, 40):
            pygame.draw.line(pattern, rgba, (x, 0), (x, height))
        for y in range(0, height, 40):
            pygame.draw.line(pattern, rgba, (0, y), (width, y))
    elif theme.pattern_kind == "stripes":
        for x in range(-height, width, 20):
            pygame.draw.line(pattern, rgba, (x, height), (x + height, 0))
    else:
        for y in range(0, height, 60):
            for x in range(0, width, 60):
                pygame.draw.circle(pattern, rgba, (x, y), 2)
                pygame.draw.circle(pattern, rgba, (x + 30, y + 30), 1)
    surface.blit(pattern, (0, 0))


@dataclass
class Button:
    rect: pygame.Rect
    label: str
    color: str = "primary"
    emoji: bool = False

    def hit(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)

    def draw(self, surface: pygame.Surface, size: int = 32, dimmed: bool = False) -> None:
        fill = BUTTON_COLORS.get(self.color, BUTTON_COLORS["primary"])
        shadow = self.rect.move(0, 6)
        pygame.draw.rect(surface, (0, 0, 0), shadow, border_radius=16)
        pygame.draw.rect(surface, fill, self.rect, border_radius=16)
        if dimmed:
            veil = pygame.Surface(self.rect.size, pygame.SRCALPHA)
            veil.fill((255, 255, 255, 120))
            surface.blit(veil, self.rect)
        draw_text(surface, self.label, self.rect.center, size, WHITE, self.emoji)


def back_button() -> Button:
    return Button(pygame.Rect(16, 16, 120, 48), "Geri", "danger")


def row_of_rects(
    count: int, top: int, size: Tuple[int, int], width: int, gap: int = 24
) -> list[pygame.Rect]:
    """`count` equal rects centred horizontally in a window of `width`."""
    w, h = size
    total = count * w + (count - 1) * gap
    left = (width - total) // 2
    return [pygame.Rect(left + i * (w + gap), top, w, h) for i in range(count)]


def grid_of_rects(
    cols: int, rows: int, origin: Tuple[int, int], cell: int, gap: int = 8
) -> list[pygame.Rect]:
    """Row-major grid of square cells."""
    x0, y0 = origin
    return [
        pygame.Rect(x0 + c * (cell + gap), y0 + r * (cell + gap), cell, cell)
        for r in range(rows)
        for c in range(cols)
    ]


def click_pos(event: pygame.event.Event, window: Tuple[int, int]) -> Optional[Tuple[int, int]]:
    """Pointer position of a primary click or a touch, else None."""
    if event.type == pygame.MOUSEBUTTONDOWN and getattr(event, "button", 1) == 1:
        return tuple(event.pos)
    if event.type == pygame.FINGERDOWN:
        return int(event.x * window[0]), int(event.y * window[1])
    return None


def key_pressed(event: pygame.event.Event, keys: Sequence[int]) -> bool:
    return event.type == pygame.KEYDOWN and event.key in keys


def hit_index(rects: Sequence[pygame.Rect], pos: Tuple[int, int]) -> Optional[int]:
    for index, rect in enumerate(rects):
        if rect.collidepoint(pos):
            return index
    return None
