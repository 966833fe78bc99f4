"""Paint surface behind the sticker room.

Saved pictures leave this module as PNG data URLs; the session stores
them as opaque strings.
"""

from __future__ import annotations

import base64
import binascii
import io
from typing import Protocol, Sequence, Tuple

import pygame

from .catalog import Color

DATA_URL_PREFIX = "data:image/png;base64,"
CANVAS_SIZE = (500, 500)
BLANK: Color = (255, 255, 255)


class DrawingSurface(Protocol):
    def clear(self) -> None: ...

    def stroke(self, points: Sequence[Tuple[int, int]], color: Color, width: int) -> None: ...

    def place_sticker(self, token: str, pos: Tuple[int, int]) -> None: ...

    def export(self) -> str: ...

    def load(self, blob: str) -> bool: ...


class CanvasSurface:
    """`DrawingSurface` over an off-screen `pygame.Surface`."""

    def __init__(self, size: Tuple[int, int] = CANVAS_SIZE) -> None:
        self.surface = pygame.Surface(size)
        self.clear()

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def clear(self) -> None:
        self.surface.fill(BLANK)

    def stroke(self, points: Sequence[Tuple[int, int]], color: Color, width: int) -> None:
        """Round-capped polyline through `points` (canvas coordinates)."""
        if not points:
            return
        radius = max(1, width // 2)
        for start, end in zip(points, points[1:]):
            pygame.draw.line(self.surface, color, start, end, width)
        for point in points:
            pygame.draw.circle(self.surface, color, point, radius)

    def place_sticker(self, token: str, pos: Tuple[int, int]) -> None:
        from .screens.widgets import get_font  # screens import this module

        glyph = get_font(40, emoji=True).render(token, True, (0, 0, 0))
        self.surface.blit(glyph, glyph.get_rect(center=pos))

    def export(self) -> str:
        buffer = io.BytesIO()
        pygame.image.save(self.surface, buffer, "canvas.png")
        return DATA_URL_PREFIX + base64.b64encode(buffer.getvalue()).decode("ascii")

    def load(self, blob: str) -> bool:
        """Paint a saved picture back onto the canvas; False if unreadable."""
        image = decode_image(blob)
        if image is None:
            return False
        self.surface.blit(image, (0, 0))
        return True


def decode_image(blob: str) -> pygame.Surface | None:
    if not blob.startswith(DATA_URL_PREFIX):
        return None
    try:
        raw = base64.b64decode(blob[len(DATA_URL_PREFIX):], validate=True)
        return pygame.image.load(io.BytesIO(raw), "canvas.png")
    except (binascii.Error, pygame.error, ValueError):
        return None
