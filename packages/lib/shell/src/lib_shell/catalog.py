"""Static catalog: themes, playable characters and reward stickers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Theme:
    """Visual theme descriptor.

    attributes:
        id: catalog key
        background: fill colour of the whole window
        pattern: colour of the decorative dot/grid pattern
        pattern_alpha: 0-255 opacity of the pattern layer
        pattern_kind: "dots", "grid" or "stripes"
        text: default text colour
        accent: colour for buttons and panels
        bubble: colour of the floating bubbles
    """

    id: str
    background: Color
    pattern: Color
    pattern_alpha: int
    pattern_kind: str
    text: Color
    accent: Color
    bubble: Color


@dataclass(frozen=True)
class CharacterInfo:
    id: str
    name: str
    emoji: str
    theme_id: str


DEFAULT_THEME_ID = "default"

THEMES: Dict[str, Theme] = {
    "default": Theme(
        "default", (125, 211, 252), (255, 255, 255), 77, "dots",
        (255, 255, 255), (186, 230, 253), (224, 242, 254),
    ),
    "zizi": Theme(
        "zizi", (15, 23, 42), (255, 255, 255), 255, "dots",
        (224, 242, 254), (99, 102, 241), (129, 140, 248),
    ),
    "kedi": Theme(
        "kedi", (134, 239, 172), (21, 128, 61), 102, "dots",
        (20, 83, 45), (34, 197, 94), (220, 252, 231),
    ),
    "baykus": Theme(
        "baykus", (146, 64, 14), (120, 53, 15), 51, "stripes",
        (254, 243, 199), (217, 119, 6), (253, 230, 138),
    ),
    "robot": Theme(
        "robot", (219, 234, 254), (59, 130, 246), 77, "grid",
        (30, 41, 59), (59, 130, 246), (96, 165, 250),
    ),
}

CHARACTERS: Tuple[CharacterInfo, ...] = (
    CharacterInfo("zizi", "Uzay Kaşifi Zizi", "🚀", "zizi"),
    CharacterInfo("kedi", "Dedektif Kedi", "🐱", "kedi"),
    CharacterInfo("baykus", "Bilge Baykuş", "🦉", "baykus"),
    CharacterInfo("robot", "Boyacı Robot", "🤖", "robot"),
)

CHARACTER_IDS: Tuple[str, ...] = tuple(c.id for c in CHARACTERS)

REWARD_CATALOG: Tuple[str, ...] = (
    "⭐", "🌈", "🍭", "💎", "🐾", "🎈", "🎵", "🌸", "🦄", "🍦", "🦋", "🌞",
)

# (label, rgb) pairs for the sticker room palette; white doubles as eraser
DRAWING_COLORS: Tuple[Tuple[str, Color], ...] = (
    ("Siyah", (0, 0, 0)),
    ("Kırmızı", (239, 68, 68)),
    ("Mavi", (59, 130, 246)),
    ("Yeşil", (34, 197, 94)),
    ("Sarı", (234, 179, 8)),
    ("Mor", (168, 85, 247)),
    ("Beyaz", (255, 255, 255)),
)

BRUSH_SIZES: Tuple[Tuple[str, int], ...] = (
    ("İnce", 4),
    ("Orta", 8),
    ("Kalın", 16),
    ("Dev", 24),
)


def character_info(character_id: Optional[str]) -> Optional[CharacterInfo]:
    for info in CHARACTERS:
        if info.id == character_id:
            return info
    return None


def theme_for(theme_id: Optional[str]) -> Theme:
    """Look up a theme, falling back to the default one."""
    if theme_id is None:
        return THEMES[DEFAULT_THEME_ID]
    return THEMES.get(theme_id, THEMES[DEFAULT_THEME_ID])
