"""Persisted and in-memory session models.

`GameSnapshot` is the logical schema of the save blob. It is written as
camelCase JSON so that a save produced by an earlier version of the game
(where themes were stored inline as objects) still loads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .catalog import (
    CHARACTERS,
    DEFAULT_THEME_ID,
    CharacterInfo,
    Theme,
    character_info,
    theme_for,
)

MAX_SAVED_IMAGES = 10


class Screen(str, Enum):
    INTRO = "intro"
    CHARACTER_SELECT = "character-select"
    MAIN_MENU = "main-menu"
    CIPHER_GAME = "cipher-game"
    MEMORY_GAME = "memory-game"
    TILE_SWAP_GAME = "puzzle-game"
    STICKER_ROOM = "sticker-room"


# screens reachable from the main menu
ACTIVITY_SCREENS: FrozenSet[Screen] = frozenset(
    {Screen.CIPHER_GAME, Screen.MEMORY_GAME, Screen.TILE_SWAP_GAME, Screen.STICKER_ROOM}
)
# screens that only make sense with a selected character
CHARACTER_SCREENS: FrozenSet[Screen] = ACTIVITY_SCREENS | {Screen.MAIN_MENU}


class Profile(BaseModel):
    """Per-character progress record.

    `theme_id` is only a reference; `theme` resolves it through the
    catalog on every access.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    emoji: str
    level: int = Field(default=1, ge=0)
    unlocked_rewards: List[str] = Field(default_factory=list, alias="unlockedStickers")
    saved_images: List[str] = Field(default_factory=list, alias="drawings")
    theme_id: str = Field(default=DEFAULT_THEME_ID, alias="theme")

    @field_validator("theme_id", mode="before")
    @classmethod
    def _theme_reference(cls, value: Any) -> Any:
        # older saves stored the whole theme object
        if isinstance(value, dict):
            return value.get("id", DEFAULT_THEME_ID)
        return value

    @field_validator("unlocked_rewards")
    @classmethod
    def _unique_rewards(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    @field_validator("saved_images")
    @classmethod
    def _cap_images(cls, value: List[str]) -> List[str]:
        return value[:MAX_SAVED_IMAGES]

    @classmethod
    def from_catalog(cls, info: CharacterInfo) -> "Profile":
        return cls(id=info.id, name=info.name, emoji=info.emoji, theme_id=info.theme_id)

    @property
    def theme(self) -> Theme:
        info = character_info(self.id)
        return theme_for(info.theme_id if info is not None else self.theme_id)

    def add_reward(self, token: str) -> bool:
        """Set-union insert; returns False when the token was already owned."""
        if token in self.unlocked_rewards:
            return False
        self.unlocked_rewards.append(token)
        return True

    def add_image(self, blob: str) -> None:
        self.saved_images = [blob, *self.saved_images][:MAX_SAVED_IMAGES]


class GameSnapshot(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    characters: Dict[str, Profile] = Field(default_factory=dict)
    current_character_id: Optional[str] = Field(default=None, alias="currentCharacterId")
    current_screen: Screen = Field(default=Screen.INTRO, alias="currentScreen")

    @classmethod
    def default(cls) -> "GameSnapshot":
        return cls(characters={info.id: Profile.from_catalog(info) for info in CHARACTERS})

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class RewardStage(str, Enum):
    BOXED = "boxed"
    REVEALED = "revealed"


@dataclass(frozen=True)
class RewardPresentation:
    """A pending reward dialog; the session holds None while idle.

    `serial` tells apart consecutive presentations so a reveal timer of
    an older dialog never touches a newer one.
    """

    token: str
    stage: RewardStage
    serial: int

    def revealed(self) -> "RewardPresentation":
        return RewardPresentation(self.token, RewardStage.REVEALED, self.serial)
