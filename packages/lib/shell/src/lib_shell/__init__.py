"""lib_shell package exports: profile persistence, session flow and screens.

`build_manager` wires every screen into a `SequenceManager` for a given
session; the app entrypoint only has to drive the pygame loop.
"""

from typing import Tuple

from .config import ShellConfig
from .models import GameSnapshot, Profile, RewardPresentation, RewardStage, Screen
from .screens import (
    CharacterSelectScreen,
    CipherScreen,
    IntroScreen,
    MainMenuScreen,
    MemoryScreen,
    RewardOverlay,
    StickerRoomScreen,
    TileSwapScreen,
)
from .sequence import SceneInterface, SequenceManager
from .session import SessionOrchestrator
from .storage import JsonFileStorage, MemoryStorage, PersistentProfileStore


def build_manager(
    session: SessionOrchestrator, window_size: Tuple[int, int] = (1024, 576)
) -> SequenceManager:
    manager = SequenceManager(session, window_size=window_size)
    manager.register_scene(Screen.INTRO, IntroScreen())
    manager.register_scene(Screen.CHARACTER_SELECT, CharacterSelectScreen())
    manager.register_scene(Screen.MAIN_MENU, MainMenuScreen())
    manager.register_scene(Screen.CIPHER_GAME, CipherScreen())
    manager.register_scene(Screen.MEMORY_GAME, MemoryScreen())
    manager.register_scene(Screen.TILE_SWAP_GAME, TileSwapScreen())
    manager.register_scene(Screen.STICKER_ROOM, StickerRoomScreen())
    manager.register_overlay(RewardOverlay())
    return manager


__all__ = [
    "ShellConfig",
    "GameSnapshot",
    "Profile",
    "RewardPresentation",
    "RewardStage",
    "Screen",
    "SceneInterface",
    "SequenceManager",
    "SessionOrchestrator",
    "JsonFileStorage",
    "MemoryStorage",
    "PersistentProfileStore",
    "build_manager",
]
