from .character_select import CharacterSelectScreen
from .cipher import CipherScreen
from .intro import IntroScreen
from .main_menu import MainMenuScreen
from .memory import MemoryScreen
from .reward import RewardOverlay
from .sticker_room import StickerRoomScreen
from .tile_swap import TileSwapScreen

__all__ = [
    "IntroScreen",
    "CharacterSelectScreen",
    "MainMenuScreen",
    "CipherScreen",
    "MemoryScreen",
    "TileSwapScreen",
    "StickerRoomScreen",
    "RewardOverlay",
]
