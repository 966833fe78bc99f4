"""lib_puzzle package exports: mini-game engines and their shared pieces.

Engines are UI-free state machines. They narrate through a
`NarrationPort`, schedule delayed effects on a `Scheduler` and report
solved puzzles through an `on_win` callback.
"""

from .cipher import LEVELS, CipherEngine, CipherLevel
from .engine import MiniGameEngine
from .memory import MEMORY_CARDS_POOL, MemoryEngine
from .narration import LoggingNarrator, NarrationPort
from .rewards import allocate
from .tile_swap import PUZZLE_IMAGES, TileSwapEngine, piece_layout
from .timers import Scheduler

__all__ = [
    "Scheduler",
    "NarrationPort",
    "LoggingNarrator",
    "allocate",
    "MiniGameEngine",
    "CipherEngine",
    "CipherLevel",
    "LEVELS",
    "MemoryEngine",
    "MEMORY_CARDS_POOL",
    "TileSwapEngine",
    "PUZZLE_IMAGES",
    "piece_layout",
]
