from __future__ import annotations

import os
import sys
from typing import List, Tuple

import numpy as np
import pytest

# headless pygame for every test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


def pytest_configure():
    # Ensure both library `src/` dirs are importable without an install
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    for lib in ("puzzle", "shell"):
        src_path = os.path.join(root, "packages", "lib", lib, "src")
        if src_path not in sys.path:
            sys.path.insert(0, src_path)


class RecordingNarrator:
    def __init__(self) -> None:
        self.lines: List[Tuple[str, bool]] = []

    def speak(self, text: str, interrupt: bool = False) -> None:
        self.lines.append((text, interrupt))

    @property
    def texts(self) -> List[str]:
        return [text for text, _ in self.lines]


@pytest.fixture
def narrator() -> RecordingNarrator:
    return RecordingNarrator()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def scheduler():
    from lib_puzzle import Scheduler

    return Scheduler()
