"""Runtime configuration read from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

ENV_SAVE_PATH = "SESLI_SAVE_PATH"
ENV_LOG_LEVEL = "SESLI_LOG_LEVEL"
ENV_WINDOW = "SESLI_WINDOW"
ENV_FPS = "SESLI_FPS"
ENV_WINDOW_POS = "SESLI_WINDOW_POS"

DEFAULT_SAVE_PATH = Path(".cache") / "sesli_sifre.json"
DEFAULT_WINDOW = (1024, 576)


def _parse_pair(name: str, raw: str, sep: str) -> Tuple[int, int]:
    parts = raw.lower().split(sep)
    try:
        if len(parts) != 2:
            raise ValueError
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"{name} must look like 'A{sep}B' with integers, got {raw!r}") from None


@dataclass(frozen=True)
class ShellConfig:
    save_path: Path = DEFAULT_SAVE_PATH
    log_level: int = logging.INFO
    window_size: Tuple[int, int] = DEFAULT_WINDOW
    fps: int = 60
    window_pos: Optional[Tuple[int, int]] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ShellConfig":
        env = os.environ if environ is None else environ

        save_path = Path(env.get(ENV_SAVE_PATH) or DEFAULT_SAVE_PATH)

        level_name = (env.get(ENV_LOG_LEVEL) or "INFO").upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            raise ValueError(f"{ENV_LOG_LEVEL} is not a logging level: {level_name!r}")

        window = DEFAULT_WINDOW
        if env.get(ENV_WINDOW):
            window = _parse_pair(ENV_WINDOW, env[ENV_WINDOW], "x")

        fps = 60
        if env.get(ENV_FPS):
            try:
                fps = int(env[ENV_FPS])
            except ValueError:
                raise ValueError(f"{ENV_FPS} must be an integer, got {env[ENV_FPS]!r}") from None
            if fps <= 0:
                raise ValueError(f"{ENV_FPS} must be positive, got {fps}")

        window_pos = None
        if env.get(ENV_WINDOW_POS):
            window_pos = _parse_pair(ENV_WINDOW_POS, env[ENV_WINDOW_POS], ",")

        return cls(
            save_path=save_path,
            log_level=log_level,
            window_size=window,
            fps=fps,
            window_pos=window_pos,
        )
