from __future__ import annotations

import logging
from pathlib import Path

import pytest

from lib_shell.config import DEFAULT_SAVE_PATH, ShellConfig


def test_defaults_when_environment_is_empty():
    config = ShellConfig.from_env({})
    assert config.save_path == DEFAULT_SAVE_PATH
    assert config.log_level == logging.INFO
    assert config.window_size == (1024, 576)
    assert config.fps == 60
    assert config.window_pos is None


def test_values_from_environment():
    config = ShellConfig.from_env(
        {
            "SESLI_SAVE_PATH": "/tmp/save.json",
            "SESLI_LOG_LEVEL": "debug",
            "SESLI_WINDOW": "800x600",
            "SESLI_FPS": "30",
            "SESLI_WINDOW_POS": "500,500",
        }
    )
    assert config.save_path == Path("/tmp/save.json")
    assert config.log_level == logging.DEBUG
    assert config.window_size == (800, 600)
    assert config.fps == 30
    assert config.window_pos == (500, 500)


@pytest.mark.parametrize(
    "env, name",
    [
        ({"SESLI_LOG_LEVEL": "loud"}, "SESLI_LOG_LEVEL"),
        ({"SESLI_WINDOW": "big"}, "SESLI_WINDOW"),
        ({"SESLI_FPS": "fast"}, "SESLI_FPS"),
        ({"SESLI_FPS": "0"}, "SESLI_FPS"),
        ({"SESLI_WINDOW_POS": "1,2,3"}, "SESLI_WINDOW_POS"),
    ],
)
def test_invalid_values_name_the_variable(env, name):
    with pytest.raises(ValueError, match=name):
        ShellConfig.from_env(env)
