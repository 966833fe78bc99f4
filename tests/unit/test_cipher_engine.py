from __future__ import annotations

import numpy as np
import pytest

from lib_puzzle import LEVELS, CipherEngine, CipherLevel
from lib_puzzle.cipher import CIPHER_RESET_DELAY, CIPHER_WIN_DELAY


class WinCounter:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


def make_engine(scheduler, narrator, seed=0, levels=LEVELS):
    wins = WinCounter()
    engine = CipherEngine(
        wins, scheduler, levels=levels, narrator=narrator, rng=np.random.default_rng(seed)
    )
    return engine, wins


@pytest.mark.parametrize("level_index", range(len(LEVELS)))
def test_exact_sequence_wins_once(scheduler, narrator, level_index):
    engine, wins = make_engine(scheduler, narrator)
    engine.level_index = level_index

    for value in engine.target_sequence:
        engine.press(value)

    assert engine.solved
    assert "Harika! Şifre çözüldü!" in narrator.texts
    # the solved row stays up before the win is reported
    scheduler.advance(CIPHER_WIN_DELAY - 0.1)
    assert wins.count == 0
    engine.press(1)
    scheduler.advance(0.2)
    assert wins.count == 1
    assert engine.solved


@pytest.mark.parametrize("level_index", range(len(LEVELS)))
@pytest.mark.parametrize("position", [0, 1, 2])
def test_wrong_digit_clears_progress(scheduler, narrator, level_index, position):
    engine, wins = make_engine(scheduler, narrator)
    engine.level_index = level_index
    target = engine.target_sequence

    for value in target[:position]:
        engine.press(value)
    wrong = next(v for v in (1, 2, 3) if v != target[position])
    engine.press(wrong)

    assert engine.user_sequence == []
    assert wins.count == 0
    assert narrator.texts[-1] == "Hayır, bu değil. Tekrar dene."


def test_reset_picks_a_different_level(scheduler, narrator):
    for seed in range(20):
        engine, wins = make_engine(scheduler, narrator, seed=seed)
        before = engine.level_index
        for value in engine.target_sequence:
            engine.press(value)

        scheduler.advance(CIPHER_WIN_DELAY + CIPHER_RESET_DELAY - 0.1)
        assert engine.solved
        scheduler.advance(0.2)

        assert not engine.solved
        assert engine.user_sequence == []
        assert engine.level_index != before
        assert wins.count == 1


def test_single_level_catalog_resets_to_same_level(scheduler, narrator):
    only = (LEVELS[0],)
    engine, wins = make_engine(scheduler, narrator, levels=only)
    for value in engine.target_sequence:
        engine.press(value)
    scheduler.advance(CIPHER_WIN_DELAY + CIPHER_RESET_DELAY)

    assert engine.level_index == 0
    assert not engine.solved
    assert wins.count == 1


def test_disposed_engine_ignores_pending_reset(scheduler, narrator):
    engine, wins = make_engine(scheduler, narrator)
    for value in engine.target_sequence:
        engine.press(value)
    engine.dispose()
    scheduler.advance(CIPHER_WIN_DELAY + CIPHER_RESET_DELAY + 1.0)

    assert engine.solved
    assert wins.count == 1


def test_input_outside_legend_values_is_rejected(scheduler, narrator):
    engine, _ = make_engine(scheduler, narrator)
    with pytest.raises(ValueError):
        engine.press(4)


def test_legend_lookup_uses_values_not_positions():
    level = CipherLevel("x", (3, 1, 2), (("a", 2), ("b", 3), ("c", 1)))
    assert level.story_symbols() == ["b", "c", "a"]
    assert level.symbol_for(9) is None


def test_level_is_ready_after_construction(scheduler, narrator):
    engine, _ = make_engine(scheduler, narrator, seed=3)
    assert engine.level is LEVELS[engine.level_index]
    assert narrator.texts == [engine.level.story + " Şifreyi çöz!"]
