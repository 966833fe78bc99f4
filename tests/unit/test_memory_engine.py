from __future__ import annotations

from collections import Counter

import numpy as np
import pytest

from lib_puzzle import MEMORY_CARDS_POOL, MemoryEngine
from lib_puzzle.memory import (
    MEMORY_MISMATCH_DELAY,
    MEMORY_RESET_DELAY,
    MEMORY_WIN_DELAY,
    deal_cards,
)


def make_engine(scheduler, narrator, seed=0):
    wins = []
    engine = MemoryEngine(
        lambda: wins.append(True), scheduler, narrator=narrator, rng=np.random.default_rng(seed)
    )
    return engine, wins


def pairs_of(engine):
    positions = {}
    for index, card in enumerate(engine.cards):
        positions.setdefault(card, []).append(index)
    return list(positions.values())


def solve(engine):
    for first, second in pairs_of(engine):
        engine.click(first)
        engine.click(second)


@pytest.mark.parametrize("seed", range(25))
def test_board_has_four_distinct_pairs(seed):
    cards = deal_cards(MEMORY_CARDS_POOL, np.random.default_rng(seed))
    counts = Counter(cards)
    assert len(cards) == 8
    assert len(counts) == 4
    assert set(counts.values()) == {2}
    assert set(counts) <= set(MEMORY_CARDS_POOL)


def test_matching_pair_stays_open(scheduler, narrator):
    engine, wins = make_engine(scheduler, narrator)
    first, second = pairs_of(engine)[0]

    engine.click(first)
    engine.click(second)

    assert engine.matched[first] and engine.matched[second]
    assert engine.choices == []
    assert narrator.texts[-1] == "Aferin!"
    assert wins == []


def test_mismatch_stays_visible_then_flips_back(scheduler, narrator):
    engine, _ = make_engine(scheduler, narrator)
    pairs = pairs_of(engine)
    a, b = pairs[0][0], pairs[1][0]

    engine.click(a)
    engine.click(b)
    # a third card is ignored while two are open
    engine.click(pairs[2][0])
    assert engine.choices == [a, b]
    assert not engine.flipped[pairs[2][0]]

    scheduler.advance(MEMORY_MISMATCH_DELAY - 0.1)
    assert engine.flipped[a] and engine.flipped[b]

    scheduler.advance(0.2)
    assert not engine.flipped[a] and not engine.flipped[b]
    assert engine.choices == []


def test_clicks_on_open_or_matched_cards_are_ignored(scheduler, narrator):
    engine, _ = make_engine(scheduler, narrator)
    first, second = pairs_of(engine)[0]

    engine.click(first)
    engine.click(first)
    assert engine.choices == [first]

    engine.click(second)
    engine.click(first)
    assert engine.choices == []


def test_win_fires_once_after_delay_then_new_board(scheduler, narrator):
    engine, wins = make_engine(scheduler, narrator)
    solve(engine)
    assert engine.complete
    assert wins == []

    scheduler.advance(MEMORY_WIN_DELAY - 0.05)
    assert wins == []
    scheduler.advance(0.1)
    assert wins == [True]
    assert engine.complete

    scheduler.advance(MEMORY_RESET_DELAY)
    assert not any(engine.matched)
    assert not any(engine.flipped)
    assert len(wins) == 1


def test_mismatch_timer_from_old_board_does_not_touch_new_board(scheduler, narrator):
    engine, _ = make_engine(scheduler, narrator)
    pairs = pairs_of(engine)
    engine.click(pairs[0][0])
    engine.click(pairs[1][0])

    engine.new_puzzle()
    first, _ = pairs_of(engine)[0]
    engine.click(first)
    scheduler.advance(MEMORY_MISMATCH_DELAY + 0.1)

    assert engine.flipped[first]
    assert engine.choices == [first]


def test_disposed_engine_still_reports_win_but_skips_reset(scheduler, narrator):
    engine, wins = make_engine(scheduler, narrator)
    solve(engine)
    engine.dispose()

    scheduler.advance(MEMORY_WIN_DELAY + MEMORY_RESET_DELAY + 0.5)
    assert wins == [True]
    assert engine.complete


def test_out_of_range_index_is_rejected(scheduler, narrator):
    engine, _ = make_engine(scheduler, narrator)
    with pytest.raises(ValueError):
        engine.click(8)
