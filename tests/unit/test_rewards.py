from __future__ import annotations

import numpy as np
import pytest

from lib_puzzle import allocate

CATALOG = ("⭐", "🌈", "🍭", "💎")


def test_returns_unowned_token_when_available():
    owned = {"⭐", "🌈", "🍭"}
    for seed in range(50):
        assert allocate(owned, CATALOG, np.random.default_rng(seed)) == "💎"


def test_draws_only_from_available_tokens():
    owned = {"⭐"}
    rng = np.random.default_rng(7)
    drawn = {allocate(owned, CATALOG, rng) for _ in range(200)}
    assert drawn == {"🌈", "🍭", "💎"}


def test_falls_back_to_whole_catalog_when_everything_owned():
    rng = np.random.default_rng(3)
    drawn = {allocate(set(CATALOG), CATALOG, rng) for _ in range(200)}
    assert drawn <= set(CATALOG)
    assert len(drawn) > 1


def test_owned_tokens_outside_catalog_are_ignored():
    assert allocate({"🦄"}, ("⭐",)) == "⭐"


def test_empty_catalog_is_an_error():
    with pytest.raises(ValueError):
        allocate(set(), ())
