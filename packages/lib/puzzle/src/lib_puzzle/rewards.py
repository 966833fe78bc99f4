"""Reward token allocation."""

from __future__ import annotations

from typing import AbstractSet, Optional, Sequence

import numpy as np


def allocate(
    owned: AbstractSet[str],
    catalog: Sequence[str],
    rng: Optional[np.random.Generator] = None,
) -> str:
    """Pick a reward token the player does not own yet.

    Draws uniformly from ``catalog`` minus ``owned``. When everything is
    already owned, draws uniformly from the whole catalog so that a win
    always yields a token (the caller's set union is then a no-op).
    """
    if not catalog:
        raise ValueError("reward catalog is empty")

    generator = rng or np.random.default_rng()
    available = [token for token in catalog if token not in owned]
    pool = available if available else list(catalog)
    return pool[int(generator.integers(len(pool)))]
