from __future__ import annotations

import pytest

from lib_puzzle import Scheduler


def test_callbacks_fire_in_due_order():
    s = Scheduler()
    fired = []
    s.call_later(2.0, lambda: fired.append("b"))
    s.call_later(1.0, lambda: fired.append("a"))
    s.call_later(2.0, lambda: fired.append("c"))

    assert s.advance(0.5) == 0
    assert s.advance(1.0) == 1
    assert fired == ["a"]
    s.advance(1.0)
    assert fired == ["a", "b", "c"]
    assert s.pending() == 0


def test_callback_scheduled_while_advancing_fires_when_due():
    s = Scheduler()
    fired = []

    def first():
        fired.append("first")
        s.call_later(1.0, lambda: fired.append("second"))

    s.call_later(1.0, first)
    s.advance(3.0)
    assert fired == ["first", "second"]
    assert s.now == pytest.approx(3.0)


def test_negative_values_rejected():
    s = Scheduler()
    with pytest.raises(ValueError):
        s.call_later(-1.0, lambda: None)
    with pytest.raises(ValueError):
        s.advance(-0.1)
