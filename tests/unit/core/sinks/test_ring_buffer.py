from __future__ import annotations

"""
Unit tests for the on-screen Ring Buffer.

Verifies:
1. Capacity bound and oldest-first eviction (Scenario A).
2. Time-window rendering without removal (Scenario B).
3. Stale entries stay in a low-churn buffer until evicted or cleared.
4. Capacity changes apply on the next append.
"""

import pytest

from logrouter.core.sinks.display import RingBuffer
from logrouter.domain.log_models import create_entry


def _entry(message: str, now: float = 0.0, seconds: float = 5.0):
    return create_entry(message, display_seconds=seconds, now=now)


def test_capacity_keeps_most_recent_entries() -> None:
    buffer = RingBuffer(3)
    entries = [_entry(f"E{i}") for i in range(1, 6)]

    for e in entries:
        buffer.append(e)

    assert [e.message for e in buffer.snapshot()] == ["E3", "E4", "E5"]


@pytest.mark.parametrize("capacity", [1, 2, 7])
@pytest.mark.parametrize("count", [0, 1, 6, 20])
def test_length_never_exceeds_capacity(capacity: int, count: int) -> None:
    buffer = RingBuffer(capacity)
    for i in range(count):
        buffer.append(_entry(str(i)))
        assert len(buffer) <= capacity

    expected = [str(i) for i in range(max(0, count - capacity), count)]
    assert [e.message for e in buffer.snapshot()] == expected


def test_append_returns_evicted_oldest_first() -> None:
    buffer = RingBuffer(2)
    buffer.append(_entry("a"))
    buffer.append(_entry("b"))

    evicted = buffer.append(_entry("c"))

    assert [e.message for e in evicted] == ["a"]


def test_render_filters_expired_without_removing() -> None:
    buffer = RingBuffer(10)
    buffer.append(_entry("E1", now=0.0, seconds=5.0))

    assert [e.message for e in buffer.render(4.0)] == ["E1"]
    assert list(buffer.render(6.0)) == []
    assert len(buffer) == 1


def test_render_preserves_insertion_order() -> None:
    buffer = RingBuffer(10)
    buffer.append(_entry("old", now=0.0, seconds=1.0))
    buffer.append(_entry("mid", now=1.0, seconds=10.0))
    buffer.append(_entry("new", now=2.0, seconds=10.0))

    assert [e.message for e in buffer.render(1.5)] == ["mid", "new"]
    assert [e.message for e in buffer.render(0.5)] == ["old", "mid", "new"]


def test_stale_entries_persist_in_low_churn_buffer() -> None:
    buffer = RingBuffer(50)
    for i in range(3):
        buffer.append(_entry(f"stale{i}", now=0.0, seconds=1.0))

    assert list(buffer.render(3600.0)) == []
    assert len(buffer) == 3

    buffer.clear()
    assert len(buffer) == 0


def test_reduced_capacity_applies_on_next_append() -> None:
    buffer = RingBuffer(5)
    for i in range(5):
        buffer.append(_entry(str(i)))

    buffer.max_entries = 2
    assert len(buffer) == 5

    buffer.append(_entry("5"))
    assert [e.message for e in buffer.snapshot()] == ["4", "5"]


@pytest.mark.parametrize("bad", [0, -1, True])
def test_invalid_capacity_rejected(bad) -> None:
    with pytest.raises(ValueError):
        RingBuffer(bad)

    buffer = RingBuffer(1)
    with pytest.raises(ValueError):
        buffer.max_entries = bad
