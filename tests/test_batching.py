"""Tests for src.sweeper.batching covering batch boundaries and bounded concurrency.

Run with coverage:
    pytest tests/test_batching.py --maxfail=1 -v --cov=src.sweeper.batching --cov-report=term-missing
"""

import math
import threading
import time

import pytest

from src.sweeper import batching


@pytest.mark.parametrize("length", [0, 1, 3, 4, 7, 10])
def test_batched_boundaries(length):
    items = list(range(length))
    groups = list(batching.batched(items, 3))
    assert len(groups) == math.ceil(length / 3)
    for i, group in enumerate(groups):
        assert group == items[3 * i:min(3 * i + 3, length)]


def test_batched_rejects_zero_size():
    with pytest.raises(ValueError):
        list(batching.batched([1], 0))


class _InFlight:
    def __init__(self):
        self.lock = threading.Lock()
        self.current = 0
        self.peak = 0
        self.events = []

    def __call__(self, item):
        with self.lock:
            self.current += 1
            self.peak = max(self.peak, self.current)
            self.events.append(("start", item))
        time.sleep(0.02)
        with self.lock:
            self.current -= 1
            self.events.append(("end", item))
        return item * 10


def test_bounded_map_limits_concurrency_and_keeps_order():
    tracker = _InFlight()
    results = batching.bounded_map(tracker, list(range(9)), 3)
    assert results == [i * 10 for i in range(9)]
    assert 1 <= tracker.peak <= 3


def test_bounded_map_empty():
    assert batching.bounded_map(lambda x: x, [], 3) == []


def test_bounded_map_rejects_bad_limit():
    with pytest.raises(ValueError):
        batching.bounded_map(lambda x: x, [1], 0)


def test_bounded_map_finishes_siblings_before_raising():
    done = []
    lock = threading.Lock()

    def work(item):
        if item == 0:
            raise KeyError("first")
        time.sleep(0.01)
        with lock:
            done.append(item)
        return item

    with pytest.raises(KeyError):
        batching.bounded_map(work, [0, 1, 2, 3], 2)
    assert sorted(done) == [1, 2, 3]


def test_run_in_batches_waits_for_each_group():
    tracker = _InFlight()
    results = batching.run_in_batches(tracker, list(range(7)), 3)
    assert results == [i * 10 for i in range(7)]
    assert tracker.peak <= 3

    position = {event: idx for idx, event in enumerate(tracker.events)}
    groups = [[0, 1, 2], [3, 4, 5], [6]]
    for prev, nxt in zip(groups, groups[1:]):
        last_end = max(position[("end", item)] for item in prev)
        first_start = min(position[("start", item)] for item in nxt)
        assert last_end < first_start
