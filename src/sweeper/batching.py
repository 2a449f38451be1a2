"""Bounded-concurrency helpers used to fan work out over repositories and pull requests."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, List, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def batched(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Yield consecutive slices of at most `size` items."""
    if size < 1:
        raise ValueError(f"batch size must be >= 1, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def bounded_map(func: Callable[[T], R], items: Sequence[T], limit: int) -> List[R]:
    """Apply `func` to every item with at most `limit` calls in flight.

    A freed worker picks up the next item immediately. Results keep input order.
    Every submitted call runs to completion even if another one raises; the first
    exception (in input order) is re-raised afterwards.
    """
    if limit < 1:
        raise ValueError(f"concurrency limit must be >= 1, got {limit}")
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=min(limit, len(items))) as pool:
        futures = [pool.submit(func, item) for item in items]
    return [future.result() for future in futures]


def run_in_batches(func: Callable[[T], R], items: Sequence[T], size: int) -> List[R]:
    """Run `func` over fixed groups of `size` items, finishing each group before the next."""
    results: List[R] = []
    for group in batched(items, size):
        results.extend(bounded_map(func, group, size))
    return results


__all__ = ["batched", "bounded_map", "run_in_batches"]
