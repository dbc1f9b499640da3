"""Sweep ordering for the sequential-asynchronous simulation.

A sweep visits every vertex exactly once. The order is a fresh uniformly
random permutation each time, which gives the fair scheduling the
stabilization arguments rely on.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np


def next_sweep_order(n: int, rng: np.random.Generator) -> np.ndarray:
    """Return a uniformly random permutation of ``0 .. n-1``."""
    return rng.permutation(n)


class RandomSweepScheduler:
    """Produce a newly shuffled order for every sweep."""

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng

    def next_order(self, n: int) -> np.ndarray:
        return next_sweep_order(n, self.rng)


class FixedSweepScheduler:
    """Replay a predetermined sequence of sweep orders.

    Parameters
    ----------
    orders:
        Iterable of permutations consumed one per sweep. When exhausted and
        ``cycle`` is ``True`` the sequence restarts, otherwise
        :class:`IndexError` is raised.
    """

    def __init__(self, orders: Iterable[Sequence[int]], *, cycle: bool = False) -> None:
        self._orders = [np.asarray(o, dtype=np.int64) for o in orders]
        self._cycle = cycle
        self._pos = 0

    def next_order(self, n: int) -> np.ndarray:
        if self._pos >= len(self._orders):
            if not self._cycle or not self._orders:
                raise IndexError("fixed schedule exhausted")
            self._pos = 0
        order = self._orders[self._pos]
        self._pos += 1
        if sorted(order.tolist()) != list(range(n)):
            raise ValueError(f"sweep order {order.tolist()} is not a permutation of {n} vertices")
        return order
