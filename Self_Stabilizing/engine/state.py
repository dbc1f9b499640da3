"""Per-vertex state arrays for the stabilization engine.

Colorings are ``int8`` arrays holding :data:`RED` or :data:`BLUE`; matchings
are ``int64`` arrays holding a neighbour id or :data:`UNMATCHED`. Every random
draw goes through an explicitly injected :class:`numpy.random.Generator` so a
run can be reproduced from its seed.
"""

from __future__ import annotations

import numpy as np

RED = 0
BLUE = 1
UNMATCHED = -1


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Return a fresh generator seeded with ``seed``."""
    return np.random.default_rng(seed)


def initialize_coloring(n: int, rng: np.random.Generator) -> np.ndarray:
    """Return ``n`` independent uniform draws from ``{RED, BLUE}``."""
    return rng.integers(0, 2, size=n).astype(np.int8)


def initialize_matching(n: int) -> np.ndarray:
    """Return a matching array with every vertex unmatched."""
    return np.full(n, UNMATCHED, dtype=np.int64)


def randomize_matching(graph, rng: np.random.Generator) -> np.ndarray:
    """Return an arbitrary pointer state for ``graph``.

    Each vertex points at a uniformly chosen neighbour or at
    :data:`UNMATCHED`. Pointers need not be mutual, so the result models a
    configuration corrupted by transient faults.
    """

    match = initialize_matching(graph.order())
    for v in range(graph.order()):
        choices = list(graph.neighbors(v))
        pick = int(rng.integers(0, len(choices) + 1))
        if pick < len(choices):
            match[v] = choices[pick]
    return match


def format_state(state: np.ndarray) -> str:
    """Render ``state`` the way the runner prints network snapshots."""
    return "[" + ", ".join(str(int(x)) for x in state) + "]"
