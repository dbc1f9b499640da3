"""Local correction rules for the self-stabilizing algorithms.

Each rule inspects a single vertex ``v`` together with the *current* states of
its neighbours and possibly rewrites ``state[v]`` in place. Because the
driver visits vertices one at a time, every rewrite is visible to the vertices
evaluated after it in the same sweep.

The coloring rules follow Hedetniemi, Hedetniemi, Kennedy and McRae,
"Self-Stabilizing Algorithms for Unfriendly Partitions". The matching rule is
the classic pointer-based maximal matching protocol.
"""

from __future__ import annotations

from typing import Callable, Iterator

import numpy as np

from ..config import Config
from ..errors import UnknownRuleError
from ..graph.model import GraphModel
from .state import BLUE, RED, UNMATCHED, initialize_coloring, initialize_matching

SECOND_ORDER_MODES = ("aggregate", "last_neighbor")


def neighbor_counts(graph: GraphModel, colors: np.ndarray, v: int) -> tuple[int, int]:
    """Return ``(red, blue)`` counts over the neighbours of ``v``."""

    blue = 0
    for u in graph.neighbors(v):
        if colors[u] == BLUE:
            blue += 1
    return graph.degree(v) - blue, blue


def last_neighbor_counts(
    graph: GraphModel, colors: np.ndarray, v: int
) -> tuple[int, int]:
    """Return the ``(red, blue)`` count of the last neighbour of ``v`` only.

    The counters restart for every neighbour, so the result is ``(0, 1)`` or
    ``(1, 0)`` depending on the colour of the final neighbour in adjacency
    order, and ``(0, 0)`` for an isolated vertex.
    """

    red = blue = 0
    for u in graph.neighbors(v):
        red, blue = (0, 1) if colors[u] == BLUE else (1, 0)
    return red, blue


class Rule:
    """Base class for a rule variant.

    Subclasses set :attr:`name` and :attr:`kind` and implement :meth:`apply`.
    """

    name = ""
    title = ""
    #: ``"coloring"`` or ``"matching"``; selects the state space.
    kind = "coloring"

    def initial_state(self, graph: GraphModel, rng: np.random.Generator) -> np.ndarray:
        """Return a fresh starting configuration for ``graph``."""
        return initialize_coloring(graph.order(), rng)

    def apply(self, graph: GraphModel, state: np.ndarray, v: int) -> bool:
        """Evaluate ``v`` and mutate ``state[v]`` if the rule fires.

        Returns ``True`` when ``state`` was changed.
        """
        raise NotImplementedError

    def is_stable(self, graph: GraphModel, state: np.ndarray) -> bool:
        """Return ``True`` if no vertex of ``state`` would fire."""

        probe = state.copy()
        # apply() mutates at most the vertex it fires on and we stop there, so
        # a single copy serves every vertex.
        return not any(self.apply(graph, probe, v) for v in range(graph.order()))

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"{type(self).__name__}()"


class ColoringRule(Rule):
    """Shared helpers for the three partition rules."""

    def __init__(self, second_order: str | None = None) -> None:
        mode = second_order or Config.second_order
        if mode not in SECOND_ORDER_MODES:
            raise ValueError(
                f"second_order must be one of {SECOND_ORDER_MODES}, got {mode!r}"
            )
        self.second_order = mode
        self._counts: Callable[[GraphModel, np.ndarray, int], tuple[int, int]] = (
            neighbor_counts if mode == "aggregate" else last_neighbor_counts
        )

    def _around(
        self, graph: GraphModel, colors: np.ndarray, v: int
    ) -> Iterator[tuple[int, int, int]]:
        """Yield ``(u, red(u), blue(u))`` for each neighbour ``u`` of ``v``."""
        for u in graph.neighbors(v):
            red, blue = self._counts(graph, colors, u)
            yield u, red, blue

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"{type(self).__name__}(second_order={self.second_order!r})"


class Unfriendly(ColoringRule):
    """Flip any vertex whose own colour holds a strict neighbour majority."""

    name = "unfriendly"
    title = "Unfriendly"

    def apply(self, graph: GraphModel, state: np.ndarray, v: int) -> bool:
        red, blue = neighbor_counts(graph, state, v)
        if state[v] == BLUE and blue > red:
            state[v] = RED
            return True
        if state[v] == RED and red > blue:
            state[v] = BLUE
            return True
        return False


class Unfriendlier(ColoringRule):
    """Unfriendly trigger with a neighbourhood veto.

    An unhappy vertex defers while some neighbour shows a strictly larger
    imbalance in the same direction, so the most unhappy vertex of a
    neighbourhood moves first.
    """

    name = "unfriendlier"
    title = "Unfriendlier"

    def apply(self, graph: GraphModel, state: np.ndarray, v: int) -> bool:
        red, blue = neighbor_counts(graph, state, v)
        if state[v] == BLUE and blue > red:
            own = blue - red
            if any(b - r > own for _, r, b in self._around(graph, state, v)):
                return False
            state[v] = RED
            return True
        if state[v] == RED and red > blue:
            own = red - blue
            if any(r - b > own for _, r, b in self._around(graph, state, v)):
                return False
            state[v] = BLUE
            return True
        return False


class MoreUnfriendly(ColoringRule):
    """Unfriendly rule refined with a tie-breaking move.

    A tied blue vertex turns red only when every red neighbour is itself tied
    and no blue neighbour has a blue majority; the red case is the mirror
    image. Isolated vertices are tied trivially and are never moved.
    """

    name = "more_unfriendly"
    title = "More Unfriendly"

    def apply(self, graph: GraphModel, state: np.ndarray, v: int) -> bool:
        red, blue = neighbor_counts(graph, state, v)
        if state[v] == BLUE and blue > red:
            state[v] = RED
            return True
        if state[v] == RED and red > blue:
            state[v] = BLUE
            return True
        if red != blue or not graph.degree(v):
            return False

        if state[v] == BLUE:
            ok = all(
                r == b if state[u] == RED else b <= r
                for u, r, b in self._around(graph, state, v)
            )
            if ok:
                state[v] = RED
            return ok

        ok = all(
            r <= b if state[u] == RED else b == r
            for u, r, b in self._around(graph, state, v)
        )
        if ok:
            state[v] = BLUE
        return ok


class MaximalMatching(Rule):
    """Pointer-based maximal matching.

    ``state[v]`` is the neighbour ``v`` points at or :data:`UNMATCHED`. Rules
    are tried in this order:

    * break a pointer to a vertex that points somewhere else,
    * accept a neighbour already pointing at ``v``,
    * propose to the first unmatched neighbour in adjacency order.
    """

    name = "matching"
    title = "Maximal matching"
    kind = "matching"

    def initial_state(self, graph: GraphModel, rng: np.random.Generator) -> np.ndarray:
        return initialize_matching(graph.order())

    def apply(self, graph: GraphModel, state: np.ndarray, v: int) -> bool:
        m = state[v]
        if m != UNMATCHED:
            if state[m] != v and state[m] != UNMATCHED:
                state[v] = UNMATCHED
                return True
            return False

        for j in graph.neighbors(v):
            if state[j] == v:
                state[v] = j
                return True
        for j in graph.neighbors(v):
            if state[j] == UNMATCHED:
                state[v] = j
                return True
        return False


RULES: dict[str, type[Rule]] = {
    cls.name: cls for cls in (Unfriendly, Unfriendlier, MoreUnfriendly, MaximalMatching)
}

COLORING_RULES = tuple(name for name, cls in RULES.items() if cls.kind == "coloring")


def get_rule(name: str, *, second_order: str | None = None) -> Rule:
    """Return a rule instance registered under ``name``.

    Parameters
    ----------
    name:
        One of :data:`RULES`. Dashes are accepted in place of underscores.
    second_order:
        Neighbour imbalance mode for the coloring rules. Defaults to
        :attr:`Config.second_order`. Ignored by the matching rule.
    """

    key = name.replace("-", "_").lower()
    cls = RULES.get(key)
    if cls is None:
        raise UnknownRuleError(
            f"unknown rule {name!r}; expected one of {', '.join(RULES)}"
        )
    if issubclass(cls, ColoringRule):
        return cls(second_order=second_order)
    return cls()
