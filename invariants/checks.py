"""Legitimacy checks for stabilized configurations."""

from __future__ import annotations

from typing import Dict, Set, Tuple

import networkx as nx
import numpy as np

from Self_Stabilizing.engine.rules import neighbor_counts
from Self_Stabilizing.engine.state import BLUE, RED, UNMATCHED
from Self_Stabilizing.graph.model import GraphModel


def symmetric(graph: GraphModel) -> bool:
    """``v`` is a neighbour of ``u`` iff ``u`` is a neighbour of ``v``."""

    return all(
        u in set(graph.neighbors(v))
        for u in range(graph.order())
        for v in graph.neighbors(u)
    )


def unfriendly(graph: GraphModel, colors: np.ndarray) -> bool:
    """No vertex has strictly more same-coloured than other neighbours."""

    for v in range(graph.order()):
        red, blue = neighbor_counts(graph, colors, v)
        if colors[v] == BLUE and blue > red:
            return False
        if colors[v] == RED and red > blue:
            return False
    return True


def matching_edges(match: np.ndarray) -> Set[Tuple[int, int]]:
    """Return the mutual pairs of ``match`` as ``(u, v)`` with ``u < v``."""

    pairs = set()
    for v, j in enumerate(match):
        j = int(j)
        if j != UNMATCHED and int(match[j]) == v:
            pairs.add((min(v, j), max(v, j)))
    return pairs


def matching_symmetric(match: np.ndarray) -> bool:
    """Every matched vertex is matched back by its partner."""

    return all(
        int(j) == UNMATCHED or int(match[int(j)]) == v for v, j in enumerate(match)
    )


def matching_maximal(graph: GraphModel, match: np.ndarray) -> bool:
    """No unmatched vertex has an unmatched neighbour."""

    for v in range(graph.order()):
        if match[v] != UNMATCHED:
            continue
        if any(match[u] == UNMATCHED for u in graph.neighbors(v)):
            return False
    return True


def maximal_matching(graph: GraphModel, match: np.ndarray) -> bool:
    """Combined check, cross-validated with :func:`networkx.is_maximal_matching`."""

    if not (matching_symmetric(match) and matching_maximal(graph, match)):
        return False
    return nx.is_maximal_matching(graph.to_networkx(), matching_edges(match))


def legitimate(graph: GraphModel, kind: str, state: np.ndarray) -> bool:
    """Dispatch to the check matching a rule's ``kind``."""

    if kind == "matching":
        return maximal_matching(graph, state)
    return unfriendly(graph, state)


def from_state(graph: GraphModel, kind: str, state: np.ndarray) -> Dict[str, bool | int]:
    """Extract invariant fields describing ``state``."""

    fields: Dict[str, bool | int] = {"inv_legitimate": legitimate(graph, kind, state)}
    if kind == "matching":
        fields["matching_size"] = len(matching_edges(state))
    else:
        fields["blue_count"] = int(np.count_nonzero(state == BLUE))
    return fields
