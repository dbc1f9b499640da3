from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from ..errors import FormatError
from .types import GraphDict


@dataclass(frozen=True)
class GraphModel:
    """Immutable undirected graph on the vertices ``0 .. n-1``.

    ``adjacency[v]`` lists the neighbours of ``v`` in the order the
    corresponding edges were first declared. Instances are normally built via
    :meth:`from_edges`, which validates vertex ranges, rejects self-loops and
    collapses duplicate edges.
    """

    adjacency: Tuple[Tuple[int, ...], ...] = ()

    def __post_init__(self) -> None:
        n = len(self.adjacency)
        for v, nbrs in enumerate(self.adjacency):
            for u in nbrs:
                if not 0 <= u < n:
                    raise FormatError(f"vertex {v} lists neighbour {u} outside [0, {n})")
                if u == v:
                    raise FormatError(f"self-loop on vertex {v}")
                if v not in self.adjacency[u]:
                    raise FormatError(f"edge {v}-{u} is not symmetric")

    # ---- construction -------------------------------------------------

    @classmethod
    def from_edges(cls, order: int, edges: Iterable[Tuple[int, int]]) -> "GraphModel":
        """Build a graph with ``order`` vertices from an edge list.

        Raises
        ------
        FormatError
            If ``order`` is negative, an endpoint lies outside ``[0, order)``
            or an edge joins a vertex to itself.
        """

        if order < 0:
            raise FormatError(f"graph order must be non-negative, got {order}")
        adj: list[list[int]] = [[] for _ in range(order)]
        seen: set[tuple[int, int]] = set()
        for u, v in edges:
            for end in (u, v):
                if not 0 <= end < order:
                    raise FormatError(
                        f"edge ({u}, {v}) references vertex {end} outside [0, {order})"
                    )
            if u == v:
                raise FormatError(f"self-loop on vertex {u}")
            key = (min(u, v), max(u, v))
            if key in seen:
                continue
            seen.add(key)
            adj[u].append(v)
            adj[v].append(u)
        return cls(tuple(tuple(nbrs) for nbrs in adj))

    @classmethod
    def from_dict(cls, data: GraphDict) -> "GraphModel":
        """Construct a :class:`GraphModel` from ``data``."""
        return cls.from_edges(int(data["order"]), (tuple(e) for e in data["edges"]))

    @classmethod
    def from_networkx(cls, g) -> "GraphModel":
        """Build a model from a :mod:`networkx` graph.

        Nodes are relabelled ``0 .. n-1`` following ``g``'s node order.
        """

        index = {node: i for i, node in enumerate(g.nodes)}
        return cls.from_edges(len(index), ((index[u], index[v]) for u, v in g.edges))

    # ---- queries ------------------------------------------------------

    def order(self) -> int:
        """Return the number of vertices."""
        return len(self.adjacency)

    def neighbors(self, v: int) -> Iterator[int]:
        """Return a fresh iterator over the neighbours of ``v``."""
        return iter(self.adjacency[v])

    def degree(self, v: int) -> int:
        return len(self.adjacency[v])

    def edges(self) -> list[tuple[int, int]]:
        """Return each undirected edge once as ``(u, v)`` with ``u < v``."""
        return [(u, v) for u, nbrs in enumerate(self.adjacency) for v in nbrs if u < v]

    def to_dict(self) -> GraphDict:
        """Serialize the model to a plain ``dict`` suitable for JSON."""
        return {"order": self.order(), "edges": [[u, v] for u, v in self.edges()]}

    def to_networkx(self):
        """Return the graph as a :class:`networkx.Graph`."""

        import networkx as nx

        g = nx.Graph()
        g.add_nodes_from(range(self.order()))
        g.add_edges_from(self.edges())
        return g

    def components(self) -> int:
        """Return the number of connected components."""

        import networkx as nx

        if not self.order():
            return 0
        return nx.number_connected_components(self.to_networkx())
