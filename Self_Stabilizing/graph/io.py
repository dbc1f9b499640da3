"""File IO helpers for :mod:`Self_Stabilizing.graph`.

Two formats are understood. The plain text format lists the graph order on
its first meaningful line followed by one ``u v`` edge per line; blank lines
and ``#`` comments are skipped::

    # path on four vertices
    4
    0 1
    1 2
    2 3

Files ending in ``.json`` hold ``{"order": n, "edges": [[u, v], ...]}``.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from ..errors import FormatError
from .model import GraphModel


def load_graph(path: str) -> GraphModel:
    """Load a graph from ``path`` and return a :class:`GraphModel`."""
    with open(path, encoding="utf-8") as f:
        try:
            if path.endswith(".json"):
                try:
                    data = json.load(f)
                except json.JSONDecodeError as exc:
                    raise FormatError(f"{path}: invalid JSON ({exc})") from exc
                _validate_graph(data)
                return GraphModel.from_dict(data)
            return parse_graph(f)
        except UnicodeDecodeError as exc:
            raise FormatError(f"{path}: not UTF-8 text ({exc.reason})") from exc


def save_graph(path: str, graph: GraphModel) -> None:
    """Write ``graph`` to ``path`` in JSON format."""
    with open(path, "w") as f:
        json.dump(graph.to_dict(), f, indent=2)


def parse_graph(lines: Iterable[str]) -> GraphModel:
    """Parse the plain text format from ``lines``."""

    order: int | None = None
    edges: list[tuple[int, int]] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        parts = line.split()
        if order is None:
            if len(parts) != 1:
                raise FormatError(f"line {lineno}: expected graph order, got {line!r}")
            order = _to_int(parts[0], lineno)
            continue
        if len(parts) != 2:
            raise FormatError(f"line {lineno}: expected 'u v', got {line!r}")
        edges.append((_to_int(parts[0], lineno), _to_int(parts[1], lineno)))
    if order is None:
        raise FormatError("missing graph order declaration")
    return GraphModel.from_edges(order, edges)


def _to_int(token: str, lineno: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise FormatError(f"line {lineno}: {token!r} is not an integer") from None


def _validate_graph(data: Any) -> None:
    if not isinstance(data, dict):
        raise FormatError("Graph file must contain an object")
    if "order" not in data:
        raise FormatError("Graph file must declare 'order'")
    if not isinstance(data["order"], int):
        raise FormatError("'order' must be an integer")
    if not isinstance(data.get("edges", []), list):
        raise FormatError("'edges' must be a list")
    data.setdefault("edges", [])
    for edge in data["edges"]:
        if not isinstance(edge, list) or len(edge) != 2:
            raise FormatError("edge entries must be [u, v] pairs")
        if not all(isinstance(x, int) for x in edge):
            raise FormatError("edge endpoints must be integers")
