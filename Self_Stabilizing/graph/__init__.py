"""Graph model and file helpers."""

from .io import load_graph, parse_graph, save_graph
from .model import GraphModel

__all__ = ["GraphModel", "load_graph", "parse_graph", "save_graph"]
