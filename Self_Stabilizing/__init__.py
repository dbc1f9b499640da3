"""Self_Stabilizing package initialization."""

from __future__ import annotations

from .engine import RULES, SimulationDriver, SimulationResult, get_rule
from .errors import FormatError, StabilizationTimeout, UsageError
from .graph import GraphModel, load_graph

__all__ = [
    "RULES",
    "FormatError",
    "GraphModel",
    "SimulationDriver",
    "SimulationResult",
    "StabilizationTimeout",
    "UsageError",
    "get_rule",
    "load_graph",
]
