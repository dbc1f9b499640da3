"""Stabilization engine: state, rules, scheduling and the sweep driver."""

from .rules import RULES, get_rule
from .simulation import SimulationDriver, SimulationResult

__all__ = ["RULES", "SimulationDriver", "SimulationResult", "get_rule"]
