"""Exception hierarchy shared by the graph loader, engine and CLI."""

from __future__ import annotations


class SimulationError(Exception):
    """Base class for all errors raised by :mod:`Self_Stabilizing`."""


class FormatError(SimulationError, ValueError):
    """Graph input is malformed or references vertices out of range."""


class UsageError(SimulationError):
    """Command line arguments are missing or not understood."""


class UnknownRuleError(SimulationError, KeyError):
    """Requested rule variant is not registered."""

    def __str__(self) -> str:  # KeyError quotes its argument
        return str(self.args[0]) if self.args else ""


class StabilizationTimeout(SimulationError):
    """A run exceeded the configured sweep ceiling without stabilizing.

    Attributes
    ----------
    rule:
        Name of the rule variant that was running.
    sweeps:
        Number of sweeps executed before giving up.
    """

    def __init__(self, rule: str, sweeps: int) -> None:
        super().__init__(f"{rule} did not stabilize within {sweeps} sweeps")
        self.rule = rule
        self.sweeps = sweeps
