# engine/simulation.py

"""Sweep loop driving a rule variant to a stable configuration."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Iterable

import numpy as np

from ..config import Config
from ..errors import StabilizationTimeout
from ..graph.model import GraphModel
from .logging import log_entry
from .logging_models import (
    RunSummaryLog,
    RunSummaryPayload,
    SweepLog,
    SweepPayload,
    TimeoutLog,
    TimeoutPayload,
)
from .rules import Rule, get_rule
from .scheduler import RandomSweepScheduler
from .stability import StabilityDetector
from .state import make_rng

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    """Summary of one completed sweep handed to ``on_sweep`` callbacks."""

    sweep: int
    order: np.ndarray
    moves: int
    state: np.ndarray


@dataclass
class SimulationResult:
    """Outcome of a stabilized run.

    Attributes
    ----------
    rule:
        Name of the rule variant.
    initial_state:
        Copy of the configuration the run started from.
    state:
        Final, stable configuration.
    rounds:
        Number of sweeps that changed at least one vertex.
    sweeps:
        Total sweeps executed including the final quiet sweep.
    moves:
        Total number of single-vertex mutations.
    elapsed_ns:
        Wall-clock duration of the sweep loop in nanoseconds.
    """

    rule: str
    initial_state: np.ndarray
    state: np.ndarray
    rounds: int
    sweeps: int
    moves: int
    elapsed_ns: int


class SimulationDriver:
    """Run rule variants on ``graph`` until a sweep makes no change.

    Parameters
    ----------
    graph:
        Graph the processes live on.
    rng:
        Random source for initial states and sweep orders. Defaults to a
        generator seeded with :attr:`Config.random_seed`.
    scheduler:
        Object exposing ``next_order(n)``. Defaults to a
        :class:`RandomSweepScheduler` sharing ``rng``.
    max_sweeps:
        Sweep ceiling; ``0`` disables it. Defaults to
        :attr:`Config.max_sweeps`.
    on_sweep:
        Optional callback receiving a :class:`SweepReport` after each sweep.
    """

    def __init__(
        self,
        graph: GraphModel,
        *,
        rng: np.random.Generator | None = None,
        scheduler=None,
        max_sweeps: int | None = None,
        on_sweep: Callable[[SweepReport], None] | None = None,
        seed: int | None = None,
    ) -> None:
        self.graph = graph
        self.seed = Config.random_seed if seed is None and rng is None else seed
        self.rng = rng if rng is not None else make_rng(self.seed)
        self.scheduler = scheduler or RandomSweepScheduler(self.rng)
        self.max_sweeps = Config.max_sweeps if max_sweeps is None else max_sweeps
        self.on_sweep = on_sweep
        self.detector = StabilityDetector()
        self._last_order: np.ndarray | None = None

    # ------------------------------------------------------------------
    def sweep(self, rule: Rule, state: np.ndarray) -> int:
        """Visit every vertex once in a fresh order and return the moves made."""

        order = self.scheduler.next_order(self.graph.order())
        self.detector.reset()
        for v in order:
            if rule.apply(self.graph, state, int(v)):
                self.detector.mark()
        self._last_order = order
        return self.detector.sweep_moves

    # ------------------------------------------------------------------
    def run(self, rule: Rule | str, state: np.ndarray | None = None) -> SimulationResult:
        """Drive ``rule`` from ``state`` (or a random start) to stability.

        ``state`` is modified in place. When omitted a new configuration is
        drawn with :meth:`Rule.initial_state`.

        Raises
        ------
        StabilizationTimeout
            If :attr:`max_sweeps` sweeps pass without a quiet sweep.
        """

        if isinstance(rule, str):
            rule = get_rule(rule)
        if state is None:
            state = rule.initial_state(self.graph, self.rng)
        initial = state.copy()
        run_id = uuid.uuid4().hex[:12]
        self.detector = StabilityDetector()

        sweeps = rounds = 0
        start = time.perf_counter_ns()
        while True:
            if self.max_sweeps and sweeps >= self.max_sweeps:
                log_entry(
                    "run",
                    "timeout",
                    TimeoutLog(
                        run_id=run_id,
                        rule=rule.name,
                        payload=TimeoutPayload(
                            sweeps=sweeps, moves=self.detector.total_moves
                        ),
                    ),
                )
                logger.warning("%s did not stabilize after %d sweeps", rule.name, sweeps)
                raise StabilizationTimeout(rule.name, sweeps)
            moves = self.sweep(rule, state)
            sweeps += 1
            if moves:
                rounds += 1
            self._report(rule, run_id, sweeps, moves, state)
            if self.detector.stable:
                break
        elapsed = time.perf_counter_ns() - start

        result = SimulationResult(
            rule=rule.name,
            initial_state=initial,
            state=state,
            rounds=rounds,
            sweeps=sweeps,
            moves=self.detector.total_moves,
            elapsed_ns=elapsed,
        )
        logger.info(
            "%s stabilized after %d sweeps (%d moves)", rule.name, sweeps, result.moves
        )
        log_entry(
            "run",
            "run_summary",
            RunSummaryLog(
                run_id=run_id,
                rule=rule.name,
                payload=RunSummaryPayload(
                    order=self.graph.order(),
                    rounds=rounds,
                    sweeps=sweeps,
                    moves=result.moves,
                    elapsed_ns=elapsed,
                    seed=self.seed,
                    final_state=[int(x) for x in state],
                ),
            ),
        )
        return result

    # ------------------------------------------------------------------
    def run_all(self, rules: Iterable[Rule | str]) -> list[SimulationResult]:
        """Run each rule in turn, re-randomizing the state before each one."""

        return [self.run(rule) for rule in rules]

    # ------------------------------------------------------------------
    def _report(
        self, rule: Rule, run_id: str, sweep: int, moves: int, state: np.ndarray
    ) -> None:
        if self.on_sweep is not None:
            self.on_sweep(
                SweepReport(
                    sweep=sweep, order=self._last_order, moves=moves, state=state.copy()
                )
            )
        interval = max(1, Config.log_interval)
        if sweep % interval == 0 and Config.is_log_enabled("sweep", "sweep"):
            log_entry(
                "sweep",
                "sweep",
                SweepLog(
                    run_id=run_id,
                    rule=rule.name,
                    payload=SweepPayload(
                        sweep=sweep,
                        moves=moves,
                        total_moves=self.detector.total_moves,
                    ),
                ),
                sweep=sweep,
            )
