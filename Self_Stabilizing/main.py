# main.py

"""Command line runner for the self-stabilizing algorithms."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from typing import Any, TextIO

from Self_Stabilizing.config import Config, load_config
from Self_Stabilizing.engine.rules import COLORING_RULES, SECOND_ORDER_MODES
from Self_Stabilizing.errors import FormatError, StabilizationTimeout, UsageError

USAGE = "Usage: self-stabilize <filename> [--matching]"

# Internal Config attributes that should not be exposed as CLI flags
_PRIVATE_KEYS = {
    "base_dir",
    "input_dir",
    "config_file",
    "graph_file",
    "output_root",
    "DEFAULT_LOG_FILES",
    "log_files",
}

# Short spellings accepted alongside the generated ``--key`` flags
_FLAG_ALIASES = {
    "random_seed": ["--seed"],
    "rules": ["--rule"],
}


def _log_level() -> int:
    return logging.DEBUG if Config.log_verbosity == "debug" else logging.INFO


def _configure_logging() -> None:
    """Configure application logging and capture uncaught exceptions."""

    logging.basicConfig(
        level=_log_level(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    def _log_excepthook(exc_type, exc, tb) -> None:
        logging.getLogger(__name__).exception(
            "Uncaught exception", exc_info=(exc_type, exc, tb)
        )

    sys.excepthook = _log_excepthook


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that reports problems as :class:`UsageError`."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _add_config_args(parser: argparse.ArgumentParser, data: dict[str, Any]) -> None:
    """Add a ``--key`` override flag for each entry in ``data``."""
    for key, value in data.items():
        if key in _PRIVATE_KEYS or isinstance(value, dict):
            continue
        names = [f"--{key}"]
        if "_" in key:
            names.append(f"--{key.replace('_', '-')}")
        names += _FLAG_ALIASES.get(key, [])
        if isinstance(value, bool):
            parser.add_argument(*names, type=lambda x: x.lower() == "true", dest=key)
        elif isinstance(value, list):
            parser.add_argument(*names, nargs="+", dest=key)
        elif value is None or isinstance(value, int):
            parser.add_argument(*names, type=int, dest=key)
        else:
            parser.add_argument(*names, type=type(value), dest=key)


def _config_defaults() -> dict[str, Any]:
    """Return a dictionary of all public attributes defined on :class:`Config`."""
    defaults: dict[str, Any] = {}
    for key, value in Config.__dict__.items():
        if key.startswith("_") or key in _PRIVATE_KEYS:
            continue
        if callable(value) or isinstance(value, (classmethod, staticmethod)):
            continue
        defaults[key] = value
    return defaults


def _apply_overrides(args: argparse.Namespace, data: dict[str, Any]) -> None:
    """Apply CLI overrides back onto :class:`Config`."""
    for key in data:
        override = getattr(args, key, None)
        if override is not None:
            setattr(Config, key, override)


@dataclass
class MainService:
    """Handle CLI parsing and run the selected algorithms."""

    argv: list[str] | None = None
    out: TextIO | None = None

    def run(self) -> int:
        """Run the command line program and return the exit status."""
        out = self.out or sys.stdout
        try:
            args = self._parse_args()
        except UsageError as exc:
            logging.getLogger(__name__).debug("usage error: %s", exc)
            print(USAGE, file=out)
            return 0

        from Self_Stabilizing.graph.io import load_graph

        try:
            graph = load_graph(args.graph)
        except (OSError, FormatError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

        try:
            self._run_algorithms(graph, out)
        except StabilizationTimeout as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        return 0

    # ------------------------------------------------------------------
    def _parse_args(self) -> argparse.Namespace:
        initial = _ArgumentParser(add_help=False)
        initial.add_argument(
            "--config",
            default=None,
            help="Path to JSON or YAML configuration file",
        )
        known, _ = initial.parse_known_args(self.argv)
        if known.config:
            if not os.path.exists(known.config):
                raise UsageError(f"config file {known.config} not found")
            load_config(known.config)

        parser = _ArgumentParser(
            parents=[initial],
            description="Run self-stabilizing partition and matching algorithms",
            add_help=False,
        )
        parser.add_argument("graph", nargs="?", help="Graph description file")
        parser.add_argument(
            "--matching",
            action="store_true",
            help="Also run the maximal matching algorithm",
        )
        _add_config_args(parser, _config_defaults())
        args = parser.parse_args(self.argv)
        if args.graph is None:
            raise UsageError("missing graph file")
        _apply_overrides(args, _config_defaults())
        logging.getLogger().setLevel(_log_level())
        unknown = [
            r for r in Config.rules if r.replace("-", "_").lower() not in COLORING_RULES
        ]
        if unknown:
            raise UsageError(f"unknown coloring rule(s): {', '.join(unknown)}")
        if Config.second_order not in SECOND_ORDER_MODES:
            raise UsageError(f"unknown second_order mode {Config.second_order!r}")
        if args.matching:
            Config.run_matching = True
        Config.graph_file = args.graph
        return args

    # ------------------------------------------------------------------
    @staticmethod
    def _run_algorithms(graph, out: TextIO) -> None:
        from invariants import checks
        from Self_Stabilizing.engine.rules import get_rule
        from Self_Stabilizing.engine.simulation import SimulationDriver
        from Self_Stabilizing.engine.state import format_state

        print(f"There are {graph.components()} components.", file=out)
        driver = SimulationDriver(graph)
        names = list(Config.rules)
        if Config.run_matching:
            names.append("matching")
        for i, name in enumerate(names):
            rule = get_rule(name)
            result = driver.run(rule)
            if i:
                print(file=out)
            print(f"Starting network: {format_state(result.initial_state)}", file=out)
            print(f"{rule.title} graph: {format_state(result.state)}", file=out)
            print(
                f"Ran in {result.elapsed_ns} ns over {result.sweeps} sweeps "
                f"({result.moves} moves).",
                file=out,
            )
            fields = checks.from_state(graph, rule.kind, result.state)
            print(f"Legitimate: {fields['inv_legitimate']}", file=out)


def main() -> None:
    """Entry point for external callers."""
    _configure_logging()
    sys.exit(MainService().run())


if __name__ == "__main__":
    main()
