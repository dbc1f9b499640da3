# config.py

import os


class Config:
    """Global configuration optionally loaded from ``input/config.json``.

    Attributes
    ----------
    graph_file:
        Path to the graph description used by the command line runner.
    rules:
        Coloring variants executed in order by the command line runner.
        Supported names are ``"unfriendly"``, ``"unfriendlier"`` and
        ``"more_unfriendly"``.
    run_matching:
        When ``True`` the maximal matching variant runs after the coloring
        variants.
    max_sweeps:
        Ceiling on the number of sweeps a single run may take before
        :class:`~Self_Stabilizing.errors.StabilizationTimeout` is raised.
        ``0`` disables the ceiling.
    random_seed:
        Seed for the injected random generator. ``None`` draws fresh entropy
        for every run.
    second_order:
        How neighbour imbalances are computed by the Unfriendlier veto and the
        More-Unfriendly tie rule. ``"aggregate"`` counts over every neighbour
        of the neighbour while ``"last_neighbor"`` keeps only the count taken
        from its last neighbour in adjacency order.
    log_interval:
        Number of sweeps between ``sweep`` log records.
    logging_mode:
        Enabled log categories. ``diagnostic`` enables every category.
    """

    # Base directories for package resources
    base_dir = os.path.abspath(os.path.dirname(__file__))
    input_dir = os.path.join(base_dir, "input")
    config_file = os.path.join(input_dir, "config.json")
    graph_file = os.path.join(input_dir, "graph.txt")
    output_root = os.path.join(base_dir, "output")
    output_dir = output_root

    @staticmethod
    def input_path(*parts: str) -> str:
        """Return absolute path under the ``input`` directory."""
        return os.path.join(Config.input_dir, *parts)

    @staticmethod
    def output_path(*parts: str) -> str:
        """Return absolute path under the current output directory."""
        return os.path.join(Config.output_dir, *parts)

    rules = ["unfriendly", "unfriendlier", "more_unfriendly"]
    run_matching = False
    max_sweeps = 10000  # 0 disables the ceiling
    random_seed: int | None = None
    second_order = "aggregate"

    log_interval = 1
    log_verbosity = "info"

    # Mapping of ``category`` -> {``label``: bool} controlling which records
    # are written. Categories correspond to ``<category>_log.jsonl`` files.
    DEFAULT_LOG_FILES = {
        "sweep": {
            "sweep": True,
        },
        "run": {
            "run_summary": True,
            "timeout": True,
        },
    }

    # Default runtime copy
    log_files = {k: dict(v) for k, v in DEFAULT_LOG_FILES.items()}

    #: Allowed logging modes. ``diagnostic`` enables all logs, ``sweep``
    #: enables per-sweep records and ``run`` enables per-run summaries.
    logging_mode = ["run"]

    @classmethod
    def is_category_enabled(cls, category: str) -> bool:
        """Return ``True`` if ``category`` should be written based on mode."""
        mode = set(getattr(cls, "logging_mode", ["diagnostic"]))
        return "diagnostic" in mode or category in mode

    @classmethod
    def is_log_enabled(cls, category: str, label: str | None = None) -> bool:
        """Return ``True`` if a log entry should be written."""

        cfg = cls.log_files.get(category, {})
        if label is not None and not cfg.get(label.removesuffix(".jsonl"), True):
            return False
        return cls.is_category_enabled(category)

    @classmethod
    def load_from_file(cls, path: str) -> None:
        """Load configuration values from a JSON or YAML file.

        Only keys that already exist as attributes on ``Config`` will be
        assigned. Nested dictionaries are merged recursively when the existing
        attribute is also a ``dict``. A relative ``graph_file`` is resolved
        relative to the directory containing ``path``.

        Parameters
        ----------
        path:
            Path to the configuration file. Files ending in ``.yaml`` or
            ``.yml`` are parsed with :mod:`yaml`, anything else as JSON.
        """

        if not os.path.exists(path):
            raise FileNotFoundError(path)
        data = _read_mapping(path)
        cls.config_file = os.path.abspath(path)
        base_dir = os.path.dirname(cls.config_file)

        for key, value in data.items():
            if not hasattr(cls, key):
                continue
            if key == "graph_file" and not os.path.isabs(value):
                value = os.path.join(base_dir, value)
            current = getattr(cls, key)
            if isinstance(current, dict) and isinstance(value, dict):
                _merge_into(current, value)
            else:
                setattr(cls, key, value)


def _merge_into(target: dict, source: dict) -> None:
    for key, value in source.items():
        if isinstance(target.get(key), dict) and isinstance(value, dict):
            _merge_into(target[key], value)
        else:
            target[key] = value


def _read_mapping(path: str) -> dict:
    with open(path) as f:
        if path.endswith((".yaml", ".yml")):
            import yaml

            data = yaml.safe_load(f)
        else:
            import json

            data = json.load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(path: str | None = None) -> dict:
    """Load configuration from ``path`` and return the data."""
    if path is None:
        path = Config.input_path("config.json")
    Config.load_from_file(path)
    return _read_mapping(path)
