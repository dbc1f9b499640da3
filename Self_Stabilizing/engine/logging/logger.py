from __future__ import annotations

"""Lightweight JSON line logger for simulation runs."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from ...config import Config


def log_record(
    category: str,
    label: str,
    *,
    sweep: int | None = None,
    value: dict[str, Any] | None = None,
    path: Path | None = None,
    **extra: Any,
) -> None:
    """Append a record to a JSON lines log file.

    Records are dropped when ``category``/``label`` is disabled through
    :meth:`Config.is_log_enabled`. The default destination is
    ``<output_dir>/<category>_log.jsonl``.
    """

    if not Config.is_log_enabled(category, label):
        return
    if path is None:
        path = Path(Config.output_dir) / f"{category}_log.jsonl"
    path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = {"label": label}
    if sweep is not None:
        data["sweep"] = sweep
    if value is not None:
        data.update(value)
    if extra:
        data.update(extra)
    with path.open("a") as fh:
        fh.write(json.dumps(data) + "\n")


def log_entry(category: str, label: str, entry: BaseModel, **kwargs: Any) -> None:
    """Serialise a :mod:`pydantic` log model through :func:`log_record`."""

    log_record(category, label, value=entry.model_dump(mode="json"), **kwargs)
