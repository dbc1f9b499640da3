import json
from pathlib import Path

import numpy as np
import pytest

from Self_Stabilizing.config import Config
from Self_Stabilizing.engine.logging import log_record
from Self_Stabilizing.engine.simulation import SimulationDriver
from Self_Stabilizing.errors import StabilizationTimeout
from Self_Stabilizing.graph.model import GraphModel


def _read(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines()]


def test_run_summary_written_by_default():
    graph = GraphModel.from_edges(2, [(0, 1)])
    result = SimulationDriver(graph, seed=5).run("matching")

    out = Path(Config.output_dir)
    records = _read(out / "run_log.jsonl")
    assert len(records) == 1
    rec = records[0]
    assert rec["label"] == "run_summary"
    assert rec["event_type"] == "RunStabilized"
    assert rec["rule"] == "matching"
    assert rec["payload"]["sweeps"] == result.sweeps
    assert rec["payload"]["seed"] == 5
    assert rec["payload"]["final_state"] == [1, 0]
    assert not (out / "sweep_log.jsonl").exists()


def test_sweep_records_follow_interval(path4):
    Config.logging_mode = ["diagnostic"]
    Config.log_interval = 2
    start = np.ones(4, dtype=np.int8)
    result = SimulationDriver(path4, seed=1, max_sweeps=0).run("unfriendly", start)
    assert result.sweeps >= 2

    records = _read(Path(Config.output_dir) / "sweep_log.jsonl")
    assert [r["sweep"] for r in records] == list(range(2, result.sweeps + 1, 2))
    assert all(r["event_type"] == "SweepCompleted" for r in records)


def test_timeout_is_logged():
    graph = GraphModel.from_edges(2, [(0, 1)])
    with pytest.raises(StabilizationTimeout):
        SimulationDriver(graph, seed=0, max_sweeps=1).run("matching")
    records = _read(Path(Config.output_dir) / "run_log.jsonl")
    assert records[-1]["label"] == "timeout"
    assert records[-1]["payload"] == {"sweeps": 1, "moves": 2}


def test_disabled_label_is_dropped(tmp_path):
    Config.log_files = {"run": {"run_summary": False}}
    path = tmp_path / "x.jsonl"
    log_record("run", "run_summary", value={"a": 1}, path=path)
    assert not path.exists()
    log_record("run", "other", value={"a": 1}, path=path)
    assert _read(path) == [{"label": "other", "a": 1}]
