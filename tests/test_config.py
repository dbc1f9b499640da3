import json

import pytest

from Self_Stabilizing.config import Config, load_config


def test_load_from_file_resolves_graph_file(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"graph_file": "g.txt"}))
    Config.load_from_file(str(cfg))
    assert Config.graph_file == str(tmp_path / "g.txt")
    assert Config.config_file == str(cfg)


def test_load_yaml_config(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        "max_sweeps: 25\n"
        "second_order: last_neighbor\n"
        "rules: [unfriendly]\n"
        "unknown_key: 3\n"
    )
    data = load_config(str(cfg))
    assert data["max_sweeps"] == 25
    assert Config.max_sweeps == 25
    assert Config.second_order == "last_neighbor"
    assert Config.rules == ["unfriendly"]
    assert not hasattr(Config, "unknown_key")


def test_nested_log_files_merge(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"log_files": {"sweep": {"sweep": False}}}))
    Config.load_from_file(str(cfg))
    assert Config.log_files["sweep"]["sweep"] is False
    assert Config.log_files["run"]["run_summary"] is True


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load_from_file(str(tmp_path / "nope.json"))


def test_non_mapping_config_rejected(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        Config.load_from_file(str(cfg))


def test_logging_mode_filters_categories():
    Config.logging_mode = ["sweep"]
    Config.log_files = {"sweep": {"sweep": True}, "run": {"run_summary": True}}
    assert Config.is_log_enabled("sweep", "sweep")
    assert not Config.is_log_enabled("run", "run_summary")
    Config.logging_mode = ["diagnostic"]
    assert Config.is_log_enabled("run")
    Config.log_files["run"]["run_summary"] = False
    assert not Config.is_log_enabled("run", "run_summary")


def test_packaged_defaults_load():
    data = load_config()
    assert data["second_order"] == "aggregate"
    assert Config.graph_file == Config.input_path("graph.txt")
