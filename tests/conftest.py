import logging
import sys
from copy import deepcopy
from pathlib import Path

# Ensure package import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import networkx as nx
import pytest

from Self_Stabilizing.config import Config
from Self_Stabilizing.graph.model import GraphModel


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch):
    """Restore :class:`Config` after each test and keep logs in ``tmp_path``."""

    saved = {
        k: deepcopy(v)
        for k, v in vars(Config).items()
        if not k.startswith("_") and not callable(v)
        and not isinstance(v, (classmethod, staticmethod))
    }
    root_level = logging.getLogger().level
    monkeypatch.setattr(Config, "output_dir", str(tmp_path / "output"))
    yield
    logging.getLogger().setLevel(root_level)
    for key, value in saved.items():
        setattr(Config, key, value)


@pytest.fixture
def path4():
    return GraphModel.from_networkx(nx.path_graph(4))


@pytest.fixture
def cycle5():
    return GraphModel.from_networkx(nx.cycle_graph(5))
