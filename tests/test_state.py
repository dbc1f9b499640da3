import numpy as np

from Self_Stabilizing.engine.state import (
    BLUE,
    RED,
    UNMATCHED,
    format_state,
    initialize_coloring,
    initialize_matching,
    make_rng,
    randomize_matching,
)
from Self_Stabilizing.graph.model import GraphModel


def test_coloring_values_are_binary():
    colors = initialize_coloring(200, make_rng(1))
    assert colors.shape == (200,)
    assert set(np.unique(colors)) <= {RED, BLUE}
    # both colours appear in a sample this large
    assert len(np.unique(colors)) == 2


def test_coloring_reproducible_from_seed():
    a = initialize_coloring(50, make_rng(7))
    b = initialize_coloring(50, make_rng(7))
    assert np.array_equal(a, b)


def test_matching_starts_unmatched():
    match = initialize_matching(4)
    assert match.tolist() == [UNMATCHED] * 4


def test_randomized_matching_points_at_neighbours():
    graph = GraphModel.from_edges(5, [(0, 1), (1, 2), (2, 3)])
    match = randomize_matching(graph, make_rng(3))
    for v, j in enumerate(match):
        assert j == UNMATCHED or j in set(graph.neighbors(v))
    assert match[4] == UNMATCHED


def test_format_state():
    assert format_state(np.array([1, 0, -1])) == "[1, 0, -1]"
