import networkx as nx
import pytest

from invariants import checks
from Self_Stabilizing.errors import FormatError
from Self_Stabilizing.graph.model import GraphModel


def test_from_edges_is_symmetric():
    graph = GraphModel.from_edges(4, [(0, 1), (1, 2), (3, 1)])
    assert graph.order() == 4
    assert list(graph.neighbors(1)) == [0, 2, 3]
    assert list(graph.neighbors(3)) == [1]
    assert checks.symmetric(graph)


def test_neighbors_is_restartable():
    graph = GraphModel.from_edges(3, [(0, 1), (0, 2)])
    it = graph.neighbors(0)
    assert list(it) == [1, 2]
    assert list(it) == []
    assert list(graph.neighbors(0)) == [1, 2]


def test_duplicate_edges_collapse():
    graph = GraphModel.from_edges(2, [(0, 1), (1, 0), (0, 1)])
    assert graph.edges() == [(0, 1)]
    assert graph.degree(0) == 1


@pytest.mark.parametrize("edge", [(0, 3), (-1, 0), (5, 1)])
def test_out_of_range_edge_rejected(edge):
    with pytest.raises(FormatError):
        GraphModel.from_edges(3, [edge])


def test_self_loop_rejected():
    with pytest.raises(FormatError):
        GraphModel.from_edges(2, [(1, 1)])


def test_negative_order_rejected():
    with pytest.raises(FormatError):
        GraphModel.from_edges(-1, [])


def test_asymmetric_adjacency_rejected():
    with pytest.raises(FormatError):
        GraphModel(((1,), ()))


def test_model_is_immutable():
    graph = GraphModel.from_edges(2, [(0, 1)])
    with pytest.raises(AttributeError):
        graph.adjacency = ()


def test_networkx_roundtrip_and_components():
    g = nx.disjoint_union(nx.cycle_graph(3), nx.path_graph(2))
    g.add_node("lonely")
    graph = GraphModel.from_networkx(g)
    assert graph.order() == 6
    assert graph.components() == 3
    back = graph.to_networkx()
    assert back.number_of_edges() == g.number_of_edges()
    assert checks.symmetric(graph)


def test_empty_graph_has_no_components():
    assert GraphModel.from_edges(0, []).components() == 0
