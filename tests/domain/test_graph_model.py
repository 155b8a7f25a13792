import math

import pytest

from route_sim.domain.entities.geography import Point
from route_sim.domain.entities.graph import (
    GraphModel,
    InvalidEdgeError,
    InvalidWeightError,
    UnknownNodeError,
)


def test_add_node_is_idempotent():
    G = GraphModel()
    assert G.add_node("A", (0, 0)) is True
    assert G.add_node("A", (9, 9)) is False
    assert G.all_node_ids() == ["A"]
    assert G.node_point("A") == Point(0.0, 0.0)  # first insert wins


def test_edges_are_symmetric():
    G = GraphModel()
    G.add_node("A", (0, 0))
    G.add_node("B", (1, 0))
    G.add_edge("A", "B", 3)
    assert G.neighbors_of("A") == {"B": 3.0}
    assert G.neighbors_of("B") == {"A": 3.0}
    assert G.edge_count() == 1
    assert [(e.a, e.b, e.weight) for e in G.edges()] == [("A", "B", 3.0)]


def test_re_adding_an_edge_replaces_its_weight():
    G = GraphModel()
    G.add_node(1, (0, 0))
    G.add_node(2, (1, 0))
    G.add_edge(1, 2, 4)
    G.add_edge(2, 1, 2)
    assert G.weight(1, 2) == 2.0
    assert G.edge_count() == 1


@pytest.mark.parametrize("w", [0, -1, "3", None, True, math.inf, math.nan])
def test_bad_weights_are_rejected(w):
    G = GraphModel()
    G.add_node("A", (0, 0))
    G.add_node("B", (1, 0))
    with pytest.raises(InvalidWeightError):
        G.add_edge("A", "B", w)
    assert G.neighbors_of("A") == {}


def test_unknown_endpoints_and_self_loops_are_rejected():
    G = GraphModel()
    G.add_node("A", (0, 0))
    with pytest.raises(UnknownNodeError):
        G.add_edge("A", "Z", 1)
    with pytest.raises(InvalidEdgeError):
        G.add_edge("A", "A", 1)
    with pytest.raises(UnknownNodeError):
        G.neighbors_of("Z")


def test_reset_discards_everything():
    G = GraphModel()
    G.add_node("A", (0, 0))
    G.add_node("B", (1, 0))
    G.add_edge("A", "B", 1)
    G.reset()
    assert len(G) == 0 and G.edge_count() == 0
    assert G.add_node("A", (5, 5)) is True


def test_path_edges():
    assert GraphModel.path_edges(["A", "B", "C"]) == [("A", "B"), ("B", "C")]
    assert GraphModel.path_edges(["A"]) == []
