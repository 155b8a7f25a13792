import math

import pytest

from route_sim.domain.entities.geography import Point
from route_sim.domain.entities.graph import GraphModel
from route_sim.domain.mechanics.mechanics_geospace import NearestNodeLocator, haversine_km
from route_sim.domain.mechanics.mechanics_grid import GridGraphGenerator
from route_sim.domain.mechanics.mechanics_shortest_path import ShortestPathEngine


def test_haversine_known_values():
    assert haversine_km((0, 0), (0, 0)) == 0.0
    # one degree along the equator on a 6371 km sphere
    assert haversine_km((0, 0), (0, 1)) == pytest.approx(2 * math.pi * 6371 / 360, rel=1e-9)
    assert haversine_km(Point(10, 20), Point(-5, 3)) == pytest.approx(
        haversine_km(Point(-5, 3), Point(10, 20))
    )


def test_two_by_two_grid():
    G = GridGraphGenerator().generate(center=(0.0, 0.0), grid_size=2, cell_size=0.01)
    assert G.all_node_ids() == [0, 1, 2, 3]
    assert G.node_point(0) == Point(-0.01, -0.01)
    assert G.node_point(3) == Point(0.0, 0.0)
    pairs = sorted(tuple(sorted((e.a, e.b))) for e in G.edges())
    assert pairs == [(0, 1), (0, 2), (1, 3), (2, 3)]
    for e in G.edges():
        assert e.weight == pytest.approx(1.11, abs=0.01)
        assert e.weight == pytest.approx(haversine_km(G.node_point(e.a), G.node_point(e.b)))


@pytest.mark.parametrize("n", [1, 3, 5, 15])
def test_grid_counts(n):
    G = GridGraphGenerator().generate(center=(-20.15, 28.5833), grid_size=n, cell_size=0.005)
    assert len(G) == n * n
    assert G.edge_count() == 2 * n * (n - 1)
    for row in range(n - 1):
        for col in range(n - 1):
            u = row * n + col
            nbrs = G.neighbors_of(u)
            assert u + 1 in nbrs and u + n in nbrs


def test_grid_is_connected_and_routable():
    G = GridGraphGenerator().generate(center=(0.0, 0.0), grid_size=4, cell_size=0.01)
    path = ShortestPathEngine(G).shortest_path(0, 15)
    assert path.found
    assert len(path) == 7  # 3 right + 3 down moves


@pytest.mark.parametrize(
    "n, cell", [(0, 0.01), (3, 0.0), (3, -1.0), (2.5, 0.01), ("3", 0.01), (True, 0.01)]
)
def test_grid_rejects_degenerate_input(n, cell):
    with pytest.raises(ValueError):
        GridGraphGenerator().generate(center=(0.0, 0.0), grid_size=n, cell_size=cell)


def test_nearest_node_and_ties():
    G = GraphModel()
    G.add_node("west", (0.0, -1.0))
    G.add_node("east", (0.0, 1.0))
    G.add_node("far", (40.0, 40.0))
    loc = NearestNodeLocator()
    assert loc.nearest(G, (0.0, 0.9)) == "east"
    # equidistant from west and east: the earlier insert wins
    assert loc.nearest(G, (0.0, 0.0)) == "west"
    node, km = loc.snap(G, (0.0, 1.0))
    assert node == "east" and km == pytest.approx(0.0, abs=1e-9)


def test_nearest_on_empty_graph():
    assert NearestNodeLocator().nearest(GraphModel(), (1.0, 1.0)) is None
    assert NearestNodeLocator().snap(GraphModel(), (1.0, 1.0)) == (None, math.inf)


def test_nearest_snaps_onto_grid_corner():
    G = GridGraphGenerator().generate(center=(0.0, 0.0), grid_size=3, cell_size=0.01)
    # node 0 sits at (-0.015, -0.015)
    assert NearestNodeLocator().nearest(G, (-1.0, -1.0)) == 0
