import itertools
import math
import random

import pytest

from route_sim.domain.entities.graph import GraphModel
from route_sim.domain.entities.routing import RoutingTableEntry
from route_sim.domain.mechanics.mechanics_routing_tables import RoutingTableBuilder
from route_sim.domain.mechanics.mechanics_shortest_path import ShortestPathEngine


@pytest.fixture
def triangle() -> GraphModel:
    G = GraphModel()
    for i, name in enumerate("ABC"):
        G.add_node(name, (i * 100.0, 0.0))
    G.add_edge("A", "B", 1)
    G.add_edge("B", "C", 1)
    G.add_edge("A", "C", 5)
    return G


def test_table_rows_for_source_a(triangle):
    table = RoutingTableBuilder(triangle).build_table("A")
    assert table.router == "A"
    assert table.entries == [
        RoutingTableEntry(destination="B", next_hop="B", cost=1.0),
        RoutingTableEntry(destination="C", next_hop="B", cost=2.0),
    ]
    assert table.entry_for("C") == RoutingTableEntry("C", "B", 2.0)


def test_adjacent_destination_has_itself_as_next_hop():
    # chain A-B-C-D: from B, A is one hop away on the other side
    G = GraphModel()
    for name in "ABCD":
        G.add_node(name, (0, 0))
    G.add_edge("A", "B", 2)
    G.add_edge("B", "C", 2)
    G.add_edge("C", "D", 2)
    table = RoutingTableBuilder(G).build_table("B")
    hops = {e.destination: e.next_hop for e in table.entries}
    assert hops == {"A": "A", "C": "C", "D": "C"}


def test_unreachable_rows(triangle):
    triangle.add_node("D", (0, 0))
    table = RoutingTableBuilder(triangle).build_table("A")
    row = table.entry_for("D")
    assert row.next_hop is None and row.cost == math.inf
    # and from the isolated router itself, everything is unreachable
    lone = RoutingTableBuilder(triangle).build_table("D")
    assert all(e.next_hop is None and e.cost == math.inf for e in lone.entries)


def test_all_tables_cover_every_router(triangle):
    tables = RoutingTableBuilder(triangle).build_all_tables()
    assert [t.router for t in tables] == ["A", "B", "C"]
    assert all(len(t.entries) == 2 for t in tables)
    assert tables[2].entry_for("A") == RoutingTableEntry("A", "B", 2.0)


def test_threaded_build_matches_sequential():
    rnd = random.Random(3)
    G = GraphModel()
    for i in range(12):
        G.add_node(i, (0, 0))
    for a, b in itertools.combinations(range(12), 2):
        if rnd.random() < 0.3:
            G.add_edge(a, b, rnd.randint(1, 5))
    builder = RoutingTableBuilder(G)
    assert builder.build_all_tables(max_workers=4) == builder.build_all_tables()


@pytest.mark.parametrize("seed", range(10))
def test_next_hop_is_second_node_of_shortest_path(seed):
    rnd = random.Random(seed)
    G = GraphModel()
    n = 8
    for i in range(n):
        G.add_node(i, (0, 0))
    for a, b in itertools.combinations(range(n), 2):
        if rnd.random() < 0.35:
            G.add_edge(a, b, rnd.randint(1, 9))
    eng = ShortestPathEngine(G)
    builder = RoutingTableBuilder(G, eng)
    for s in range(n):
        for row in builder.build_table(s).entries:
            path = eng.shortest_path(s, row.destination)
            if not path.found:
                assert row.next_hop is None
            else:
                assert row.next_hop == path.nodes[1]
                assert row.cost == path.cost
