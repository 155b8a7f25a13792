from concurrent.futures import ThreadPoolExecutor

from route_sim.domain.entities.graph import GraphModel, NodeId
from route_sim.domain.entities.routing import RoutingTable, RoutingTableEntry
from route_sim.domain.mechanics.mechanics_shortest_path import (
    ShortestPathEngine,
    reconstruct_path,
)


class RoutingTableBuilder:
    def __init__(self, graph: GraphModel, engine: ShortestPathEngine | None = None):
        self.G = graph
        self.engine = engine or ShortestPathEngine(graph)

    def build_table(self, source: NodeId) -> RoutingTable:
        result = self.engine.dijkstra(source)
        entries = []
        for dest in self.G.all_node_ids():
            if dest == source:
                continue
            # next hop is the second node of the reconstructed path, not a raw
            # predecessor-chain walk
            path = reconstruct_path(result, dest)
            entries.append(
                RoutingTableEntry(destination=dest, next_hop=path.next_hop, cost=path.cost)
            )
        return RoutingTable(router=source, entries=entries)

    def build_all_tables(self, *, max_workers: int | None = None) -> list[RoutingTable]:
        """One fresh Dijkstra run per router. The graph must not change meanwhile."""
        sources = self.G.all_node_ids()
        if not max_workers or max_workers <= 1:
            return [self.build_table(s) for s in sources]
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(self.build_table, sources))
