import heapq

from route_sim.domain.entities.graph import GraphModel, NodeId, UnknownNodeError
from route_sim.domain.entities.routing import INF, NO_PATH, DijkstraResult, Path


def reconstruct_path(result: DijkstraResult, destination: NodeId) -> Path:
    if destination not in result.distances or result.distances[destination] == INF:
        return NO_PATH
    nodes: list[NodeId] = []
    current: NodeId | None = destination
    while current is not None:
        nodes.append(current)
        current = result.predecessors[current]
    nodes.reverse()
    if nodes[0] != result.source:
        return NO_PATH
    return Path(tuple(nodes), result.distances[destination])


class ShortestPathEngine:
    """
    Single-source Dijkstra over a GraphModel.

    The frontier is a binary heap of (distance, seq, node). seq counts pushes, so
    equal tentative distances pop in first-discovered order. A node may sit in
    the heap several times; entries popped after the node is settled are skipped.
    """

    def __init__(self, graph: GraphModel):
        self.G = graph

    def dijkstra(self, source: NodeId, *, target: NodeId | None = None) -> DijkstraResult:
        if source not in self.G:
            raise UnknownNodeError(source)
        dist: dict[NodeId, float] = {n: INF for n in self.G.all_node_ids()}
        prev: dict[NodeId, NodeId | None] = {n: None for n in dist}
        dist[source] = 0.0

        settled: set[NodeId] = set()
        order: list[NodeId] = []
        seq = 0
        q: list[tuple[float, int, NodeId]] = [(0.0, seq, source)]
        while q:
            d, _, u = heapq.heappop(q)
            if u in settled:
                continue
            settled.add(u)
            order.append(u)
            if u == target:
                break
            for v, w in self.G.neighbors_of(u).items():
                alt = d + w
                if alt < dist[v]:
                    dist[v] = alt
                    prev[v] = u
                    seq += 1
                    heapq.heappush(q, (alt, seq, v))
        return DijkstraResult(source=source, distances=dist, predecessors=prev, settled=order)

    def shortest_path(self, source: NodeId, destination: NodeId) -> Path:
        if destination not in self.G:
            return NO_PATH
        result = self.dijkstra(source, target=destination)
        return reconstruct_path(result, destination)
