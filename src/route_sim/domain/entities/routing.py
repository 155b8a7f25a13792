import math
from dataclasses import dataclass, field

from route_sim.domain.entities.graph import NodeId

INF = math.inf


@dataclass(frozen=True)
class Path:
    nodes: tuple[NodeId, ...]
    cost: float

    @property
    def found(self) -> bool:
        return bool(self.nodes)

    @property
    def next_hop(self) -> NodeId | None:
        return self.nodes[1] if len(self.nodes) > 1 else None

    def __len__(self) -> int:
        return len(self.nodes)


# "no path": distinct from the trivial Path((s,), 0.0)
NO_PATH = Path((), INF)


@dataclass
class DijkstraResult:
    source: NodeId
    distances: dict[NodeId, float]
    predecessors: dict[NodeId, NodeId | None]
    settled: list[NodeId] = field(default_factory=list)  # in settle order


@dataclass(frozen=True)
class RoutingTableEntry:
    destination: NodeId
    next_hop: NodeId | None
    cost: float


@dataclass
class RoutingTable:
    router: NodeId
    entries: list[RoutingTableEntry]

    def entry_for(self, destination: NodeId) -> RoutingTableEntry:
        for e in self.entries:
            if e.destination == destination:
                return e
        raise KeyError(destination)
