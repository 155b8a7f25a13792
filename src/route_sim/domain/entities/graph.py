from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from math import isfinite
from numbers import Real

from route_sim.domain.entities.geography import Point, Pt, to_point

NodeId = str | int


class UnknownNodeError(KeyError):
    """An operation referenced a node id that was never added."""


class InvalidWeightError(ValueError):
    """Edge weight is not a finite number > 0."""


class InvalidEdgeError(ValueError):
    pass


@dataclass(frozen=True)
class Node:
    id: NodeId
    point: Point


@dataclass(frozen=True)
class Edge:
    a: NodeId
    b: NodeId
    weight: float


def check_weight(weight) -> float:
    # bool is a Real subclass; a checkbox value is not a link cost
    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise InvalidWeightError(f"edge weight must be numeric, got {weight!r}")
    w = float(weight)
    if not isfinite(w) or w <= 0:
        raise InvalidWeightError(f"edge weight must be finite and > 0, got {weight!r}")
    return w


class GraphModel:
    """
    Undirected weighted graph of named nodes.

    Adjacency is kept as node id -> {neighbor id -> weight}; both directions are
    written on every add_edge. Iteration order everywhere is insertion order,
    which the engine relies on for deterministic tie-breaks.
    """

    def __init__(self):
        self._nodes: dict[NodeId, Node] = {}
        self._adj: dict[NodeId, dict[NodeId, float]] = {}

    def __contains__(self, node_id) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def add_node(self, node_id: NodeId, point: Pt) -> bool:
        if node_id in self._nodes:
            return False
        self._nodes[node_id] = Node(node_id, to_point(point))
        self._adj[node_id] = {}
        return True

    def add_edge(self, a: NodeId, b: NodeId, weight: float) -> None:
        for n in (a, b):
            if n not in self._nodes:
                raise UnknownNodeError(n)
        if a == b:
            raise InvalidEdgeError(f"self-loop on {a!r}")
        w = check_weight(weight)
        self._adj[a][b] = w
        self._adj[b][a] = w

    def neighbors_of(self, node_id: NodeId) -> Mapping[NodeId, float]:
        try:
            return self._adj[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def all_node_ids(self) -> list[NodeId]:
        return list(self._nodes)

    def node(self, node_id: NodeId) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def node_point(self, node_id: NodeId) -> Point:
        return self.node(node_id).point

    def nodes(self) -> Iterable[Node]:
        return self._nodes.values()

    def edges(self) -> Iterator[Edge]:
        """Each undirected edge once, oriented as first inserted."""
        seen: set[frozenset] = set()
        for a, nbrs in self._adj.items():
            for b, w in nbrs.items():
                key = frozenset((a, b))
                if key not in seen:
                    seen.add(key)
                    yield Edge(a, b, w)

    def edge_count(self) -> int:
        return sum(len(nbrs) for nbrs in self._adj.values()) // 2

    def weight(self, a: NodeId, b: NodeId) -> float:
        try:
            return self._adj[a][b]
        except KeyError:
            raise InvalidEdgeError(f"no edge between {a!r} and {b!r}") from None

    @staticmethod
    def path_edges(path: Sequence[NodeId]) -> list[tuple[NodeId, NodeId]]:
        return list(zip(path, path[1:]))

    def reset(self) -> None:
        self._nodes.clear()
        self._adj.clear()
