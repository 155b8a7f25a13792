from typing import Protocol, runtime_checkable

from route_sim.domain.entities.geography import Point
from route_sim.domain.entities.graph import NodeId
from route_sim.domain.entities.routing import Path, RoutingTable


# ------------- Presentation boundary --------------------
@runtime_checkable
class Renderer(Protocol):
    """
    Responsibilities:
      • Draw the moving marker for each animation frame.
      • Show a computed path and the per-router tables.
    The engine never touches a drawing toolkit directly.
    """

    def on_frame(self, point: Point, highlighted: tuple[NodeId, ...]) -> None: ...
    def on_path_computed(self, path: Path) -> None: ...
    def on_table_computed(self, table: RoutingTable) -> None: ...


class NullRenderer:
    def on_frame(self, point, highlighted):
        pass

    def on_path_computed(self, path):
        pass

    def on_table_computed(self, table):
        pass


# ------------- External road routing --------------------
@runtime_checkable
class RoadRouter(Protocol):
    """
    Responsibilities:
      • Route between two (lat, lng) points over a real road network.
      • Raise RoadRoutingError when no route can be produced.
    """

    def route(self, start: Point, end: Point): ...
