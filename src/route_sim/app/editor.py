# app/editor.py
import logging
import math
import re

from route_sim.app.protocols import NullRenderer, Renderer
from route_sim.domain.entities.graph import (
    GraphModel,
    InvalidEdgeError,
    InvalidWeightError,
    NodeId,
    UnknownNodeError,
)
from route_sim.domain.entities.routing import NO_PATH, Path, RoutingTable
from route_sim.domain.mechanics.mechanics_path_animators import AnimationHandle, PathAnimator
from route_sim.domain.mechanics.mechanics_routing_tables import RoutingTableBuilder
from route_sim.domain.mechanics.mechanics_shortest_path import ShortestPathEngine
from route_sim.sim.kernel import Kernel

log = logging.getLogger("route_sim.editor")


def parse_cost(cost) -> int | None:
    """Link costs are positive integers; '3' and 3.0 are accepted, 2.5 is not."""
    if isinstance(cost, bool):
        return None
    if isinstance(cost, str):
        cost = cost.strip()
        if not re.fullmatch(r"\+?[0-9]+", cost):
            return None
        cost = int(cost)
    elif isinstance(cost, float):
        if not cost.is_integer():
            return None
        cost = int(cost)
    elif not isinstance(cost, int):
        return None
    return cost if cost > 0 else None


class TopologyEditor:
    """
    Router/link editor on a screen canvas.

    Every input is validated here and reported as True/False; the graph and
    the engine below only ever see well-formed calls.
    """

    def __init__(
        self,
        *,
        kernel: Kernel | None = None,
        renderer: Renderer | None = None,
        steps_per_segment: int = 50,
        frame_delay_s: float = 0.02,
    ):
        self.graph = GraphModel()
        self.kernel = kernel or Kernel()
        self.renderer = renderer or NullRenderer()
        self.engine = ShortestPathEngine(self.graph)
        self.tables = RoutingTableBuilder(self.graph, self.engine)
        self.animator = PathAnimator(
            self.graph,
            self.kernel,
            steps_per_segment=steps_per_segment,
            frame_delay_s=frame_delay_s,
        )
        self._animation: AnimationHandle | None = None

    # ---------------- editing ----------------

    def add_router(self, name: NodeId, x: float, y: float) -> bool:
        if isinstance(name, str):
            name = name.strip()
        if name is None or name == "":
            log.warning("router rejected: empty name")
            return False
        try:
            x, y = float(x), float(y)
        except (TypeError, ValueError):
            x = y = math.nan
        if not (math.isfinite(x) and math.isfinite(y)):
            log.warning("router rejected: bad position", extra={"extra": {"router": name}})
            return False
        if not self.graph.add_node(name, (x, y)):
            log.warning("router rejected: duplicate name", extra={"extra": {"router": name}})
            return False
        return True

    def add_link(self, a: NodeId, b: NodeId, cost) -> bool:
        c = parse_cost(cost)
        if c is None:
            log.warning("link rejected: bad cost", extra={"extra": {"a": a, "b": b, "cost": cost}})
            return False
        try:
            self.graph.add_edge(a, b, c)
        except (UnknownNodeError, InvalidEdgeError, InvalidWeightError) as exc:
            log.warning("link rejected", extra={"extra": {"a": a, "b": b, "error": str(exc)}})
            return False
        return True

    def reset(self) -> None:
        self.stop_animation()
        self.graph.reset()

    # ---------------- queries ----------------

    def shortest_path(self, source: NodeId, destination: NodeId) -> Path:
        for n in (source, destination):
            if n not in self.graph:
                log.warning("path query rejected: unknown router", extra={"extra": {"router": n}})
                return NO_PATH
        path = self.engine.shortest_path(source, destination)
        if path.found:
            self.renderer.on_path_computed(path)
        return path

    def routing_tables(self, *, max_workers: int | None = None) -> list[RoutingTable]:
        tables = self.tables.build_all_tables(max_workers=max_workers)
        for t in tables:
            self.renderer.on_table_computed(t)
        return tables

    # ---------------- animation ----------------

    def animate(self, path: Path) -> AnimationHandle | None:
        """Start a packet animation; a running one is cancelled first."""
        if not path.found:
            return None
        self.stop_animation()
        self._animation = self.animator.animate(path, self.renderer.on_frame)
        return self._animation

    def stop_animation(self) -> None:
        if self._animation is not None and not self._animation.done:
            self._animation.cancel()
        self._animation = None
