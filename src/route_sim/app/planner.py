# app/planner.py
import logging
import time
from dataclasses import dataclass
from typing import Literal

from route_sim.app.protocols import NullRenderer, Renderer, RoadRouter
from route_sim.domain.entities.geography import Point, Pt, to_point
from route_sim.domain.entities.graph import GraphModel
from route_sim.domain.entities.routing import Path
from route_sim.domain.mechanics.mechanics_geospace import NearestNodeLocator
from route_sim.domain.mechanics.mechanics_shortest_path import ShortestPathEngine
from route_sim.services.road_routing import (
    FALLBACK_SPEED_KMH,
    RoadRoutingError,
    estimate_duration_min,
    straight_line_route,
)

log = logging.getLogger("route_sim.planner")

PlanSource = Literal["grid", "road", "straight_line"]


@dataclass(frozen=True)
class RoutePlan:
    path: list[Point]
    distance_km: float
    duration_min: float
    source: PlanSource
    steps: int
    elapsed_ms: float = 0.0
    grid_path: Path | None = None

    @property
    def rounded_minutes(self) -> int:
        return round(self.duration_min)


class GeoRoutePlanner:
    """
    Start/end planning on a map: Dijkstra over a lattice graph, or an external
    road router that degrades to a great-circle estimate when it fails.
    """

    def __init__(
        self,
        graph: GraphModel,
        road_router: RoadRouter,
        *,
        renderer: Renderer | None = None,
        speed_kmh: float = FALLBACK_SPEED_KMH,
    ):
        self.graph = graph
        self.road_router = road_router
        self.renderer = renderer or NullRenderer()
        self.engine = ShortestPathEngine(graph)
        self.locator = NearestNodeLocator()
        self.speed_kmh = speed_kmh

    def plan_on_grid(self, start: Pt, end: Pt) -> RoutePlan | None:
        a, b = to_point(start), to_point(end)
        na, nb = self.locator.nearest(self.graph, a), self.locator.nearest(self.graph, b)
        if na is None or nb is None:
            log.warning("grid planning skipped: empty graph")
            return None

        t0 = time.perf_counter()
        path = self.engine.shortest_path(na, nb)
        elapsed_ms = (time.perf_counter() - t0) * 1000
        if not path.found:
            log.warning("no grid path", extra={"extra": {"start": na, "end": nb}})
            return None

        self.renderer.on_path_computed(path)
        return RoutePlan(
            path=[self.graph.node_point(n) for n in path.nodes],
            distance_km=path.cost,
            duration_min=estimate_duration_min(path.cost, self.speed_kmh),
            source="grid",
            steps=len(path),
            elapsed_ms=elapsed_ms,
            grid_path=path,
        )

    def plan_by_road(self, start: Pt, end: Pt) -> RoutePlan:
        a, b = to_point(start), to_point(end)
        t0 = time.perf_counter()
        try:
            road = self.road_router.route(a, b)
            source: PlanSource = "road"
        except RoadRoutingError as exc:
            log.warning(
                "road routing unavailable, using straight-line estimate",
                extra={"extra": {"error": str(exc)}},
            )
            road = straight_line_route(a, b, self.speed_kmh)
            source = "straight_line"
        return RoutePlan(
            path=list(road.geometry),
            distance_km=road.distance_km,
            duration_min=road.duration_min,
            source=source,
            steps=len(road.geometry),
            elapsed_ms=(time.perf_counter() - t0) * 1000,
        )

    def plan(self, start: Pt, end: Pt, *, use_grid: bool = False) -> RoutePlan | None:
        return self.plan_on_grid(start, end) if use_grid else self.plan_by_road(start, end)
