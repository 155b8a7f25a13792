# runtime/registries.py
from collections.abc import Callable

from route_sim.app.protocols import RoadRouter
from route_sim.config.models import (
    RoadRoutingOSRMModel,
    RoadRoutingStraightLineModel,
    RoadRoutingUnion,
)
from route_sim.services.road_routing import OSRMRoadRouter, StraightLineRoadRouter

RoadRouterFactory = Callable[[RoadRoutingUnion, dict], RoadRouter]

_road_router_registry: dict[str, RoadRouterFactory] = {}


# ------------------- Road routers ---------------------------


def register_road_router(kind: str):
    def deco(fn: RoadRouterFactory):
        _road_router_registry[kind] = fn
        return fn

    return deco


def make_road_router(cfg: RoadRoutingUnion, *, deps: dict | None = None) -> RoadRouter:
    try:
        factory = _road_router_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown road routing kind {cfg.kind!r}") from None
    return factory(cfg, deps or {})


@register_road_router("osrm")
def _make_osrm(cfg: RoadRoutingOSRMModel, deps):
    return OSRMRoadRouter(
        base_url=cfg.base_url,
        profile=cfg.profile,
        timeout_s=cfg.timeout_s,
        session=deps.get("session"),
    )


@register_road_router("straight_line")
def _make_straight_line(cfg: RoadRoutingStraightLineModel, deps):
    return StraightLineRoadRouter(speed_kmh=cfg.fallback_speed_kmh)
