import math

import numpy as np

from route_sim.domain.entities.geography import Point, Pt, to_point
from route_sim.domain.entities.graph import GraphModel, NodeId

EARTH_RADIUS_KM = 6371.0


def haversine_km(a: Pt, b: Pt) -> float:
    """Great-circle distance in km between two (lat, lng) points in degrees."""
    a, b = to_point(a), to_point(b)
    dlat = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)
    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(dlng / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def haversine_km_many(lats: np.ndarray, lngs: np.ndarray, p: Point) -> np.ndarray:
    lat1, lng1 = np.radians(lats), np.radians(lngs)
    lat2, lng2 = math.radians(p.lat), math.radians(p.lng)
    h = (
        np.sin((lat2 - lat1) / 2) ** 2
        + np.cos(lat1) * math.cos(lat2) * np.sin((lng2 - lng1) / 2) ** 2
    )
    h = np.clip(h, 0.0, 1.0)
    return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


class NearestNodeLocator:
    """Snap a free coordinate to the closest node (linear scan, haversine)."""

    def nearest(self, graph: GraphModel, p: Pt) -> NodeId | None:
        nodes = list(graph.nodes())
        if not nodes:
            return None
        p = to_point(p)
        lats = np.fromiter((n.point.lat for n in nodes), dtype=float, count=len(nodes))
        lngs = np.fromiter((n.point.lng for n in nodes), dtype=float, count=len(nodes))
        # argmin returns the first minimum, i.e. the earliest inserted node on ties
        idx = int(np.argmin(haversine_km_many(lats, lngs, p)))
        return nodes[idx].id

    def snap(self, graph: GraphModel, p: Pt) -> tuple[NodeId | None, float]:
        n = self.nearest(graph, p)
        if n is None:
            return None, math.inf
        return n, haversine_km(p, graph.node_point(n))
