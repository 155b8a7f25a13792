# services/road_routing.py
"""
Road-routing adapter.

Talks to an OSRM-compatible /route endpoint and returns the route geometry,
distance and duration in the planner's units (km, minutes). Coordinates are
(lat, lng) internally and (lng, lat) on the wire.
"""

from dataclasses import dataclass

import requests

from route_sim.domain.entities.geography import Point, Pt, to_point
from route_sim.domain.mechanics.mechanics_geospace import haversine_km

FALLBACK_SPEED_KMH = 50.0


class RoadRoutingError(Exception):
    """The road-routing service could not produce a route."""


@dataclass(frozen=True)
class RoadRoute:
    geometry: list[Point]
    distance_km: float
    duration_min: float


def estimate_duration_min(distance_km: float, speed_kmh: float = FALLBACK_SPEED_KMH) -> float:
    return distance_km / max(speed_kmh, 0.1) * 60.0


def straight_line_route(start: Pt, end: Pt, speed_kmh: float = FALLBACK_SPEED_KMH) -> RoadRoute:
    a, b = to_point(start), to_point(end)
    d = haversine_km(a, b)
    return RoadRoute(geometry=[a, b], distance_km=d, duration_min=estimate_duration_min(d, speed_kmh))


class OSRMRoadRouter:
    def __init__(
        self,
        base_url: str = "https://router.project-osrm.org",
        profile: str = "driving",
        timeout_s: float = 5.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.profile = profile
        self.timeout = timeout_s
        self.session = session or requests.Session()

    @staticmethod
    def format_coordinates(points: list[Point]) -> str:
        """(lat, lng) points to OSRM 'lng,lat;lng,lat'."""
        return ";".join(f"{p.lng},{p.lat}" for p in points)

    def route_url(self, start: Point, end: Point) -> str:
        return f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates([start, end])}"

    def route(self, start: Pt, end: Pt) -> RoadRoute:
        a, b = to_point(start), to_point(end)
        try:
            response = self.session.get(
                self.route_url(a, b),
                params={"overview": "full", "geometries": "geojson"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise RoadRoutingError(f"road routing request failed: {exc}") from exc

        if data.get("code") != "Ok":
            raise RoadRoutingError(f"OSRM error: {data.get('message', data.get('code'))}")
        routes = data.get("routes") or []
        if not routes:
            raise RoadRoutingError("no route found between the selected points")

        route = routes[0]
        coords = route.get("geometry", {}).get("coordinates", [])
        return RoadRoute(
            geometry=[Point(lat, lng) for lng, lat in coords],
            distance_km=route["distance"] / 1000.0,
            duration_min=route["duration"] / 60.0,
        )


class StraightLineRoadRouter:
    """Offline stand-in: every route is the great-circle segment."""

    def __init__(self, speed_kmh: float = FALLBACK_SPEED_KMH):
        self.speed_kmh = speed_kmh

    def route(self, start: Pt, end: Pt) -> RoadRoute:
        return straight_line_route(start, end, self.speed_kmh)
