from dataclasses import dataclass

from route_sim.domain.entities.geography import Point
from route_sim.domain.entities.graph import NodeId


@dataclass(frozen=True)
class AnimationFrame:
    segment_index: int
    t: float  # fraction along the segment, [0, 1)
    point: Point
    highlighted: tuple[NodeId, ...]
    at_s: float  # offset from the animation start


def lerp(a: Point, b: Point, t: float) -> Point:
    return Point(a.x + t * (b.x - a.x), a.y + t * (b.y - a.y))
