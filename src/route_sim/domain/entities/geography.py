from dataclasses import dataclass


# Core geometry type shared by the engine and the renderers
@dataclass(frozen=True)
class Point:
    x: float  # screen x, or latitude in geographic mode
    y: float  # screen y, or longitude in geographic mode

    @property
    def lat(self) -> float:
        return self.x

    @property
    def lng(self) -> float:
        return self.y


Pt = Point | tuple[float, float]


def to_point(p: Pt) -> Point:
    return p if isinstance(p, Point) else Point(float(p[0]), float(p[1]))
