import os
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- GEOGRAPHY ---------------------


class GridModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    center: tuple[float, float] = (-20.15, 28.5833)  # (lat, lng)
    grid_size: int = Field(default=15, ge=1)
    cell_size: float = Field(default=0.005, gt=0)

    @field_validator("center")
    @classmethod
    def _on_globe(cls, v: tuple[float, float]) -> tuple[float, float]:
        lat, lng = v
        if not -90.0 <= lat <= 90.0 or not -180.0 <= lng <= 180.0:
            raise ValueError(f"center must be a (lat, lng) pair in degrees, got {v}")
        return v


# ----------------- ANIMATION ---------------------


class AnimationModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    steps_per_segment: int = Field(default=50, ge=1)
    frame_delay_s: float = 0.02
    realtime: bool = False

    @field_validator("frame_delay_s")
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


# ----------------- ROAD ROUTING ---------------------


class RoadRoutingOSRMModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["osrm"] = "osrm"
    base_url: str = "https://router.project-osrm.org"
    profile: Literal["driving", "walking", "cycling"] = "driving"
    timeout_s: float = Field(default=5.0, gt=0)
    fallback_speed_kmh: float = Field(default=50.0, gt=0)

    @field_validator("base_url")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class RoadRoutingStraightLineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["straight_line"] = "straight_line"
    fallback_speed_kmh: float = Field(default=50.0, gt=0)


RoadRoutingUnion = Annotated[
    RoadRoutingOSRMModel | RoadRoutingStraightLineModel,
    Field(discriminator="kind"),
]


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "default"
    run_id: str = "local"
    log: LogModel = LogModel()
    grid: GridModel = GridModel()
    animation: AnimationModel = AnimationModel()
    road_routing: RoadRoutingUnion = Field(default_factory=RoadRoutingStraightLineModel)
