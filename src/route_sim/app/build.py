# route_sim/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from route_sim.app.editor import TopologyEditor
from route_sim.app.planner import GeoRoutePlanner
from route_sim.app.protocols import NullRenderer, Renderer
from route_sim.config.models import ScenarioModel
from route_sim.domain.entities.graph import GraphModel
from route_sim.domain.mechanics.mechanics_grid import GridGraphGenerator
from route_sim.domain.mechanics.mechanics_path_animators import PathAnimator
from route_sim.io.kernel_logging import KernelLogging, json_logger
from route_sim.runtime.registries import make_road_router
from route_sim.sim.hooks import NoopHooks
from route_sim.sim.kernel import Kernel


@dataclass
class App:
    config: ScenarioModel
    kernel: Kernel
    editor: TopologyEditor
    grid: GraphModel
    planner: GeoRoutePlanner
    grid_animator: PathAnimator


def build(
    cfg: ScenarioModel | Mapping | None = None,
    *,
    renderer: Renderer | None = None,
    use_logging: bool = True,
    deps: dict | None = None,
) -> App:
    # 0) Validate config
    if cfg is None:
        model = ScenarioModel()
    else:
        model = cfg if isinstance(cfg, ScenarioModel) else ScenarioModel.model_validate(cfg)
    renderer = renderer or NullRenderer()

    # 1) Kernel (with hooks)
    if use_logging:
        json_logger(level=model.log.level)
        hooks = KernelLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
    else:
        hooks = NoopHooks()
    kernel = Kernel(hooks=hooks, realtime=model.animation.realtime)

    # 2) Topology editor
    editor = TopologyEditor(
        kernel=kernel,
        renderer=renderer,
        steps_per_segment=model.animation.steps_per_segment,
        frame_delay_s=model.animation.frame_delay_s,
    )

    # 3) Geographic mode: lattice fallback graph + road router
    grid = GridGraphGenerator().generate(
        model.grid.center, model.grid.grid_size, model.grid.cell_size
    )
    road_router = make_road_router(model.road_routing, deps=deps)
    planner = GeoRoutePlanner(
        grid,
        road_router,
        renderer=renderer,
        speed_kmh=model.road_routing.fallback_speed_kmh,
    )
    grid_animator = PathAnimator(
        grid,
        kernel,
        steps_per_segment=model.animation.steps_per_segment,
        frame_delay_s=model.animation.frame_delay_s,
    )

    return App(model, kernel, editor, grid, planner, grid_animator)
