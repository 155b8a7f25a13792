# main.py
import argparse
import json

from route_sim.app.build import build
from route_sim.io.recorder import JsonlSink, Recorder, RecordingRenderer


def run(cfg: dict | None = None, *, animate: bool = True) -> None:
    renderer = RecordingRenderer(Recorder(JsonlSink()))
    app = build(cfg, renderer=renderer)

    # Topology editor: three routers, a cheap detour and a direct expensive link
    ed = app.editor
    ed.add_router("A", 100, 100)
    ed.add_router("B", 300, 100)
    ed.add_router("C", 500, 100)
    ed.add_link("A", "B", 1)
    ed.add_link("B", "C", 1)
    ed.add_link("A", "C", 5)

    path = ed.shortest_path("A", "C")
    ed.routing_tables()
    if animate:
        ed.animate(path)

    # Geographic planner: two points inside the lattice
    center = app.grid.node_point(len(app.grid) // 2)
    start = (center.lat - 0.01, center.lng - 0.01)
    end = (center.lat + 0.01, center.lng + 0.015)
    grid_plan = app.planner.plan(start, end, use_grid=True)
    road_plan = app.planner.plan(start, end)
    for plan in (grid_plan, road_plan):
        if plan is not None:
            renderer.recorder.emit(
                "plan",
                source=plan.source,
                distance_km=round(plan.distance_km, 2),
                minutes=plan.rounded_minutes,
                steps=plan.steps,
            )

    app.kernel.run()


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="route-sim demo")
    ap.add_argument("--config", help="scenario JSON file")
    ap.add_argument("--no-animate", action="store_true")
    args = ap.parse_args()
    cfg = None
    if args.config:
        with open(args.config) as f:
            cfg = json.load(f)
    run(cfg, animate=not args.no_animate)
