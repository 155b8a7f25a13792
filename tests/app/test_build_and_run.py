# tests/app/test_build_and_run.py
from route_sim.app.build import build
from route_sim.io.recorder import MemorySink, Recorder, RecordingRenderer
from route_sim.services.road_routing import OSRMRoadRouter, StraightLineRoadRouter


def test_build_runs():
    cfg = {
        "name": "test",
        "run_id": "t-1",
        "grid": {"center": (0.0, 0.0), "grid_size": 4, "cell_size": 0.01},
        "animation": {"steps_per_segment": 10, "frame_delay_s": 0.02},
        "road_routing": {"kind": "straight_line"},
    }
    sink = MemorySink()
    app = build(cfg, renderer=RecordingRenderer(Recorder(sink)), use_logging=False)
    assert len(app.grid) == 16
    assert isinstance(app.planner.road_router, StraightLineRoadRouter)

    ed = app.editor
    ed.add_router("A", 0, 0)
    ed.add_router("B", 10, 0)
    ed.add_link("A", "B", 2)
    ed.animate(ed.shortest_path("A", "B"))

    plan = app.planner.plan((-0.02, -0.02), (0.01, 0.01), use_grid=True)
    app.grid_animator.animate(plan.grid_path, lambda p, h: None)

    app.kernel.run()
    kinds = [r["kind"] for r in sink.records]
    assert kinds.count("frame") == 10
    assert kinds.count("path") == 2  # editor path + grid path


def test_build_defaults_and_osrm_registry():
    app = build({"road_routing": {"kind": "osrm", "timeout_s": 1.5}}, use_logging=False)
    assert len(app.grid) == 15 * 15
    router = app.planner.road_router
    assert isinstance(router, OSRMRoadRouter) and router.timeout == 1.5
    assert app.planner.speed_kmh == 50.0


def test_build_with_logging_hooks(caplog):
    caplog.set_level("INFO", logger="route_sim")
    app = build({"run_id": "logged"})
    app.kernel.run()
    msgs = [r.getMessage() for r in caplog.records if r.name == "route_sim"]
    assert msgs[:2] == ["run_start", "run_end"]
    assert caplog.records[0].extra["run_id"] == "logged"
