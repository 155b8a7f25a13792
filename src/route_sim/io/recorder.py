# io/recorder.py
import json
import logging
import math
import sys
from dataclasses import asdict
from typing import Protocol

log = logging.getLogger("route_sim.recorder")


def _finite(v):
    # JSON has no Infinity; unreachable costs are written as null
    if isinstance(v, float) and math.isinf(v):
        return None
    if isinstance(v, dict):
        return {k: _finite(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [_finite(x) for x in v]
    return v


class Sink(Protocol):
    def write(self, record: dict) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, record: dict) -> None:
        self.fp.write(json.dumps(_finite(record)) + "\n")


class MemorySink:
    def __init__(self):
        self.records: list[dict] = []

    def write(self, record: dict) -> None:
        self.records.append(record)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, kind: str, **data):
        record = {"kind": kind, **data}
        for s in self.sinks:
            try:
                s.write(record)
            except Exception:
                # a broken sink must not stop the animation
                log.exception("sink %s failed", type(s).__name__)


class RecordingRenderer:
    """Renderer that streams everything it is shown to a Recorder."""

    def __init__(self, recorder: Recorder | None = None):
        self.recorder = recorder or Recorder()

    def on_frame(self, point, highlighted):
        self.recorder.emit("frame", x=point.x, y=point.y, highlighted=list(highlighted))

    def on_path_computed(self, path):
        self.recorder.emit("path", nodes=list(path.nodes), cost=path.cost, found=path.found)

    def on_table_computed(self, table):
        self.recorder.emit(
            "routing_table", router=table.router, entries=[asdict(e) for e in table.entries]
        )
