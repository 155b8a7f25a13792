from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field

from route_sim.domain.entities.geography import Point
from route_sim.domain.entities.graph import GraphModel, NodeId
from route_sim.domain.entities.motion import AnimationFrame, lerp
from route_sim.domain.entities.routing import Path
from route_sim.sim.event import BaseEvent
from route_sim.sim.kernel import Kernel

FrameCallback = Callable[[Point, tuple[NodeId, ...]], None]

STEPS_PER_SEGMENT = 50
FRAME_DELAY_S = 0.02


class AnimationHandle:
    def __init__(self, animator: "PathAnimator", frames: Iterator[AnimationFrame], on_frame, start_t):
        self.animator = animator
        self.on_frame: FrameCallback = on_frame
        self.start_t: float = start_t
        self.frames_emitted = 0
        self._frames = frames
        self._cancelled = False
        self._done = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done or self._cancelled

    def cancel(self) -> None:
        # the pending FrameDue is dropped when it fires; nothing else is scheduled
        self._cancelled = True
        self._frames = iter(())

    def _next(self) -> AnimationFrame | None:
        nxt = next(self._frames, None)
        if nxt is None:
            self._done = True
        return nxt


@dataclass(order=True)
class FrameDue(BaseEvent):
    handle: AnimationHandle | None = field(default=None, compare=False)
    frame: AnimationFrame | None = field(default=None, compare=False)


class PathAnimator:
    """
    Turns a node path into interpolated frames on the cooperative kernel.

    steps_per_segment frames per consecutive node pair, t = k / steps, one
    frame every frame_delay_s. Frames are produced lazily, so cancelling simply
    stops the iteration.
    """

    def __init__(
        self,
        graph: GraphModel,
        kernel: Kernel,
        *,
        steps_per_segment: int = STEPS_PER_SEGMENT,
        frame_delay_s: float = FRAME_DELAY_S,
    ):
        if steps_per_segment < 1:
            raise ValueError("steps_per_segment must be >= 1")
        if frame_delay_s < 0:
            raise ValueError("frame_delay_s must be >= 0")
        self.G, self.kernel = graph, kernel
        self.steps, self.delay = steps_per_segment, frame_delay_s
        kernel.on(FrameDue, self._on_frame_due)

    @staticmethod
    def _nodes(path: Path | Sequence[NodeId]) -> tuple[NodeId, ...]:
        if isinstance(path, Path):
            if not path.found:
                raise ValueError("cannot animate an unreachable path")
            return path.nodes
        return tuple(path)

    def frames(self, path: Path | Sequence[NodeId]) -> Iterator[AnimationFrame]:
        nodes = self._nodes(path)
        j = 0
        for i, (u, v) in enumerate(zip(nodes, nodes[1:])):
            a, b = self.G.node_point(u), self.G.node_point(v)
            highlighted = nodes[: i + 1]
            for k in range(self.steps):
                t = k / self.steps
                yield AnimationFrame(i, t, lerp(a, b, t), highlighted, j * self.delay)
                j += 1

    def frame_count(self, path: Path | Sequence[NodeId]) -> int:
        return max(0, len(self._nodes(path)) - 1) * self.steps

    def animate(self, path: Path | Sequence[NodeId], on_frame: FrameCallback) -> AnimationHandle:
        handle = AnimationHandle(self, self.frames(path), on_frame, self.kernel.now)
        first = handle._next()
        if first is not None:
            self.kernel.schedule(FrameDue(t=handle.start_t, handle=handle, frame=first))
        return handle

    def _on_frame_due(self, ev: FrameDue):
        h = ev.handle
        if h is None or h.animator is not self or h.cancelled:
            return None
        h.on_frame(ev.frame.point, ev.frame.highlighted)
        h.frames_emitted += 1
        nxt = h._next()
        if nxt is None:
            return None
        return [FrameDue(t=h.start_t + nxt.at_s, handle=h, frame=nxt)]
