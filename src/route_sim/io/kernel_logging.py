# io/kernel_logging.py
import json
import logging
import sys

from route_sim.sim.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def json_logger(name="route_sim", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class KernelLogging(NoopHooks):
    """
    Structured logs for the scheduler: run boundaries at INFO, sampled
    scheduling/dispatch detail at DEBUG.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or json_logger(level=level)
        self._processed = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # engine lifecycle

    def run_start(self, *, until: float, max_events: int | None, qsize: int | None):
        self._emit("INFO", "run_start", until=until, max_events=max_events, qsize=qsize)

    def run_end(self, *, processed: int, **extra):
        self._emit("INFO", "run_end", processed=processed, **extra)

    def schedule(self, ev, *, now: float, qsize: int):
        if self.debug and (qsize % self.sample_every) == 0:
            self._emit("DEBUG", "schedule", event=type(ev).__name__, t=ev.t, now=now, qsize=qsize)

    def dispatch_start(self, ev, *, seq: int, qsize: int, handlers: int):
        self._processed += 1
        if self.debug and (self._processed % self.sample_every) == 0:
            self._emit(
                "DEBUG", type(ev).__name__, t=ev.t, seq=seq, qsize=qsize, handlers=handlers
            )

    def dispatch_end(self, ev, *, out_events: int, qsize: int, **extra):
        if self.debug and (self._processed % self.sample_every) == 0:
            self._emit("DEBUG", "dispatch_done", out_events=out_events, qsize=qsize, **extra)

    def error(self, ev, *, reason: str, **extra):
        self._emit("ERROR", "kernel_error", event=type(ev).__name__, reason=reason, **extra)
