# io/run_logging.py
import json
import logging
import sys

from route_sim.io.business_events import SimulationCompletedBiz, SimulationRejectedBiz
from route_sim.io.recorder import Recorder
from route_sim.sim.hooks import NoopHooks


class JsonFormatter(logging.Formatter):
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


def _default_json_logger(name="route_sim", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


def _alg(algorithm) -> str | None:
    return getattr(algorithm, "value", algorithm)


class RunLogging(NoopHooks):
    """
    Structured JSON logs for every orchestrator request, plus analytics events to the recorder.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self._seq = 0

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, "seq": self._seq}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def _biz(self, ev):
        if self.recorder:
            self.recorder.emit(ev)

    # --------------------------------------------------------

    def run_start(self, *, algorithm, nodes: int, edges: int):
        self._seq += 1
        if self.debug:
            self._emit("DEBUG", "run_start", algorithm=_alg(algorithm), nodes=nodes, edges=edges)

    def run_end(self, *, algorithm, path, distance, time, total_score, wall_ms):
        extra = dict(
            algorithm=_alg(algorithm),
            feasible=bool(path),
            hops=max(0, len(path) - 1),
            distance=distance,
            time=time,
            total_score=total_score,
            wall_ms=round(wall_ms, 3),
        )
        if self.debug:
            extra["path"] = list(path)
        self._emit("INFO", "run_end", **extra)
        self._biz(
            SimulationCompletedBiz(
                run_id=self.run_id,
                seq=self._seq,
                name="SimulationCompleted",
                algorithm=_alg(algorithm),
                path=list(path),
                distance=distance,
                time=time,
                total_score=total_score,
                wall_ms=wall_ms,
            )
        )

    def rejected(self, *, algorithm, reason: str, **kw):
        self._seq += 1
        self._emit("WARNING", "rejected", algorithm=_alg(algorithm), reason=reason, **kw)
        self._biz(
            SimulationRejectedBiz(
                run_id=self.run_id,
                seq=self._seq,
                name="SimulationRejected",
                algorithm=_alg(algorithm),
                reason=reason,
            )
        )

    def error(self, *, algorithm, exc: BaseException):
        self._emit("ERROR", "solver_error", algorithm=_alg(algorithm), error=str(exc))
