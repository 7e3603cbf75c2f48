# io/search_logging.py
import json
import logging
import sys

from dijkstra_map.search.hooks import NoopHooks


def _default_json_logger(name="dijkstra_map", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

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

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SearchLogging(NoopHooks):
    """
    Structured logs for recalculations: one JSON record per run, plus one per
    settled point when `debug` is on (sampled with `sample_every`).
    """

    def __init__(
        self,
        map_name: str = "map",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
    ):
        self.map_name, self.debug, self.sample_every = map_name, debug, max(1, sample_every)
        self.log = logger or _default_json_logger(level=level)
        self.runs = 0
        self._settled = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"map": self.map_name, "run": self.runs}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    # --------------- recalculation lifecycle -----------------

    def recalculate_start(self, *, origins, mode, maximum_cost, termination_points):
        self.runs += 1
        self._settled = 0
        self._emit(
            "INFO",
            "recalculate_start",
            origins=origins,
            mode=mode,
            # json has no infinity literal
            maximum_cost=None if maximum_cost == float("inf") else maximum_cost,
            termination_points=termination_points,
        )

    def recalculate_end(self, *, settled, pushed, reason, wall_ms):
        self._emit(
            "INFO",
            "recalculate_end",
            settled=settled,
            pushed=pushed,
            reason=reason,
            wall_ms=round(wall_ms, 3),
        )

    def settle(self, point_id: int, *, cost, direction):
        self._settled += 1
        if self.debug and (self._settled % self.sample_every) == 0:
            self._emit("DEBUG", "settle", point=point_id, cost=cost, direction=direction)

    def rejected(self, *, error: str, **extra):
        self._emit("ERROR", "recalculate_rejected", error=error, **extra)

    def warning(self, msg: str, **extra):
        self._emit("WARNING", msg, **extra)
