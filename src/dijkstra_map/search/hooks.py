# search/hooks.py
from typing import Protocol


class SearchHooks(Protocol):
    def recalculate_start(self, *, origins, mode, maximum_cost, termination_points): ...
    def recalculate_end(self, *, settled, pushed, reason, wall_ms): ...
    def settle(self, point_id: int, *, cost, direction): ...
    def rejected(self, *, error: str, **kw): ...
    def warning(self, msg: str, **kw): ...


class NoopHooks:
    def recalculate_start(self, **_):
        pass

    def recalculate_end(self, **_):
        pass

    def settle(self, *_, **__):
        pass

    def rejected(self, *_, **__):
        pass

    def warning(self, *_, **__):
        pass
