# dijkstra_map/domain/store.py
import copy
import math
from collections.abc import Iterator
from dataclasses import dataclass, field

from dijkstra_map.domain.entities.point import (
    DEFAULT_TERRAIN,
    Point,
    TerrainType,
    as_terrain,
    is_point_id,
)
from dijkstra_map.domain.errors import IdCollision, InvalidParameter, UnknownPoint


@dataclass
class PointStore:
    """
    Points keyed by id plus directed weighted adjacency.
    `_out[s][t]` and `_in[t][s]` always hold the same weight; every id that
    appears in either map is a present point.
    """

    points: dict[int, Point] = field(default_factory=dict)
    _out: dict[int, dict[int, float]] = field(default_factory=dict)
    _in: dict[int, dict[int, float]] = field(default_factory=dict)

    # ---------------- points ------------------------------

    def add_point(self, point_id: int, terrain: TerrainType | None = DEFAULT_TERRAIN) -> None:
        if not is_point_id(point_id):
            raise InvalidParameter(f"point id must be an int, got {point_id!r}")
        point_id = int(point_id)
        t = as_terrain(terrain)
        if point_id in self.points:
            raise IdCollision(point_id)
        self.points[point_id] = Point(point_id, t)
        self._out[point_id] = {}
        self._in[point_id] = {}

    def remove_point(self, point_id: int) -> None:
        self._require(point_id)
        for target in self._out.pop(point_id):
            del self._in[target][point_id]
        for source in self._in.pop(point_id):
            del self._out[source][point_id]
        del self.points[point_id]

    def has_point(self, point_id: int) -> bool:
        return point_id in self.points

    def set_terrain_for_point(
        self, point_id: int, terrain: TerrainType | None = DEFAULT_TERRAIN
    ) -> None:
        t = as_terrain(terrain)
        self._require(point_id).terrain = t

    def get_terrain_for_point(self, point_id: int) -> TerrainType | None:
        p = self.points.get(point_id)
        return p.terrain if p else None

    def enable_point(self, point_id: int) -> None:
        self._require(point_id).enabled = True

    def disable_point(self, point_id: int) -> None:
        self._require(point_id).enabled = False

    def is_point_disabled(self, point_id: int) -> bool:
        p = self.points.get(point_id)
        return p is not None and not p.enabled

    def is_enabled(self, point_id: int) -> bool:
        p = self.points.get(point_id)
        return p is not None and p.enabled

    def get_available_id(self, above: int | None = None) -> int:
        pid = max(0, above) if above is not None else 0
        while pid in self.points:
            pid += 1
        return pid

    # ---------------- connections -------------------------

    def connect_points(
        self, source: int, target: int, weight: float = 1.0, bidirectional: bool = True
    ) -> None:
        self._require(source)
        self._require(target)
        w = float(weight)
        if not math.isfinite(w) or w < 0:
            raise InvalidParameter(f"connection weight must be finite and >= 0, got {weight!r}")
        self._out[source][target] = w
        self._in[target][source] = w
        if bidirectional:
            self._out[target][source] = w
            self._in[source][target] = w

    def remove_connection(self, source: int, target: int, bidirectional: bool = True) -> None:
        self._require(source)
        self._require(target)
        self._unlink(source, target)
        if bidirectional:
            self._unlink(target, source)

    def has_connection(self, source: int, target: int) -> bool:
        return target in self._out.get(source, ())

    def connection_weight(self, source: int, target: int) -> float | None:
        return self._out.get(source, {}).get(target)

    def outgoing(self, point_id: int) -> dict[int, float]:
        return self._out.get(point_id, {})

    def incoming(self, point_id: int) -> dict[int, float]:
        return self._in.get(point_id, {})

    # ---------------- whole store -------------------------

    def point_ids(self) -> Iterator[int]:
        return iter(self.points)

    def clear(self) -> None:
        self.points.clear()
        self._out.clear()
        self._in.clear()

    def copy(self) -> "PointStore":
        return copy.deepcopy(self)

    def __len__(self) -> int:
        return len(self.points)

    # ---------------- helpers -----------------------------

    def _require(self, point_id: int) -> Point:
        try:
            return self.points[point_id]
        except KeyError:
            raise UnknownPoint(point_id) from None

    def _unlink(self, source: int, target: int) -> None:
        self._out[source].pop(target, None)
        self._in[target].pop(source, None)
