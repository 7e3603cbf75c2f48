# dijkstra_map/domain/results.py
import math
from collections.abc import Iterable, Mapping
from types import MappingProxyType

import numpy as np

from dijkstra_map.domain.entities.point import NO_PATH, PointInfo


class Results:
    """
    Read-only view of one recalculation: point id -> (cost, direction).
    Only settled points have an entry; everything else reads as unreachable.
    """

    def __init__(self, entries: Mapping[int, PointInfo] | None = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def empty(cls) -> "Results":
        return cls()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, point_id: object) -> bool:
        return point_id in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Results):
            return NotImplemented
        return dict(self._entries) == dict(other._entries)

    def __deepcopy__(self, memo):
        # immutable; sharing is safe
        return self

    def is_reached(self, point_id: int) -> bool:
        return point_id in self._entries

    # ------------- single point -------------------

    def cost_at(self, point_id: int) -> float:
        info = self._entries.get(point_id)
        return info.cost if info else math.inf

    def direction_at(self, point_id: int) -> int | None:
        info = self._entries.get(point_id)
        return info.direction if info else NO_PATH

    # ------------- batch --------------------------

    def costs_at(self, point_ids: Iterable[int]) -> np.ndarray:
        return np.fromiter((self.cost_at(p) for p in point_ids), dtype=np.float64)

    def directions_at(self, point_ids: Iterable[int], no_path: int = -1) -> np.ndarray:
        """Directions as an int array; ``no_path`` fills unreachable points.

        Point ids may be negative, so pick a ``no_path`` that is not a live id.
        """
        return np.fromiter(
            (
                info.direction if (info := self._entries.get(p)) else no_path
                for p in point_ids
            ),
            dtype=np.int64,
        )

    def cost_map(self) -> dict[int, float]:
        return {p: info.cost for p, info in self._entries.items()}

    def direction_map(self) -> dict[int, int]:
        return {p: info.direction for p, info in self._entries.items()}

    def points_with_cost_between(self, min_cost: float, max_cost: float) -> list[int]:
        hits = [
            (info.cost, p) for p, info in self._entries.items() if min_cost <= info.cost <= max_cost
        ]
        hits.sort()
        return [p for _, p in hits]

    # ------------- paths --------------------------

    def shortest_path_from(self, point_id: int) -> list[int]:
        """Points visited walking directions from ``point_id`` to an origin.

        The start is excluded; the last element is the origin reached. Empty
        when the start is unknown, unreachable or already an origin.
        """
        path: list[int] = []
        current = point_id
        info = self._entries.get(current)
        # directions are acyclic by construction; the bound guards bad state
        for _ in range(len(self._entries)):
            if info is None:
                return []
            if info.direction == current:
                return path
            current = info.direction
            path.append(current)
            info = self._entries.get(current)
        return []
