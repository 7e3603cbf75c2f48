# dijkstra_map/app/dijkstra_map.py
import copy
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np

from dijkstra_map.domain.entities.point import DEFAULT_TERRAIN, Rect, TerrainType
from dijkstra_map.domain.results import Results
from dijkstra_map.domain.store import PointStore
from dijkstra_map.grids.generators import Coord, add_hexagonal_grid, add_square_grid
from dijkstra_map.search.engine import OptionsLike, RecalculationEngine
from dijkstra_map.search.hooks import NoopHooks, SearchHooks


@dataclass
class DijkstraMap:
    """
    One pathfinding map: a point graph plus the results of its latest
    recalculation.

    Usage: fill the graph (`add_point`, `connect_points`, `add_square_grid`,
    ...), call `recalculate` with the origins, then read `cost_at`,
    `direction_at`, `shortest_path_from` and friends. Results only change on
    the next `recalculate` or `clear`, never on graph edits.

    With the default ``input_is_destination=True`` directions point toward the
    nearest origin; with ``False`` they point back to where the path came from.
    """

    store: PointStore = field(default_factory=PointStore)
    hooks: SearchHooks = field(default_factory=NoopHooks)
    results: Results = field(default_factory=Results.empty)

    @property
    def engine(self) -> RecalculationEngine:
        return RecalculationEngine(self.hooks)

    # ---------------- lifecycle ---------------------------

    def clear(self) -> None:
        self.store.clear()
        self.results = Results.empty()

    def duplicate(self) -> "DijkstraMap":
        # Results is immutable; hooks keep per-map counters, the logger stays shared
        return DijkstraMap(
            store=self.store.copy(), hooks=copy.copy(self.hooks), results=self.results
        )

    def duplicate_graph_from(self, source: "DijkstraMap") -> None:
        if not isinstance(source, DijkstraMap):
            raise TypeError(f"expected a DijkstraMap, got {type(source).__name__}")
        self.store = source.store.copy()
        self.results = source.results

    __copy__ = duplicate

    def __deepcopy__(self, memo) -> "DijkstraMap":
        return self.duplicate()

    # ---------------- points ------------------------------

    def get_available_id(self, above: int | None = None) -> int:
        return self.store.get_available_id(above)

    def add_point(self, point_id: int, terrain: TerrainType | None = DEFAULT_TERRAIN) -> None:
        self.store.add_point(point_id, terrain)

    def remove_point(self, point_id: int) -> None:
        self.store.remove_point(point_id)

    def has_point(self, point_id: int) -> bool:
        return self.store.has_point(point_id)

    def set_terrain_for_point(
        self, point_id: int, terrain: TerrainType | None = DEFAULT_TERRAIN
    ) -> None:
        self.store.set_terrain_for_point(point_id, terrain)

    def get_terrain_for_point(self, point_id: int) -> TerrainType | None:
        return self.store.get_terrain_for_point(point_id)

    def enable_point(self, point_id: int) -> None:
        self.store.enable_point(point_id)

    def disable_point(self, point_id: int) -> None:
        self.store.disable_point(point_id)

    def is_point_disabled(self, point_id: int) -> bool:
        return self.store.is_point_disabled(point_id)

    # ---------------- connections -------------------------

    def connect_points(
        self, source: int, target: int, weight: float = 1.0, bidirectional: bool = True
    ) -> None:
        self.store.connect_points(source, target, weight, bidirectional)

    def remove_connection(self, source: int, target: int, bidirectional: bool = True) -> None:
        self.store.remove_connection(source, target, bidirectional)

    def has_connection(self, source: int, target: int) -> bool:
        return self.store.has_connection(source, target)

    # ---------------- grids -------------------------------

    def add_square_grid(
        self,
        bounds: Rect | tuple[int, int, int, int],
        terrain: TerrainType | None = DEFAULT_TERRAIN,
        orthogonal_cost: float = 1.0,
        diagonal_cost: float = math.inf,
    ) -> dict[Coord, int]:
        return add_square_grid(self.store, bounds, terrain, orthogonal_cost, diagonal_cost)

    def add_hexagonal_grid(
        self,
        bounds: Rect | tuple[int, int, int, int],
        terrain: TerrainType | None = DEFAULT_TERRAIN,
        weight: float = 1.0,
    ) -> dict[Coord, int]:
        return add_hexagonal_grid(self.store, bounds, terrain, weight)

    # ---------------- recalculation -----------------------

    def recalculate(
        self, origins: int | Iterable[int], options: OptionsLike = None, **overrides
    ) -> Results:
        """Solve from `origins` and replace the stored results.

        Options may be a `RecalculateOptions`, a plain dict, keyword arguments
        or a mix (keywords win). Raises `InvalidParameter` and keeps the old
        results when they do not validate.
        """
        self.results = self.engine.recalculate(self.store, origins, options, **overrides)
        return self.results

    # ---------------- queries -----------------------------

    def cost_at(self, point_id: int) -> float:
        return self.results.cost_at(point_id)

    def direction_at(self, point_id: int) -> int | None:
        return self.results.direction_at(point_id)

    def costs_at(self, point_ids: Iterable[int]) -> np.ndarray:
        return self.results.costs_at(point_ids)

    def directions_at(self, point_ids: Iterable[int], no_path: int = -1) -> np.ndarray:
        return self.results.directions_at(point_ids, no_path)

    def cost_map(self) -> dict[int, float]:
        return self.results.cost_map()

    def direction_map(self) -> dict[int, int]:
        return self.results.direction_map()

    def points_with_cost_between(self, min_cost: float, max_cost: float) -> list[int]:
        return self.results.points_with_cost_between(min_cost, max_cost)

    def shortest_path_from(self, point_id: int) -> list[int]:
        return self.results.shortest_path_from(point_id)
