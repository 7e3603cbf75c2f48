# dijkstra_map/domain/terrain.py
import math
from collections.abc import Mapping

from dijkstra_map.domain.entities.point import DEFAULT_TERRAIN, TerrainType


class WeightResolver:
    """
    Per-call terrain multipliers.
    Default terrain is 1.0 whatever the table says; a terrain missing from the
    table is impassable; a listed terrain uses its value, zero included.
    """

    def __init__(self, terrain_weights: Mapping[int, float] | None = None):
        self._table = {
            t: float(w) for t, w in (terrain_weights or {}).items() if t is not DEFAULT_TERRAIN
        }

    def __len__(self) -> int:
        return len(self._table)

    def multiplier(self, terrain: TerrainType) -> float:
        if terrain is DEFAULT_TERRAIN:
            return 1.0
        return self._table.get(terrain, math.inf)

    def edge_cost(self, weight: float, entered: TerrainType) -> float:
        """Weight scaled by the terrain of the point the search steps into.

        Returns ``inf`` for an impassable step (infinite or NaN multiplier).
        """
        m = self.multiplier(entered)
        if math.isnan(m) or math.isinf(m):
            return math.inf
        c = weight * m
        return math.inf if math.isnan(c) else c
