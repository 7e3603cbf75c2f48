import math

from dijkstra_map.domain.entities.point import DEFAULT_TERRAIN, Rect, TerrainType, as_terrain
from dijkstra_map.domain.errors import InvalidParameter
from dijkstra_map.domain.store import PointStore

Coord = tuple[int, int]

ORTHOGONAL: tuple[Coord, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONAL: tuple[Coord, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))

# Pointy-top hexes with odd rows shifted right by half a cell:
#    / \ / \
#   |0,0|1,0|
#    \ / \ / \
#     |0,1|1,1|
#    / \ / \ /
HEX_EVEN_ROW: tuple[Coord, ...] = ((1, 0), (-1, 0), (-1, -1), (0, -1), (-1, 1), (0, 1))
HEX_ODD_ROW: tuple[Coord, ...] = ((1, 0), (-1, 0), (0, -1), (1, -1), (0, 1), (1, 1))


def _usable(cost: float) -> bool:
    return not (math.isnan(cost) or math.isinf(cost))


def _allocate(store: PointStore, rect: Rect, terrain: TerrainType) -> dict[Coord, int]:
    if rect.width < 0 or rect.height < 0:
        raise InvalidParameter(f"grid bounds must have non-negative size, got {rect}")
    terrain = as_terrain(terrain)
    ids: dict[Coord, int] = {}
    next_id = None
    for cell in rect.cells():
        # ids below the last one handed out are all taken already
        next_id = store.get_available_id(above=next_id)
        store.add_point(next_id, terrain)
        ids[cell] = next_id
        next_id += 1
    return ids


def _link(store: PointStore, ids: dict[Coord, int], offsets, weight: float, parity=None) -> None:
    for (x, y), pid in ids.items():
        deltas = offsets if parity is None else parity[y % 2]
        for dx, dy in deltas:
            other = ids.get((x + dx, y + dy))
            # each unordered pair once; both directions in one call
            if other is not None and other > pid:
                store.connect_points(pid, other, weight, bidirectional=True)


def add_square_grid(
    store: PointStore,
    bounds: Rect | tuple[int, int, int, int],
    terrain: TerrainType | None = DEFAULT_TERRAIN,
    orthogonal_cost: float = 1.0,
    diagonal_cost: float = math.inf,
) -> dict[Coord, int]:
    """Fill `bounds` with fresh points joined to their 4 or 8 neighbours.

    An infinite or NaN cost leaves that class of connections out.
    Returns cell coordinate -> point id.
    """
    for name, c in (("orthogonal_cost", orthogonal_cost), ("diagonal_cost", diagonal_cost)):
        if c < 0:
            raise InvalidParameter(f"{name} must be >= 0, got {c}")
    ids = _allocate(store, Rect.of(bounds), terrain)
    if _usable(orthogonal_cost):
        _link(store, ids, ORTHOGONAL, orthogonal_cost)
    if _usable(diagonal_cost):
        _link(store, ids, DIAGONAL, diagonal_cost)
    return ids


def add_hexagonal_grid(
    store: PointStore,
    bounds: Rect | tuple[int, int, int, int],
    terrain: TerrainType | None = DEFAULT_TERRAIN,
    weight: float = 1.0,
) -> dict[Coord, int]:
    """Pointy-top hex grid; row parity is taken on the absolute y coordinate."""
    if weight < 0:
        raise InvalidParameter(f"weight must be >= 0, got {weight}")
    ids = _allocate(store, Rect.of(bounds), terrain)
    if _usable(weight):
        _link(store, ids, None, weight, parity=(HEX_EVEN_ROW, HEX_ODD_ROW))
    return ids
