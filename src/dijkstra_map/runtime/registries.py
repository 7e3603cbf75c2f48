# runtime/registries.py
from collections.abc import Callable

from dijkstra_map.config.models import GridUnion, HexagonalGridModel, SquareGridModel
from dijkstra_map.domain.store import PointStore
from dijkstra_map.grids.generators import Coord, add_hexagonal_grid, add_square_grid

GridFactory = Callable[[GridUnion, PointStore], dict[Coord, int]]

_grid_registry: dict[str, GridFactory] = {}


def register_grid(kind: str):
    def deco(fn: GridFactory):
        _grid_registry[kind] = fn
        return fn

    return deco


def make_grid(cfg: GridUnion, *, store: PointStore) -> dict[Coord, int]:
    try:
        factory = _grid_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown grid kind {cfg.kind!r}") from None
    return factory(cfg, store)


@register_grid("square")
def _make_square(cfg: SquareGridModel, store: PointStore):
    return add_square_grid(
        store,
        cfg.rect,
        terrain=cfg.terrain,
        orthogonal_cost=cfg.orthogonal_cost,
        diagonal_cost=cfg.diagonal_cost,
    )


@register_grid("hexagonal")
def _make_hexagonal(cfg: HexagonalGridModel, store: PointStore):
    return add_hexagonal_grid(store, cfg.rect, terrain=cfg.terrain, weight=cfg.weight)
