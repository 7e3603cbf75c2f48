# dijkstra_map/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass, field

from dijkstra_map.app.dijkstra_map import DijkstraMap
from dijkstra_map.config.models import MapModel
from dijkstra_map.grids.generators import Coord
from dijkstra_map.io.search_logging import SearchLogging  # JSON logs
from dijkstra_map.runtime.registries import make_grid
from dijkstra_map.search.hooks import NoopHooks


@dataclass
class BuiltMap:
    dmap: DijkstraMap
    # one coord -> id table per entry of cfg.grids, same order
    grids: list[dict[Coord, int]] = field(default_factory=list)


def build_map(cfg: MapModel | Mapping, *, use_logging: bool = True) -> BuiltMap:
    # 0) Validate config
    model = cfg if isinstance(cfg, MapModel) else MapModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        SearchLogging(map_name=model.name, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )
    dmap = DijkstraMap(hooks=hooks)

    # 2) Explicit points first so grids allocate around them
    for p in model.points:
        dmap.add_point(p.id, p.terrain)

    # 3) Grids
    grids = [make_grid(g, store=dmap.store) for g in model.grids]

    # 4) Connections may reference explicit and grid points alike
    for c in model.connections:
        dmap.connect_points(c.source, c.target, c.weight, c.bidirectional)

    for pid in model.disabled:
        dmap.disable_point(pid)

    return BuiltMap(dmap, grids)
