# search/engine.py

import math
import time
from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import ValidationError

from dijkstra_map.config.models import RecalculateOptions
from dijkstra_map.domain.entities.point import DEFAULT_TERRAIN, PointInfo, is_point_id
from dijkstra_map.domain.errors import InvalidParameter
from dijkstra_map.domain.results import Results
from dijkstra_map.domain.store import PointStore
from dijkstra_map.domain.terrain import WeightResolver
from dijkstra_map.search.frontier import Frontier
from dijkstra_map.search.hooks import NoopHooks, SearchHooks

StopReason = Literal["exhausted", "maximum_cost", "termination"]
OptionsLike = RecalculateOptions | Mapping[str, Any] | None


class SearchMode(Enum):
    # origins are goals; directions point at the next step toward them
    INPUT_IS_DESTINATION = "input_is_destination"
    # origins are starts; directions point back at the previous step
    INPUT_IS_ORIGIN = "input_is_origin"

    @classmethod
    def of(cls, opts: RecalculateOptions) -> "SearchMode":
        return cls.INPUT_IS_DESTINATION if opts.input_is_destination else cls.INPUT_IS_ORIGIN


EdgeSelector = Callable[[PointStore, int], Mapping[int, float]]

# Walking toward destinations means following connections backwards.
_EDGE_SELECTORS: dict[SearchMode, EdgeSelector] = {
    SearchMode.INPUT_IS_DESTINATION: PointStore.incoming,
    SearchMode.INPUT_IS_ORIGIN: PointStore.outgoing,
}


def parse_options(options: OptionsLike = None, **overrides) -> RecalculateOptions:
    """Validate once at the boundary; the search loop only sees the model."""
    if options is None:
        options = {}
    elif isinstance(options, RecalculateOptions):
        if not overrides:
            return options
        options = options.model_dump()
    elif not isinstance(options, Mapping):
        raise InvalidParameter(f"options must be a mapping, got {type(options).__name__}")
    try:
        return RecalculateOptions.model_validate({**options, **overrides})
    except ValidationError as exc:
        raise InvalidParameter(str(exc)) from exc


def parse_origins(origins: int | Iterable[int]) -> list[int]:
    if is_point_id(origins):
        return [int(origins)]
    if isinstance(origins, (str, bytes)) or not isinstance(origins, Iterable):
        raise InvalidParameter(f"origins must be an int or iterable of ints, got {origins!r}")
    out = list(origins)
    bad = [o for o in out if not is_point_id(o)]
    if bad:
        raise InvalidParameter(f"origins must be ints, got {bad!r}")
    return [int(o) for o in out]


class RecalculationEngine:
    """Multi-source Dijkstra over a PointStore. Produces a fresh Results per call."""

    def __init__(self, hooks: SearchHooks | None = None):
        self.hooks = hooks or NoopHooks()

    def recalculate(
        self,
        store: PointStore,
        origins: int | Iterable[int],
        options: OptionsLike = None,
        **overrides,
    ) -> Results:
        try:
            origin_ids = parse_origins(origins)
            opts = parse_options(options, **overrides)
        except InvalidParameter as exc:
            self.hooks.rejected(error=str(exc))
            raise

        mode = SearchMode.of(opts)
        t0 = time.perf_counter()
        self.hooks.recalculate_start(
            origins=len(origin_ids),
            mode=mode.value,
            maximum_cost=opts.maximum_cost,
            termination_points=len(opts.termination_points),
        )

        resolver = WeightResolver(opts.terrain_weights)
        if not len(resolver) and any(
            p.terrain is not DEFAULT_TERRAIN for p in store.points.values()
        ):
            self.hooks.warning("no_terrain_weights", detail="non-default terrains are impassable")

        settled, frontier, reason = self._solve(
            store, origin_ids, opts, resolver, _EDGE_SELECTORS[mode]
        )

        self.hooks.recalculate_end(
            settled=len(settled),
            pushed=frontier.pushed,
            reason=reason,
            wall_ms=(time.perf_counter() - t0) * 1000,
        )
        return Results(settled)

    def _solve(
        self,
        store: PointStore,
        origin_ids: list[int],
        opts: RecalculateOptions,
        resolver: WeightResolver,
        edges: EdgeSelector,
    ) -> tuple[dict[int, PointInfo], Frontier, StopReason]:
        best: dict[int, float] = {}
        via: dict[int, int] = {}
        settled: dict[int, PointInfo] = {}
        frontier = Frontier()

        for i, o in enumerate(origin_ids):
            if not store.is_enabled(o):
                continue  # unknown or disabled origins are skipped
            c = opts.initial_cost(i)
            if c < best.get(o, math.inf):
                best[o], via[o] = c, o
                frontier.push(c, o)

        remaining = {t for t in opts.termination_points if store.is_enabled(t)}
        reason: StopReason = "exhausted"

        while frontier:
            cost, u = frontier.pop()
            if u in settled:
                continue  # stale entry
            if cost > opts.maximum_cost:
                reason = "maximum_cost"
                break
            settled[u] = PointInfo(cost, via[u])
            self.hooks.settle(u, cost=cost, direction=via[u])

            if u in remaining:
                remaining.discard(u)
                if not remaining:
                    reason = "termination"
                    break

            for v, weight in edges(store, u).items():
                if v in settled:
                    continue
                point = store.points[v]
                if not point.enabled:
                    continue
                step = resolver.edge_cost(weight, point.terrain)
                if math.isinf(step):
                    continue
                nc = cost + step
                if nc < best.get(v, math.inf):
                    best[v], via[v] = nc, u
                    frontier.push(nc, v)

        return settled, frontier, reason
