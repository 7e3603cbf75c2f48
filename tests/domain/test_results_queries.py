# tests/domain/test_results_queries.py
import math

import numpy as np
import pytest

from dijkstra_map.domain.entities.point import NO_PATH, PointInfo
from dijkstra_map.domain.results import Results


@pytest.fixture
def results() -> Results:
    # 0 is the origin; 1 -> 0; 2 -> 1 -> 0; 5 is another origin
    return Results(
        {
            0: PointInfo(0.0, 0),
            1: PointInfo(1.0, 0),
            2: PointInfo(2.0, 1),
            5: PointInfo(0.0, 5),
            -3: PointInfo(1.0, 5),
        }
    )


def test_single_point_lookups(results: Results):
    assert results.cost_at(2) == 2.0
    assert results.direction_at(2) == 1
    assert results.direction_at(0) == 0  # origin points at itself
    assert math.isinf(results.cost_at(42))
    assert results.direction_at(42) is NO_PATH
    assert results.is_reached(-3) and not results.is_reached(42)


def test_batch_lookups(results: Results):
    costs = results.costs_at([0, 2, 42])
    assert costs.dtype == np.float64
    assert costs[0] == 0.0 and costs[1] == 2.0 and np.isinf(costs[2])
    dirs = results.directions_at([2, 42, -3], no_path=-100)
    assert dirs.dtype == np.int64
    assert dirs.tolist() == [1, -100, 5]
    assert results.directions_at([]).size == 0


def test_maps_only_hold_reached_points(results: Results):
    assert results.cost_map() == {0: 0.0, 1: 1.0, 2: 2.0, 5: 0.0, -3: 1.0}
    assert results.direction_map() == {0: 0, 1: 0, 2: 1, 5: 5, -3: 5}


def test_points_with_cost_between_sorted_with_id_tiebreak(results: Results):
    assert results.points_with_cost_between(0.0, 1.0) == [0, 5, -3, 1]
    assert results.points_with_cost_between(0.5, 1.5) == [-3, 1]
    assert results.points_with_cost_between(3.0, 9.0) == []


def test_shortest_path(results: Results):
    assert results.shortest_path_from(2) == [1, 0]
    assert results.shortest_path_from(-3) == [5]
    assert results.shortest_path_from(0) == []
    assert results.shortest_path_from(42) == []


def test_shortest_path_is_bounded_on_malformed_state():
    looped = Results({1: PointInfo(1.0, 2), 2: PointInfo(1.0, 1)})
    assert looped.shortest_path_from(1) == []
    dangling = Results({1: PointInfo(1.0, 7)})
    assert dangling.shortest_path_from(1) == []


def test_empty_results():
    r = Results.empty()
    assert len(r) == 0
    assert r.cost_map() == {}
    assert r.shortest_path_from(0) == []
