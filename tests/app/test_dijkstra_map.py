import copy
import logging
import math

import pytest

from dijkstra_map.app.dijkstra_map import DijkstraMap
from dijkstra_map.config.models import RecalculateOptions
from dijkstra_map.domain.entities.point import NO_PATH
from dijkstra_map.domain.errors import IdCollision, InvalidParameter, UnknownPoint
from dijkstra_map.io.search_logging import SearchLogging

# ---------- Fixtures


@pytest.fixture
def dmap() -> DijkstraMap:
    m = DijkstraMap()
    for pid in range(3):
        m.add_point(pid)
    m.connect_points(0, 1)
    return m


# ---------- Facade round trip


def test_recalculate_then_query(dmap: DijkstraMap):
    dmap.recalculate(0)
    assert dmap.cost_at(0) == 0.0 and dmap.cost_at(1) == 1.0
    assert math.isinf(dmap.cost_at(2))
    assert dmap.direction_at(1) == 0 and dmap.direction_at(2) is NO_PATH
    assert dmap.costs_at([0, 1, 2]).tolist() == [0.0, 1.0, math.inf]
    assert dmap.directions_at([0, 1, 2]).tolist() == [0, 0, -1]
    assert dmap.cost_map() == {0: 0.0, 1: 1.0}
    assert dmap.direction_map() == {0: 0, 1: 0}
    assert dmap.points_with_cost_between(0.5, 1.5) == [1]
    assert dmap.shortest_path_from(1) == [0]


def test_options_as_model_dict_or_keywords(dmap: DijkstraMap):
    dmap.connect_points(1, 2, 5.0)
    a = dmap.recalculate(0, RecalculateOptions(maximum_cost=2.0))
    b = dmap.recalculate(0, {"maximum_cost": 2.0})
    c = dmap.recalculate(0, maximum_cost=2.0)
    d = dmap.recalculate(0, RecalculateOptions(maximum_cost=100.0), maximum_cost=2.0)
    assert a == b == c == d
    assert 2 not in a


def test_failed_recalculation_keeps_previous_results(dmap: DijkstraMap):
    before = dmap.recalculate(0)
    with pytest.raises(InvalidParameter):
        dmap.recalculate(1, {"not_an_option": True})
    with pytest.raises(InvalidParameter):
        dmap.recalculate("zero")
    assert dmap.results is before
    assert dmap.direction_at(1) == 0


def test_graph_edits_do_not_touch_results(dmap: DijkstraMap):
    dmap.recalculate(0)
    dmap.remove_point(1)
    assert dmap.cost_at(1) == 1.0
    dmap.recalculate(0)
    assert math.isinf(dmap.cost_at(1))


def test_mutation_errors_propagate(dmap: DijkstraMap):
    with pytest.raises(IdCollision):
        dmap.add_point(0)
    with pytest.raises(UnknownPoint):
        dmap.connect_points(0, 9)
    with pytest.raises(UnknownPoint):
        dmap.remove_connection(9, 0)
    with pytest.raises(UnknownPoint):
        dmap.set_terrain_for_point(9, 1)


def test_terrain_and_disable_accessors(dmap: DijkstraMap):
    dmap.set_terrain_for_point(2, 4)
    assert dmap.get_terrain_for_point(2) == 4
    dmap.disable_point(1)
    assert dmap.is_point_disabled(1)
    dmap.recalculate(0)
    assert dmap.cost_map() == {0: 0.0}
    dmap.enable_point(1)
    dmap.recalculate(0)
    assert dmap.cost_map() == {0: 0.0, 1: 1.0}


def test_clear_drops_graph_and_results(dmap: DijkstraMap):
    dmap.recalculate(0)
    dmap.clear()
    assert not dmap.has_point(0)
    assert dmap.cost_map() == {}
    assert dmap.get_available_id() == 0


# ---------- Copies


def test_duplicate_is_independent(dmap: DijkstraMap):
    dmap.recalculate(0)
    dup = dmap.duplicate()
    dmap.add_point(4)
    dmap.remove_connection(0, 1)
    dmap.recalculate(2)
    assert not dup.has_point(4)
    assert dup.has_connection(0, 1)
    assert dup.cost_at(1) == 1.0
    dup.recalculate(1)
    assert dmap.cost_map() == {2: 0.0}


def test_deepcopy_and_copy_protocols(dmap: DijkstraMap):
    dmap.recalculate(0)
    for dup in (copy.copy(dmap), copy.deepcopy(dmap)):
        dup.disable_point(0)
        assert not dmap.is_point_disabled(0)
        assert dup.cost_map() == dmap.cost_map()


def test_duplicate_graph_from(dmap: DijkstraMap):
    other = DijkstraMap()
    other.add_point(10)
    other.duplicate_graph_from(dmap)
    assert not other.has_point(10)
    assert other.has_connection(0, 1)
    dmap.add_point(3)
    assert not other.has_point(3)
    with pytest.raises(TypeError):
        other.duplicate_graph_from("not a map")


# ---------- Grids through the facade


def test_square_grid_path():
    m = DijkstraMap()
    ids = m.add_square_grid((0, 0, 4, 3), diagonal_cost=math.sqrt(2))
    m.recalculate(ids[(3, 2)])
    assert abs(m.cost_at(ids[(0, 0)]) - (2 * math.sqrt(2) + 1)) < 1e-9
    path = m.shortest_path_from(ids[(0, 0)])
    assert path[-1] == ids[(3, 2)]
    assert len(path) == 3


def test_hex_grid_distances():
    m = DijkstraMap()
    ids = m.add_hexagonal_grid((0, 0, 5, 5), weight=1.0)
    m.recalculate(ids[(2, 2)])
    assert m.cost_at(ids[(1, 1)]) == 1.0  # even row: up-left is adjacent
    assert m.cost_at(ids[(3, 1)]) == 2.0
    assert m.points_with_cost_between(1.0, 1.0) == sorted(
        ids[c] for c in ((1, 1), (2, 1), (1, 2), (3, 2), (1, 3), (2, 3))
    )


def test_duplicate_has_its_own_hook_state(dmap: DijkstraMap):
    logger = logging.getLogger("dijkstra_map.dup_test")
    logger.propagate = False
    logger.addHandler(logging.NullHandler())
    dmap.hooks = SearchLogging(logger=logger)
    dmap.recalculate(0)

    for dup in (dmap.duplicate(), copy.copy(dmap), copy.deepcopy(dmap)):
        assert dup.hooks is not dmap.hooks
        dup.recalculate(1)
        assert dup.hooks.runs == 2
        assert dmap.hooks.runs == 1


def test_duplicate_graph_from_keeps_own_hooks(dmap: DijkstraMap):
    dmap.hooks = SearchLogging(logger=logging.getLogger("dijkstra_map.dup_test"))
    other = DijkstraMap(hooks=SearchLogging(logger=logging.getLogger("dijkstra_map.dup_test")))
    other.duplicate_graph_from(dmap)
    other.recalculate(0)
    assert other.hooks is not dmap.hooks
    assert (other.hooks.runs, dmap.hooks.runs) == (1, 0)
