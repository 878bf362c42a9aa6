"""Tests for the uniform-grid spatial index."""

import itertools
import math

from royale.entities.actor import Actor
from royale.math_utils import Vector2
from royale.roster import RosterEntry
from royale.spatial.grid import SpatialGrid, cell_size_for
from royale.util.rng import MinStdRandom


def _actor(i, x, y):
    entry = RosterEntry(f"a{i:04d}", f"A{i}", 10.0, 0.0, 0.0)
    return Actor(entry, i, Vector2(x, y), Vector2(0.0, 0.0))


def _pair_key(a, b):
    return tuple(sorted((a.actor_id, b.actor_id)))


class TestCellSize:
    def test_four_base_radii_by_default(self):
        assert cell_size_for(10.0, 10.0) == 40.0

    def test_grows_with_endgame_radius(self):
        assert cell_size_for(10.0, 30.0) == 60.0

    def test_never_below_one(self):
        assert cell_size_for(0.0, 0.0) == 1.0


class TestCandidatePairs:
    def test_every_close_pair_appears_exactly_once(self):
        rng = MinStdRandom(5)
        actors = [_actor(i, rng.next() * 600, rng.next() * 400) for i in range(300)]
        cell = 30.0
        grid = SpatialGrid(600, 400, cell)
        grid.rebuild(actors, cell)

        pairs = [_pair_key(a, b) for a, b in grid.candidate_pairs()]
        assert len(pairs) == len(set(pairs))

        candidate = set(pairs)
        for a, b in itertools.combinations(actors, 2):
            if math.hypot(a.pos.x - b.pos.x, a.pos.y - b.pos.y) < cell:
                assert _pair_key(a, b) in candidate

    def test_dead_actors_are_not_indexed(self):
        a, b, c = _actor(0, 10, 10), _actor(1, 12, 10), _actor(2, 14, 10)
        b.eliminate(1.0)
        grid = SpatialGrid(100, 100, 50)
        grid.rebuild([a, b, c], 50)

        assert len(grid) == 2
        assert [_pair_key(x, y) for x, y in grid.candidate_pairs()] == [("a0000", "a0002")]

    def test_far_pairs_are_skipped(self):
        grid = SpatialGrid(1000, 1000, 10)
        grid.rebuild([_actor(0, 5, 5), _actor(1, 995, 995)], 10)
        assert list(grid.candidate_pairs()) == []

    def test_order_is_deterministic(self):
        def build():
            rng = MinStdRandom(8)
            actors = [_actor(i, rng.next() * 200, rng.next() * 200) for i in range(80)]
            grid = SpatialGrid(200, 200, 25)
            grid.rebuild(actors, 25)
            return [_pair_key(a, b) for a, b in grid.candidate_pairs()]

        assert build() == build()

    def test_positions_outside_arena_are_clamped_to_edge_cells(self):
        grid = SpatialGrid(100, 100, 10)
        grid.rebuild([_actor(0, -5, 150), _actor(1, 1, 99)], 10)
        assert grid.actor_cells["a0000"] == (0, 9)
        assert len(list(grid.candidate_pairs())) == 1


def test_rebuild_resizes_grid():
    grid = SpatialGrid(100, 100, 10)
    assert (grid.cols, grid.rows) == (10, 10)
    grid.rebuild([], 30)
    assert grid.cell_size == 30
    assert (grid.cols, grid.rows) == (4, 4)


def test_neighbors_cover_adjacent_cells():
    center = _actor(0, 55, 55)
    near = _actor(1, 45, 65)
    far = _actor(2, 95, 95)
    grid = SpatialGrid(100, 100, 20)
    grid.rebuild([center, near, far], 20)
    assert grid.neighbors(center) == [near]
