import random

from game_types import UNREACHABLE
from maze_generator import generate
from models import Grid
from reachability import (
    DEFAULT_CELL,
    bfs_distances,
    distance_at,
    nearest_passage,
    passage_cells,
    reachable_count,
)


def test_serpentine_distances(serpentine_grid):
    dist = bfs_distances(serpentine_grid, (1, 1))
    assert distance_at(dist, (1, 1)) == 0
    assert distance_at(dist, (7, 1)) == 6
    assert distance_at(dist, (1, 3)) == 14
    assert distance_at(dist, (1, 7)) == 30


def test_walls_are_unreachable(serpentine_grid):
    dist = bfs_distances(serpentine_grid, (1, 1))
    assert dist[0][0] == UNREACHABLE
    assert dist[2][1] == UNREACHABLE
    assert distance_at(dist, (50, 50)) == UNREACHABLE


def test_wall_source_does_not_propagate(serpentine_grid):
    dist = bfs_distances(serpentine_grid, (1, 2))
    assert dist[2][1] == 0
    marked = [(x, y) for y, row in enumerate(dist) for x, d in enumerate(row) if d != UNREACHABLE]
    assert marked == [(1, 2)]


def test_distance_symmetry():
    grid = generate(41, 29, random.Random(21), rewall_attempts=0)
    cells = passage_cells(grid)
    pick = random.Random(0)
    for _ in range(25):
        a = pick.choice(cells)
        b = pick.choice(cells)
        assert distance_at(bfs_distances(grid, a), b) == distance_at(bfs_distances(grid, b), a)


def test_every_passage_has_a_distance():
    grid = generate(31, 21, random.Random(4), rewall_attempts=0)
    dist = bfs_distances(grid, (1, 1))
    for c in passage_cells(grid):
        assert distance_at(dist, c) >= 0


def test_nearest_passage_returns_walkable_target(serpentine_grid):
    assert nearest_passage(serpentine_grid, (1, 7)) == (1, 7)


def test_nearest_passage_snaps_from_wall(serpentine_grid):
    assert nearest_passage(serpentine_grid, (0, 0)) == (1, 1)
    assert nearest_passage(serpentine_grid, (2, 2)) == (2, 3)


def test_nearest_passage_falls_back_on_solid_grid():
    solid = Grid.filled(7, 7)
    assert nearest_passage(solid, (3, 3)) == DEFAULT_CELL
    assert nearest_passage(solid, (-4, -4)) == DEFAULT_CELL


def test_reachable_count(serpentine_grid, open_grid):
    assert reachable_count(serpentine_grid, (1, 1)) == 31
    assert reachable_count(open_grid, (2, 2)) == 9
    assert reachable_count(open_grid, (0, 0)) == 0
