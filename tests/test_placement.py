import random

from game_types import PASSAGE, UNREACHABLE
from maze_generator import generate
from models import Grid, PlacementConfig
from placement import KeyCellPlanner, MonsterPlacer, place_key_cells
from reachability import bfs_distances, distance_at, passage_cells


def test_default_maze_candy_far_from_both_or_fallback():
    for seed in (1, 2, 3, 4, 5, 6):
        grid = generate(41, 29, random.Random(seed), rewall_attempts=0)
        keys = place_key_cells(grid)
        for cell in (keys.start, keys.exit, keys.candy):
            assert grid.is_passage(*cell)
        if keys.candy_fallback:
            continue
        d_start = distance_at(bfs_distances(grid, keys.start), keys.candy)
        d_exit_initial = distance_at(bfs_distances(grid, (39, 27)), keys.candy)
        assert d_start >= 40, f"seed {seed}"
        assert d_exit_initial >= 40, f"seed {seed}"


def test_start_and_exit_anchor_bottom_corners():
    grid = generate(41, 29, random.Random(17), rewall_attempts=0)
    keys = place_key_cells(grid)
    assert keys.start == (1, 27)
    if not keys.exit_relocated:
        assert keys.exit == (39, 27)


def test_exit_far_from_candy_or_best_relocation():
    for seed in (3, 9, 27):
        grid = generate(41, 29, random.Random(seed), rewall_attempts=0)
        keys = place_key_cells(grid)
        d_candy = bfs_distances(grid, keys.candy)
        if not keys.exit_relocated:
            assert distance_at(d_candy, keys.exit) >= 60
            continue

        def score(c):
            return distance_at(d_candy, c) + (c[0] / grid.width + c[1] / grid.height) * 15

        best = max(score(c) for c in passage_cells(grid) if distance_at(d_candy, c) != UNREACHABLE)
        assert score(keys.exit) == best


def test_small_maze_uses_candy_fallback(serpentine_grid):
    keys = place_key_cells(serpentine_grid)
    assert keys.start == (1, 7)
    assert keys.candy_fallback
    # nearest passage to the 30% anchor (2, 2)
    assert keys.candy == (2, 3)
    # exit relocation runs but the bottom-right corner still scores best
    assert keys.exit_relocated
    assert keys.exit == (7, 7)


def test_candy_objective_prefers_far_from_both(serpentine_grid):
    cfg = PlacementConfig(min_candy_distance=0)
    keys = KeyCellPlanner(cfg).place(serpentine_grid)
    assert not keys.candy_fallback
    # (1, 1) is 30 steps from start and 24 from exit: the best min-distance
    assert keys.candy == (1, 1)


def test_placement_never_raises_on_degenerate_grid():
    keys = place_key_cells(Grid.filled(3, 3))
    assert keys.start == keys.exit == keys.candy == (1, 1)
    assert keys.candy_fallback
    assert not keys.exit_relocated


def test_monsters_avoid_key_cells():
    grid = generate(41, 29, random.Random(2), rewall_attempts=0)
    keys = place_key_cells(grid)
    glyphs = ("a", "b", "c")
    monsters = MonsterPlacer(random.Random(2)).place(grid, keys, 6, glyphs)
    assert len(monsters) == 6
    assert [m.glyph for m in monsters] == ["a", "b", "c", "a", "b", "c"]
    for m in monsters:
        assert grid.is_passage(*m.cell)
        assert m.cell not in (keys.start, keys.exit, keys.candy)


def test_no_monsters_without_free_cells():
    keys = place_key_cells(Grid.filled(3, 3))
    assert MonsterPlacer(random.Random(0)).place(Grid.filled(3, 3), keys, 6, ("x",)) == []


def test_fallback_anchor_at_far_edge_stays_in_grid():
    grid = Grid.filled(9, 9)
    grid.set(7, 7, PASSAGE)
    cfg = PlacementConfig(min_candy_distance=99, candy_fallback_anchor=(1.0, 1.0))
    planner = KeyCellPlanner(cfg)
    assert planner.candy_fallback_anchor(grid) == (8, 8)
    keys = planner.place(grid)
    assert keys.candy_fallback
    assert keys.candy == (7, 7)
    assert grid.is_passage(*keys.candy)


def test_exit_relocation_takes_true_maximizer(serpentine_grid):
    # Candy falls back to (2, 3). Scanning row-major and only considering
    # cells whose raw distance beats the best combined score would stop at
    # (1, 7) with 30.33; (7, 7) scores 34.33 and must win.
    keys = place_key_cells(serpentine_grid)
    assert keys.candy == (2, 3)
    assert keys.exit == (7, 7)
    assert keys.exit != (1, 7)
