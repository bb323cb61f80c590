from __future__ import annotations

from collections import deque
from typing import List, Set

from game_types import PASSAGE, UNREACHABLE, Cell, DistanceMap
from models import Grid

NEIGHBOR_STEPS = ((1, 0), (-1, 0), (0, 1), (0, -1))

# Used when a grid has no passage at all near a target.
DEFAULT_CELL: Cell = (1, 1)


def is_walkable(grid: Grid, x: int, y: int) -> bool:
    return grid.is_passage(x, y)


def passage_cells(grid: Grid) -> List[Cell]:
    """All passage cells in row-major order."""
    return [
        (x, y)
        for y in range(grid.height)
        for x in range(grid.width)
        if grid.cells[y][x] == PASSAGE
    ]


def bfs_distances(grid: Grid, source: Cell) -> DistanceMap:
    """Shortest passage-step distance from source to every cell.

    Cells not connected to source hold UNREACHABLE. A source that is not a
    passage gets distance 0 and nothing propagates from it.
    """
    dist: DistanceMap = [[UNREACHABLE] * grid.width for _ in range(grid.height)]
    sx, sy = source
    if not grid.in_bounds(sx, sy):
        return dist
    dist[sy][sx] = 0
    if not is_walkable(grid, sx, sy):
        return dist

    q = deque([source])
    while q:
        x, y = q.popleft()
        for dx, dy in NEIGHBOR_STEPS:
            nx, ny = x + dx, y + dy
            if not is_walkable(grid, nx, ny):
                continue
            if dist[ny][nx] != UNREACHABLE:
                continue
            dist[ny][nx] = dist[y][x] + 1
            q.append((nx, ny))
    return dist


def distance_at(dist: DistanceMap, cell: Cell) -> int:
    x, y = cell
    if 0 <= y < len(dist) and 0 <= x < len(dist[y]):
        return dist[y][x]
    return UNREACHABLE


def reachable_count(grid: Grid, source: Cell) -> int:
    """Number of passage cells reachable from source (source included)."""
    if not is_walkable(grid, *source):
        return 0
    seen: Set[Cell] = {source}
    q = deque([source])
    while q:
        x, y = q.popleft()
        for dx, dy in NEIGHBOR_STEPS:
            nxt = (x + dx, y + dy)
            if nxt in seen or not is_walkable(grid, *nxt):
                continue
            seen.add(nxt)
            q.append(nxt)
    return len(seen)


def nearest_passage(grid: Grid, target: Cell) -> Cell:
    """Snap target to the closest passage by BFS over all in-bounds cells."""
    q = deque([target])
    seen: Set[Cell] = {target}

    while q:
        x, y = q.popleft()
        if is_walkable(grid, x, y):
            return (x, y)
        for dx, dy in NEIGHBOR_STEPS:
            nx, ny = x + dx, y + dy
            if not grid.in_bounds(nx, ny):
                continue
            if (nx, ny) in seen:
                continue
            seen.add((nx, ny))
            q.append((nx, ny))
    return DEFAULT_CELL
