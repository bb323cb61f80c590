"""
maze_generator.py

Perfect maze generation on an odd-dimensioned lattice.

- Walls everywhere, then a randomized depth-first backtracker carves passages
  between odd coordinates (spanning tree => every passage reachable).
- A bounded "soft re-walling" pass closes a few open junctions to make the
  maze feel less open. It is not connectivity-checked unless
  verify_connectivity is enabled.
- The outer border is always wall.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional

from game_types import PASSAGE, WALL, Cell
from models import Grid, MazeConfig
from reachability import passage_cells, reachable_count

logger = logging.getLogger(__name__)

# Two-step lattice moves; shuffled per visit.
CARVE_STEPS = [(2, 0), (-2, 0), (0, 2), (0, -2)]


def odd_dimension(v: int) -> int:
    """Bump an even size to the next odd value, never below 3."""
    v = max(3, int(v))
    return v + 1 if v % 2 == 0 else v


class MazeGenerator:
    def __init__(
        self,
        rng: random.Random,
        rewall_attempts: int = 140,
        rewall_chance: float = 0.25,
        verify_connectivity: bool = False,
    ) -> None:
        self.rng = rng
        self.rewall_attempts = rewall_attempts
        self.rewall_chance = rewall_chance
        self.verify_connectivity = verify_connectivity
        self.carve_log: List[Cell] = []
        self.rewalled: List[Cell] = []

    @classmethod
    def from_config(cls, cfg: MazeConfig, rng: random.Random) -> "MazeGenerator":
        return cls(
            rng,
            rewall_attempts=cfg.rewall_attempts,
            rewall_chance=cfg.rewall_chance,
            verify_connectivity=cfg.verify_connectivity,
        )

    def generate(self, width: int, height: int) -> Grid:
        w, h = odd_dimension(width), odd_dimension(height)
        grid = Grid.filled(w, h, WALL)
        self.carve_log = []
        self.rewalled = []

        self._carve_passages(grid)
        self._soft_rewall(grid)
        grid.add_border()

        logger.debug(
            "generated %sx%s maze: %s carved, %s re-walled",
            w,
            h,
            len(self.carve_log),
            len(self.rewalled),
        )
        return grid

    def _carve(self, grid: Grid, x: int, y: int) -> None:
        grid.set(x, y, PASSAGE)
        self.carve_log.append((x, y))

    def _carve_passages(self, grid: Grid) -> None:
        w, h = grid.width, grid.height
        self._carve(grid, 1, 1)
        stack: List[Cell] = [(1, 1)]

        while stack:
            cx, cy = stack[-1]
            steps = list(CARVE_STEPS)
            self.rng.shuffle(steps)

            nxt: Optional[Cell] = None
            for dx, dy in steps:
                nx, ny = cx + dx, cy + dy
                if nx <= 0 or ny <= 0 or nx >= w - 1 or ny >= h - 1:
                    continue
                if grid.get(nx, ny) == PASSAGE:
                    continue
                self._carve(grid, cx + dx // 2, cy + dy // 2)
                self._carve(grid, nx, ny)
                nxt = (nx, ny)
                break

            if nxt is None:
                stack.pop()
            else:
                stack.append(nxt)

    def _open_neighbors(self, grid: Grid, x: int, y: int) -> int:
        return sum(
            1
            for dx, dy in ((0, -1), (0, 1), (-1, 0), (1, 0))
            if grid.get(x + dx, y + dy) == PASSAGE
        )

    def _soft_rewall(self, grid: Grid) -> None:
        w, h = grid.width, grid.height
        for _ in range(self.rewall_attempts):
            x = self.rng.randint(1, w - 2)
            y = self.rng.randint(1, h - 2)
            if grid.get(x, y) != PASSAGE:
                continue
            if self._open_neighbors(grid, x, y) < 3:
                continue
            if self.rng.random() >= self.rewall_chance:
                continue

            grid.set(x, y, WALL)
            if self.verify_connectivity and not self._still_connected(grid):
                grid.set(x, y, PASSAGE)
                logger.debug("kept junction (%s, %s) open to preserve connectivity", x, y)
                continue
            self.rewalled.append((x, y))

    def _still_connected(self, grid: Grid) -> bool:
        cells = passage_cells(grid)
        if not cells:
            return False
        return reachable_count(grid, cells[0]) == len(cells)


def generate(
    width: int,
    height: int,
    rng: random.Random,
    rewall_attempts: int = 140,
    rewall_chance: float = 0.25,
    verify_connectivity: bool = False,
) -> Grid:
    """Generate a maze grid; see MazeGenerator for the knobs."""
    return MazeGenerator(
        rng,
        rewall_attempts=rewall_attempts,
        rewall_chance=rewall_chance,
        verify_connectivity=verify_connectivity,
    ).generate(width, height)
