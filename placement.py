"""
placement.py

Chooses start, candy and exit cells for a generated maze.

Start snaps to the bottom-left, exit to the bottom-right. Candy goes where
the smaller of its two distances (to start and to exit) is largest, with the
sum as a tie-breaker:

    score = min(d_start, d_exit) * candy_weight + (d_start + d_exit)

Only cells at least min_candy_distance steps from both anchors qualify. When
none does, candy falls back to a fixed fractional anchor. If the exit ends up
closer than min_exit_distance to the candy, the exit is moved to the passage
maximising distance-from-candy plus a pull toward the bottom-right corner.
Placement never fails; quality degrades instead.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Sequence

from game_types import UNREACHABLE, Cell
from models import Grid, KeyCells, Monster, PlacementConfig
from reachability import bfs_distances, distance_at, nearest_passage, passage_cells

logger = logging.getLogger(__name__)


class KeyCellPlanner:
    def __init__(self, cfg: Optional[PlacementConfig] = None) -> None:
        self.cfg = cfg or PlacementConfig()

    def start_anchor(self, grid: Grid) -> Cell:
        return (1, grid.height - 2)

    def exit_anchor(self, grid: Grid) -> Cell:
        return (grid.width - 2, grid.height - 2)

    def candy_fallback_anchor(self, grid: Grid) -> Cell:
        fx, fy = self.cfg.candy_fallback_anchor
        # a fraction of 1.0 must still land inside the grid
        return (
            min(int(grid.width * fx), grid.width - 1),
            min(int(grid.height * fy), grid.height - 1),
        )

    def place(self, grid: Grid) -> KeyCells:
        start = nearest_passage(grid, self.start_anchor(grid))
        exit_cell = nearest_passage(grid, self.exit_anchor(grid))
        passages = passage_cells(grid)

        candy = self._pick_candy(grid, passages, start, exit_cell)
        candy_fallback = candy is None
        if candy is None:
            candy = nearest_passage(grid, self.candy_fallback_anchor(grid))
            logger.info(
                "no cell is %s+ steps from both start and exit; candy fell back to %s",
                self.cfg.min_candy_distance,
                candy,
            )

        relocated = self._relocate_exit(grid, passages, candy, exit_cell)
        exit_relocated = relocated is not None
        if relocated is not None:
            logger.debug("exit moved from %s to %s", exit_cell, relocated)
            exit_cell = relocated

        return KeyCells(
            start=start,
            exit=exit_cell,
            candy=candy,
            candy_fallback=candy_fallback,
            exit_relocated=exit_relocated,
        )

    def _pick_candy(
        self, grid: Grid, passages: Sequence[Cell], start: Cell, exit_cell: Cell
    ) -> Optional[Cell]:
        d_start = bfs_distances(grid, start)
        d_exit = bfs_distances(grid, exit_cell)
        min_d = self.cfg.min_candy_distance

        best: Optional[Cell] = None
        best_score = -1
        for c in passages:
            a = distance_at(d_start, c)
            b = distance_at(d_exit, c)
            if a == UNREACHABLE or b == UNREACHABLE:
                continue
            if a < min_d or b < min_d:
                continue
            score = min(a, b) * self.cfg.candy_weight + (a + b)
            if score > best_score:
                best_score = score
                best = c
        return best

    def _relocate_exit(
        self, grid: Grid, passages: Sequence[Cell], candy: Cell, exit_cell: Cell
    ) -> Optional[Cell]:
        """Return a new exit when the current one is too close to candy."""
        d_candy = bfs_distances(grid, candy)
        current = distance_at(d_candy, exit_cell)
        if current != UNREACHABLE and current >= self.cfg.min_exit_distance:
            return None

        best: Optional[Cell] = None
        best_score = float("-inf")
        for c in passages:
            dc = distance_at(d_candy, c)
            if dc == UNREACHABLE:
                continue
            # bottom-right bias
            bias = c[0] / grid.width + c[1] / grid.height
            score = dc + bias * self.cfg.exit_bias_weight
            if score > best_score:
                best_score = score
                best = c
        return best


def place_key_cells(grid: Grid, cfg: Optional[PlacementConfig] = None) -> KeyCells:
    return KeyCellPlanner(cfg).place(grid)


class MonsterPlacer:
    """Scatters decorative monsters on passages away from the key cells."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def place(
        self,
        grid: Grid,
        key_cells: KeyCells,
        count: int,
        glyphs: Sequence[str],
    ) -> List[Monster]:
        reserved = {key_cells.start, key_cells.exit, key_cells.candy}
        candidates = [c for c in passage_cells(grid) if c not in reserved]
        if not candidates or not glyphs:
            return []

        return [
            Monster(cell=self.rng.choice(candidates), glyph=glyphs[i % len(glyphs)])
            for i in range(count)
        ]
