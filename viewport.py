from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame


@dataclass(frozen=True)
class Viewport:
    cell_size: int
    offset_x: int
    offset_y: int


def fit_grid(
    window_w: int, window_h: int, cols: int, rows: int, top_margin: int = 0
) -> Viewport:
    """Return the largest whole-pixel cell size that fits the grid, centered."""
    avail_h = max(1, window_h - top_margin)
    cell_size = max(1, min(window_w // max(1, cols), avail_h // max(1, rows)))
    grid_w = cell_size * cols
    grid_h = cell_size * rows
    offset_x = (window_w - grid_w) // 2
    offset_y = top_margin + (avail_h - grid_h) // 2
    return Viewport(cell_size=cell_size, offset_x=offset_x, offset_y=offset_y)


def cell_rect(x: int, y: int, vp: Viewport) -> pygame.Rect:
    """Screen rect of grid cell (x, y)."""
    cs = vp.cell_size
    return pygame.Rect(vp.offset_x + x * cs, vp.offset_y + y * cs, cs, cs)


def cell_center(x: float, y: float, vp: Viewport) -> Tuple[int, int]:
    """Screen center of a (possibly fractional) cell position."""
    cs = vp.cell_size
    return (
        int(vp.offset_x + x * cs + cs / 2),
        int(vp.offset_y + y * cs + cs / 2),
    )
