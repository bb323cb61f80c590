from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from game_types import PASSAGE, WALL, Cell
from models import Grid, KeyCells

# Key-cell markers; each stands on a passage.
START_CHAR = "S"
CANDY_CHAR = "C"
EXIT_CHAR = "E"
MARKER_CHARS = (START_CHAR, CANDY_CHAR, EXIT_CHAR)


def normalize_grid_lines(lines: List[str], pad_char: str = WALL) -> Tuple[List[str], int, int]:
    """Normalize map lines to equal width.

    Args:
        lines: Raw map lines.
        pad_char: Character to pad short lines with.

    Returns:
        (normalized_lines, width, height)

    Raises:
        ValueError: If no lines are provided.
    """
    lines = [line for line in lines if line.strip() != ""]
    if not lines:
        raise ValueError("Maze map is empty.")
    width = max(len(line) for line in lines)
    height = len(lines)
    normalized = [line.ljust(width, pad_char) for line in lines]
    return normalized, width, height


def grid_from_lines(lines: List[str]) -> Tuple[Grid, Dict[str, Cell]]:
    """Build a Grid from ASCII lines; returns the grid and any marker positions.

    '#' is wall, every other character is passage. S/C/E markers are reported
    by character.
    """
    rows, width, height = normalize_grid_lines(lines)
    grid = Grid.filled(width, height, WALL)
    markers: Dict[str, Cell] = {}
    for y, line in enumerate(rows):
        for x, ch in enumerate(line):
            if ch == WALL:
                continue
            grid.set(x, y, PASSAGE)
            if ch in MARKER_CHARS:
                markers[ch] = (x, y)
    return grid, markers


def grid_to_lines(grid: Grid, key_cells: Optional[KeyCells] = None) -> List[str]:
    """Render a grid as ASCII, stamping key-cell markers when given."""
    cells = [list(row) for row in grid.rows()]
    if key_cells is not None:
        for ch, (x, y) in (
            (START_CHAR, key_cells.start),
            (CANDY_CHAR, key_cells.candy),
            (EXIT_CHAR, key_cells.exit),
        ):
            if grid.in_bounds(x, y):
                cells[y][x] = ch
    return ["".join(row) for row in cells]


def write_map(path: Path, grid: Grid, key_cells: Optional[KeyCells] = None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(grid_to_lines(grid, key_cells)) + "\n", encoding="utf-8")


def read_map(path: Path) -> Tuple[Grid, Dict[str, Cell]]:
    """Read a .map file written by write_map."""
    if not path.exists():
        raise FileNotFoundError(f"Maze map not found: {path}")
    lines = [line.rstrip("\n") for line in path.read_text(encoding="utf-8").splitlines()]
    return grid_from_lines(lines)
