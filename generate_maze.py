#!/usr/bin/env python3
"""
generate_maze.py

Generates a maze with start/candy/exit placed and prints it as ASCII, or
writes it to a .map file.

Legend:
- '#' wall
- '.' passage
- 'S' start, 'C' candy, 'E' exit

Also reports the step distances between the key cells and whether a
placement fallback was used.
"""

from __future__ import annotations

import argparse
import random
from pathlib import Path
from typing import List, Optional, Sequence

from grid_text import grid_to_lines, write_map
from maze_generator import MazeGenerator
from models import Grid, KeyCells, PlacementConfig
from placement import KeyCellPlanner
from reachability import bfs_distances, distance_at


def describe_placement(grid: Grid, key_cells: KeyCells) -> str:
    d_candy = bfs_distances(grid, key_cells.candy)
    parts = [
        f"{grid.width}x{grid.height}",
        f"start={key_cells.start}",
        f"candy={key_cells.candy}",
        f"exit={key_cells.exit}",
        f"start->candy={distance_at(d_candy, key_cells.start)}",
        f"candy->exit={distance_at(d_candy, key_cells.exit)}",
    ]
    if key_cells.candy_fallback:
        parts.append("candy=fallback")
    if key_cells.exit_relocated:
        parts.append("exit=relocated")
    return " | ".join(parts)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Generate a candy maze as ASCII.")
    p.add_argument("--width", type=int, default=41, help="Maze width (default: 41)")
    p.add_argument("--height", type=int, default=29, help="Maze height (default: 29)")
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Optional RNG seed for reproducible generation.",
    )
    p.add_argument(
        "--no-rewall",
        action="store_true",
        help="Skip the junction re-walling pass (pure spanning-tree maze).",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Only re-wall junctions when the maze stays connected.",
    )
    p.add_argument(
        "--out",
        type=str,
        default=None,
        help="Write the map to this file instead of stdout.",
    )
    args = p.parse_args(argv)
    if args.width < 3 or args.height < 3:
        p.error("width and height must be >= 3")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    rng = random.Random(args.seed)
    generator = MazeGenerator(
        rng,
        rewall_attempts=0 if args.no_rewall else 140,
        verify_connectivity=args.strict,
    )
    grid = generator.generate(args.width, args.height)
    key_cells = KeyCellPlanner(PlacementConfig()).place(grid)

    if args.out:
        write_map(Path(args.out), grid, key_cells)
        print(f"Wrote {args.out}")
    else:
        lines: List[str] = grid_to_lines(grid, key_cells)
        print("\n".join(lines))
    print(describe_placement(grid, key_cells))


if __name__ == "__main__":
    main()
