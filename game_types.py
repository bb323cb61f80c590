from __future__ import annotations

from typing import List, Tuple

Color = Tuple[int, int, int]
Cell = Tuple[int, int]
DistanceMap = List[List[int]]

WALL = "#"
PASSAGE = "."
UNREACHABLE = -1

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
