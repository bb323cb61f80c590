import os
import random
import sys
from collections import deque

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Headless pygame for the presentation smoke tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from game_types import DIRECTIONS  # noqa: E402
from grid_text import grid_from_lines  # noqa: E402
from models import MazeConfig  # noqa: E402

# 9x9 maze carved by FirstChoiceRng: a single serpentine corridor.
SERPENTINE_9X9 = [
    "#########",
    "#.......#",
    "#######.#",
    "#.......#",
    "#.#######",
    "#.......#",
    "#######.#",
    "#.......#",
    "#########",
]

OPEN_5X5 = [
    "#####",
    "#...#",
    "#...#",
    "#...#",
    "#####",
]


class FirstChoiceRng:
    """Deterministic RNG stand-in: never shuffles, always picks the first option."""

    def shuffle(self, seq):
        return None

    def randint(self, a, b):
        return a

    def random(self):
        return 0.99

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def first_choice_rng():
    return FirstChoiceRng()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def serpentine_grid():
    grid, _ = grid_from_lines(SERPENTINE_9X9)
    return grid


@pytest.fixture
def open_grid():
    grid, _ = grid_from_lines(OPEN_5X5)
    return grid


@pytest.fixture
def no_rewall_cfg():
    return MazeConfig(
        width=41,
        height=29,
        rewall_attempts=0,
        rewall_chance=0.25,
        verify_connectivity=False,
        seed=None,
    )


def shortest_path(grid, src, dst):
    """Directions leading from src to dst along passages."""
    prev = {src: None}
    q = deque([src])
    while q:
        cur = q.popleft()
        if cur == dst:
            break
        for name, (dx, dy) in DIRECTIONS.items():
            nxt = (cur[0] + dx, cur[1] + dy)
            if nxt in prev or not grid.is_passage(*nxt):
                continue
            prev[nxt] = (cur, name)
            q.append(nxt)

    steps = []
    cur = dst
    while prev[cur] is not None:
        cur, name = prev[cur]
        steps.append(name)
    return list(reversed(steps))
