from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from game_types import PASSAGE, WALL, Cell, Color
from utils import as_fraction_pair, clamp_float, clamp_int


@dataclass
class Grid:
    """Rectangular wall/passage grid, indexed cells[y][x]."""

    width: int
    height: int
    cells: List[List[str]]

    @classmethod
    def filled(cls, width: int, height: int, ch: str = WALL) -> "Grid":
        return cls(width, height, [[ch for _ in range(width)] for _ in range(height)])

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> str:
        if self.in_bounds(x, y):
            return self.cells[y][x]
        return WALL

    def set(self, x: int, y: int, ch: str) -> None:
        if self.in_bounds(x, y):
            self.cells[y][x] = ch

    def is_passage(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[y][x] == PASSAGE

    def add_border(self) -> None:
        w, h = self.width, self.height
        for x in range(w):
            self.cells[0][x] = WALL
            self.cells[h - 1][x] = WALL
        for y in range(h):
            self.cells[y][0] = WALL
            self.cells[y][w - 1] = WALL

    def rows(self) -> List[str]:
        return ["".join(r) for r in self.cells]


@dataclass(frozen=True)
class KeyCells:
    start: Cell
    exit: Cell
    candy: Cell
    candy_fallback: bool = False
    exit_relocated: bool = False


@dataclass(frozen=True)
class Monster:
    cell: Cell
    glyph: str


@dataclass
class PlayerState:
    cell: Cell
    render_pos: Tuple[float, float]
    has_candy: bool = False
    finished: bool = False
    moving: bool = False

    @classmethod
    def at(cls, cell: Cell) -> "PlayerState":
        return cls(cell=cell, render_pos=(float(cell[0]), float(cell[1])))


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a session handed to the presentation layer."""

    rows: Tuple[str, ...]
    width: int
    height: int
    key_cells: KeyCells
    player_cell: Cell
    render_pos: Tuple[float, float]
    has_candy: bool
    finished: bool
    state: str
    monsters: Tuple[Monster, ...] = ()


# ----------------------------
# Config sections
# ----------------------------


@dataclass(frozen=True)
class MazeConfig:
    width: int
    height: int
    rewall_attempts: int
    rewall_chance: float
    verify_connectivity: bool
    seed: Optional[int]

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "MazeConfig":
        seed_raw = raw.get("seed")
        return MazeConfig(
            width=clamp_int(int(raw.get("width", 41)), 3, 401),
            height=clamp_int(int(raw.get("height", 29)), 3, 401),
            rewall_attempts=max(0, int(raw.get("rewall_attempts", 140))),
            rewall_chance=clamp_float(float(raw.get("rewall_chance", 0.25)), 0.0, 1.0),
            verify_connectivity=bool(raw.get("verify_connectivity", False)),
            seed=int(seed_raw) if isinstance(seed_raw, int) else None,
        )


DEFAULT_MONSTER_GLYPHS = ["👻", "😈", "🕷️", "🧟", "🦇"]


@dataclass(frozen=True)
class PlacementConfig:
    min_candy_distance: int = 40
    candy_weight: int = 10
    min_exit_distance: int = 60
    exit_bias_weight: float = 15.0
    candy_fallback_anchor: Tuple[float, float] = (0.3, 0.3)
    monster_count: int = 6
    monster_glyphs: Tuple[str, ...] = field(
        default_factory=lambda: tuple(DEFAULT_MONSTER_GLYPHS)
    )

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "PlacementConfig":
        glyphs_raw = raw.get("monster_glyphs", DEFAULT_MONSTER_GLYPHS)
        glyphs = tuple(str(g) for g in glyphs_raw if isinstance(g, str) and g)
        return PlacementConfig(
            min_candy_distance=max(0, int(raw.get("min_candy_distance", 40))),
            candy_weight=max(0, int(raw.get("candy_weight", 10))),
            min_exit_distance=max(0, int(raw.get("min_exit_distance", 60))),
            exit_bias_weight=float(raw.get("exit_bias_weight", 15.0)),
            candy_fallback_anchor=as_fraction_pair(
                raw.get("candy_fallback_anchor"), (0.3, 0.3)
            ),
            monster_count=clamp_int(int(raw.get("monster_count", 6)), 0, 64),
            monster_glyphs=glyphs or tuple(DEFAULT_MONSTER_GLYPHS),
        )


@dataclass(frozen=True)
class MovementConfig:
    move_ms: int = 120
    key_repeat_ms: int = 110

    @property
    def move_duration(self) -> float:
        return self.move_ms / 1000.0


@dataclass(frozen=True)
class RenderConfig:
    bg: Color
    wall: Color
    passage: Color
    badge: Color
    text: Color
    glow: Color
    toast_ms: int


@dataclass(frozen=True)
class RewardConfig:
    title: str
    message: str
    reveal_ms: Tuple[int, int]
    restart_hint: str


@dataclass(frozen=True)
class MusicConfig:
    music_dir: str
    fade_ms: int
    maze_playlist: Tuple[str, ...]
    reward_playlist: Tuple[str, ...]
    cues: Dict[str, str]


@dataclass(frozen=True)
class GameConfig:
    maze: MazeConfig
    placement: PlacementConfig
    movement: MovementConfig
    render: RenderConfig
    reward: RewardConfig
    music: MusicConfig
    window_size: Tuple[int, int]
    title: str
    fullscreen: bool
    log_level: str
