from __future__ import annotations

import logging
import random
from typing import List, Optional

from events import GAME_STARTED, STATE_CHANGED, EventBus
from game_types import Cell
from maze_generator import MazeGenerator
from models import (
    GameSnapshot,
    Grid,
    KeyCells,
    MazeConfig,
    Monster,
    MovementConfig,
    PlacementConfig,
    PlayerState,
)
from movement import MovementController
from placement import KeyCellPlanner, MonsterPlacer
from progress import ProgressState, ProgressTracker

logger = logging.getLogger(__name__)


class GameSession:
    """Owns the maze, key cells, player and progress of one game."""

    def __init__(
        self,
        maze_cfg: MazeConfig,
        placement_cfg: Optional[PlacementConfig] = None,
        movement_cfg: Optional[MovementConfig] = None,
        rng: Optional[random.Random] = None,
        events: Optional[EventBus] = None,
    ) -> None:
        self.maze_cfg = maze_cfg
        self.placement_cfg = placement_cfg or PlacementConfig()
        self.movement_cfg = movement_cfg or MovementConfig()
        self.rng = rng or random.Random(maze_cfg.seed)
        self.events = events or EventBus()

        self.generator = MazeGenerator.from_config(maze_cfg, self.rng)
        self.planner = KeyCellPlanner(self.placement_cfg)
        self.monster_placer = MonsterPlacer(self.rng)
        self.progress = ProgressTracker(self.events)

        self.games_started = 0
        self.grid: Grid = Grid.filled(3, 3)
        self.key_cells = KeyCells(start=(1, 1), exit=(1, 1), candy=(1, 1))
        self.monsters: List[Monster] = []
        self.player = PlayerState.at((1, 1))
        self.movement: Optional[MovementController] = None

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def new_game(self) -> None:
        """Generate a maze, place key cells and put the player on start."""
        if self.movement is not None:
            self.movement.cancel()

        self.grid = self.generator.generate(self.maze_cfg.width, self.maze_cfg.height)
        self.key_cells = self.planner.place(self.grid)
        self.monsters = self.monster_placer.place(
            self.grid,
            self.key_cells,
            self.placement_cfg.monster_count,
            self.placement_cfg.monster_glyphs,
        )
        self.progress.reset()
        self.player = PlayerState.at(self.key_cells.start)
        self.movement = MovementController(
            self.grid,
            self.player,
            self.movement_cfg.move_duration,
            on_arrive=self._on_arrive,
            is_finished=lambda: self.progress.finished,
        )
        self.games_started += 1

        logger.info(
            "game %s: %sx%s maze, start=%s candy=%s exit=%s%s",
            self.games_started,
            self.grid.width,
            self.grid.height,
            self.key_cells.start,
            self.key_cells.candy,
            self.key_cells.exit,
            " (candy fallback)" if self.key_cells.candy_fallback else "",
        )
        self.events.emit(GAME_STARTED, snapshot=self.snapshot())
        self._state_changed()

    def reset_game(self) -> None:
        self.new_game()

    # ----------------------------
    # Input / simulation
    # ----------------------------

    def request_move(self, direction: str) -> None:
        if self.movement is None:
            return
        if self.movement.try_move(direction):
            self._state_changed()

    def update(self, dt: float) -> None:
        """Advance animations by dt seconds (one frame)."""
        if self.movement is None or not self.movement.moving:
            return
        completed = self.movement.update(dt)
        if completed:
            self._state_changed()

    def _on_arrive(self, cell: Cell) -> None:
        self.progress.enter_cell(cell, self.key_cells)
        self.player.has_candy = self.progress.has_candy
        self.player.finished = self.progress.finished

    # ----------------------------
    # Read-only view
    # ----------------------------

    @property
    def state(self) -> ProgressState:
        return self.progress.state

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            rows=tuple(self.grid.rows()),
            width=self.grid.width,
            height=self.grid.height,
            key_cells=self.key_cells,
            player_cell=self.player.cell,
            render_pos=self.player.render_pos,
            has_candy=self.player.has_candy,
            finished=self.player.finished,
            state=self.progress.state.value,
            monsters=tuple(self.monsters),
        )

    def _state_changed(self) -> None:
        self.events.emit(STATE_CHANGED, snapshot=self.snapshot())
