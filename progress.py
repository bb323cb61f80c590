from __future__ import annotations

import logging
from enum import Enum

from events import (
    COLLECTIBLE_ACQUIRED,
    MAZE_FINISHED,
    MOVE_REJECTED_EXIT_LOCKED,
    EventBus,
)
from game_types import Cell
from models import KeyCells

logger = logging.getLogger(__name__)


class ProgressState(str, Enum):
    AWAITING_CANDY = "awaiting_candy"
    CANDY_COLLECTED = "candy_collected"
    FINISHED = "finished"


class ProgressTracker:
    """Candy-then-exit progression; the exit stays inert until candy is held."""

    def __init__(self, events: EventBus) -> None:
        self.events = events
        self.state = ProgressState.AWAITING_CANDY

    @property
    def has_candy(self) -> bool:
        return self.state is not ProgressState.AWAITING_CANDY

    @property
    def finished(self) -> bool:
        return self.state is ProgressState.FINISHED

    def reset(self) -> None:
        self.state = ProgressState.AWAITING_CANDY

    def enter_cell(self, cell: Cell, key_cells: KeyCells) -> ProgressState:
        """Apply the transition for arriving at cell and return the new state."""
        if self.state is ProgressState.FINISHED:
            return self.state

        if self.state is ProgressState.AWAITING_CANDY and cell == key_cells.candy:
            self.state = ProgressState.CANDY_COLLECTED
            logger.info("candy collected at %s", cell)
            self.events.emit(COLLECTIBLE_ACQUIRED, cell=cell)

        if cell == key_cells.exit:
            if self.state is ProgressState.AWAITING_CANDY:
                self.events.emit(MOVE_REJECTED_EXIT_LOCKED, cell=cell)
            else:
                self.state = ProgressState.FINISHED
                logger.info("maze finished at %s", cell)
                self.events.emit(MAZE_FINISHED, cell=cell)

        return self.state
