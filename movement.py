from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from game_types import DIRECTIONS, Cell
from models import Grid, PlayerState

logger = logging.getLogger(__name__)


def ease_out_cubic(p: float) -> float:
    return 1.0 - (1.0 - p) ** 3


@dataclass
class MoveAnimation:
    """Presentation-only interpolation between two cells."""

    origin: Cell
    target: Cell
    duration: float
    elapsed: float = 0.0

    @property
    def done(self) -> bool:
        return self.elapsed >= self.duration

    def advance(self, dt: float) -> Tuple[float, float]:
        self.elapsed += dt
        p = 1.0 if self.duration <= 0 else min(1.0, self.elapsed / self.duration)
        e = ease_out_cubic(p)
        sx, sy = self.origin
        ex, ey = self.target
        return (sx + (ex - sx) * e, sy + (ey - sy) * e)


class MovementController:
    """Single-step moves with a one-slot pending queue.

    The logical cell changes the moment a move is accepted; the animation only
    drives player.render_pos. While a move is in flight, the latest requested
    direction is kept and replayed once the animation completes.
    """

    def __init__(
        self,
        grid: Grid,
        player: PlayerState,
        move_duration: float,
        on_arrive: Callable[[Cell], None],
        is_finished: Callable[[], bool],
    ) -> None:
        self.grid = grid
        self.player = player
        self.move_duration = move_duration
        self._on_arrive = on_arrive
        self._is_finished = is_finished
        self.pending: Optional[str] = None
        self.animation: Optional[MoveAnimation] = None

    @property
    def moving(self) -> bool:
        return self.animation is not None

    def try_move(self, direction: str) -> bool:
        """Request a move; returns True if a move started now."""
        if self._is_finished():
            return False
        if self.animation is not None:
            self.pending = direction
            return False

        delta = DIRECTIONS.get(direction)
        if delta is None:
            logger.debug("unknown direction %r ignored", direction)
            return False

        x, y = self.player.cell
        target = (x + delta[0], y + delta[1])
        if not self.grid.is_passage(*target):
            logger.debug("blocked move %s from %s", direction, self.player.cell)
            return False

        self.pending = None
        self.animation = MoveAnimation(
            origin=self.player.cell, target=target, duration=self.move_duration
        )
        self.player.cell = target
        self.player.moving = True
        return True

    def update(self, dt: float) -> bool:
        """Advance the in-flight animation; returns True when one completed."""
        anim = self.animation
        if anim is None:
            return False

        self.player.render_pos = anim.advance(dt)
        if not anim.done:
            return False

        self.player.render_pos = (float(anim.target[0]), float(anim.target[1]))
        self.player.moving = False
        self.animation = None

        self._on_arrive(self.player.cell)
        if self._is_finished():
            self.pending = None
            return True

        if self.pending is not None:
            nxt = self.pending
            self.pending = None
            self.try_move(nxt)
        return True

    def cancel(self) -> None:
        """Drop any in-flight animation and pending direction."""
        self.animation = None
        self.pending = None
        self.player.moving = False
        self.player.render_pos = (float(self.player.cell[0]), float(self.player.cell[1]))
