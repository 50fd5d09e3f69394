"""
Game Rules
==========

Handles direction changes, head movement, and termination conditions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from snake_game.snake_core.grid import Cell, Direction, Grid


@dataclass
class TerminationResult:
    """Result of termination check."""
    terminated: bool
    reason: str

    @staticmethod
    def none() -> "TerminationResult":
        return TerminationResult(False, "")

    @staticmethod
    def game_over(reason: str) -> "TerminationResult":
        return TerminationResult(True, reason)


class DirectionRules:
    """
    Buffers the player's requested direction.

    The committed direction is what the snake moved in last tick; the pending
    direction is applied on the next tick. A request for the exact opposite
    of the committed direction is rejected.
    """

    def __init__(self, initial: Direction = Direction.RIGHT):
        self._committed = initial
        self._pending = initial

    @property
    def committed(self) -> Direction:
        return self._committed

    @property
    def pending(self) -> Direction:
        return self._pending

    def request(self, direction: Direction) -> bool:
        """
        Queue a direction change.

        Args:
            direction: Requested direction.

        Returns:
            True if the pending direction was updated.
        """
        if direction.is_opposite(self._committed):
            return False
        self._pending = direction
        return True

    def commit(self) -> Direction:
        """Apply the pending direction for this tick."""
        self._committed = self._pending
        return self._committed

    def reset(self, direction: Direction = Direction.RIGHT) -> None:
        self._committed = direction
        self._pending = direction


class MovementRules:
    """Computes the next head position on the toroidal grid."""

    def __init__(self, grid: Grid):
        self._grid = grid

    def next_head(self, head: Cell, direction: Direction) -> Cell:
        return self._grid.shift(head, direction)


class TerminationRules:
    """
    Handles game termination conditions.

    - Self: the new head lands on any current body segment. The tail counts,
      since it has not moved out yet when the check runs.
    - Obstacle: the new head lands on an obstacle.
    - Board full: nothing more can be placed (raised from placement).
    """

    SELF_COLLISION = "self_collision"
    OBSTACLE_COLLISION = "obstacle_collision"
    BOARD_FULL = "board_full"

    def check_collision(
        self,
        new_head: Cell,
        snake: Sequence[Cell],
        obstacles: Iterable[Cell]
    ) -> TerminationResult:
        """
        Check whether moving to `new_head` is fatal.

        Args:
            new_head: Candidate head cell after wrap-around.
            snake: Full pre-move body, head first.
            obstacles: Current obstacles.

        Returns:
            TerminationResult indicating game state.
        """
        if new_head in snake:
            return TerminationResult.game_over(self.SELF_COLLISION)

        if new_head in obstacles:
            return TerminationResult.game_over(self.OBSTACLE_COLLISION)

        return TerminationResult.none()


class GameRules:
    """
    Combined interface for all game rules.
    """

    def __init__(self, grid: Grid):
        """
        Initialize game rules.

        Args:
            grid: Board geometry.
        """
        self.direction = DirectionRules()
        self.movement = MovementRules(grid)
        self.termination = TerminationRules()

    def reset(self) -> None:
        """Reset all rule state."""
        self.direction.reset()
