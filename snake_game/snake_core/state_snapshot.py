"""
State Snapshot
==============

Read-only view of the engine state handed to renderers.
Can be packed into a numpy occupancy grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np

from snake_game.snake_core.grid import Cell, Direction, Grid

# Occupancy codes used by GameSnapshot.to_grid()
EMPTY = 0
SNAKE_BODY = 1
SNAKE_HEAD = 2
FRUIT = 3
OBSTACLE = 4


class GameState(Enum):
    """Engine state machine labels."""
    TITLE = "title"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class GameSnapshot:
    """
    Immutable copy of everything a renderer needs.

    Sequences are tuples so a renderer cannot mutate engine state.
    """
    state: GameState
    snake: Tuple[Cell, ...]            # Head first
    fruit: Optional[Cell]
    obstacles: Tuple[Cell, ...]        # Insertion order
    score: int
    best_scores: Tuple[int, ...]       # Descending

    # Board info
    cols: int
    rows: int

    direction: Direction
    pending_direction: Direction
    ticks: int
    termination_reason: str = ""

    @property
    def head(self) -> Optional[Cell]:
        return self.snake[0] if self.snake else None

    @property
    def length(self) -> int:
        return len(self.snake)

    def to_grid(self) -> np.ndarray:
        """
        Pack the board into a (rows, cols) int8 occupancy array.

        Index as grid[y, x].
        """
        grid = np.zeros((self.rows, self.cols), dtype=np.int8)

        for x, y in self.obstacles:
            grid[y, x] = OBSTACLE
        if self.fruit is not None:
            grid[self.fruit[1], self.fruit[0]] = FRUIT
        for x, y in self.snake[1:]:
            grid[y, x] = SNAKE_BODY
        if self.snake:
            hx, hy = self.snake[0]
            grid[hy, hx] = SNAKE_HEAD

        return grid

    def to_dict(self) -> Dict[str, Any]:
        """Plain-python view (for logging and debugging)."""
        return {
            "state": self.state.value,
            "snake": [list(c) for c in self.snake],
            "fruit": list(self.fruit) if self.fruit is not None else None,
            "obstacles": [list(c) for c in self.obstacles],
            "score": self.score,
            "best_scores": list(self.best_scores),
            "cols": self.cols,
            "rows": self.rows,
            "direction": self.direction.name,
            "pending_direction": self.pending_direction.name,
            "ticks": self.ticks,
            "termination_reason": self.termination_reason,
        }


class SnapshotBuilder:
    """Builds snapshots for a fixed grid."""

    def __init__(self, grid: Grid):
        self._grid = grid

    def build(
        self,
        state: GameState,
        snake: Sequence[Cell],
        fruit: Optional[Cell],
        obstacles: Sequence[Cell],
        score: int,
        best_scores: Sequence[int],
        direction: Direction,
        pending_direction: Direction,
        ticks: int,
        termination_reason: str = ""
    ) -> GameSnapshot:
        """Build a snapshot from current game state."""
        return GameSnapshot(
            state=state,
            snake=tuple(snake),
            fruit=fruit,
            obstacles=tuple(obstacles),
            score=score,
            best_scores=tuple(best_scores),
            cols=self._grid.cols,
            rows=self._grid.rows,
            direction=direction,
            pending_direction=pending_direction,
            ticks=ticks,
            termination_reason=termination_reason
        )
