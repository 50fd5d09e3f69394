"""
Scoring System
==============

Per-game score and the best-score table kept across games.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from snake_game.snake_core.config_loader import GameConfig, get_config
from snake_game.snake_core.grid import Cell


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    cell: Cell
    total: int

    def __repr__(self) -> str:
        return f"ScoreEvent(fruit@{self.cell}=+{self.points}, total={self.total})"


class ScoreTracker:
    """
    Tracks the score of the current game.

    Every fruit is worth a fixed reward from the configuration.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize score tracker.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._reward = config.scoring.fruit_reward
        self._score: int = 0
        self._fruits_eaten: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def fruits_eaten(self) -> int:
        """Fruits eaten this game."""
        return self._fruits_eaten

    @property
    def reward(self) -> int:
        """Points per fruit."""
        return self._reward

    def apply_fruit(self, cell: Cell) -> ScoreEvent:
        """
        Apply the reward for a fruit eaten at `cell`.

        Returns:
            ScoreEvent describing the points awarded.
        """
        self._score += self._reward
        self._fruits_eaten += 1
        return ScoreEvent(points=self._reward, cell=cell, total=self._score)

    def set_score(self, score: int) -> None:
        """Overwrite the score (state injection)."""
        if score < 0:
            raise ValueError(f"Score must be non-negative, got {score}")
        self._score = score

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._fruits_eaten = 0


class BestScores:
    """
    Top scores of completed games, highest first.

    Held in memory only; a new process starts with an empty table.
    """

    def __init__(self, capacity: int = 5):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._entries: List[int] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def entries(self) -> Tuple[int, ...]:
        """Scores in descending order."""
        return tuple(self._entries)

    @property
    def best(self) -> int:
        """Highest recorded score, 0 if none."""
        return self._entries[0] if self._entries else 0

    def record(self, score: int) -> Tuple[int, ...]:
        """
        Add a finished game's score.

        Args:
            score: Final score of the game.

        Returns:
            The updated table.
        """
        self._entries.append(score)
        self._entries.sort(reverse=True)
        del self._entries[self._capacity:]
        return self.entries

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
