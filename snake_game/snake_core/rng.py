"""
RNG - Cell Samplers
===================

Provides the random coordinate source used for fruit and obstacle placement.

The engine never touches a global random generator: a sampler is injected at
construction so tests can replay an exact sequence of cells.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from snake_game.snake_core.grid import Cell


class SamplerExhaustedError(RuntimeError):
    """Raised when a scripted sampler has no cells left to hand out."""


class CellSampler(ABC):
    """
    Source of candidate cells.

    Subclasses return one coordinate in [0, cols) x [0, rows) per call.
    Callers are responsible for rejecting occupied cells.
    """

    @abstractmethod
    def sample(self, cols: int, rows: int) -> Cell:
        """Return one cell in [0, cols) x [0, rows)."""

    def reset(self, seed: Optional[int] = None) -> None:
        """Restart the sequence. No-op unless overridden."""


class RandomCellSampler(CellSampler):
    """Uniform sampler backed by a private random.Random instance."""

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize sampler.

        Args:
            seed: Random seed for reproducibility. Random if None.
        """
        self._seed = seed
        self._rng = random.Random(seed)

    def sample(self, cols: int, rows: int) -> Cell:
        return (self._rng.randrange(cols), self._rng.randrange(rows))

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reseed the generator.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)


class ScriptedCellSampler(CellSampler):
    """
    Replays a fixed list of cells in order.

    Cells are returned verbatim, so a script may contain occupied cells to
    exercise rejection sampling.
    """

    def __init__(self, cells: Iterable[Cell]):
        self._cells: List[Cell] = [tuple(c) for c in cells]
        self._index: int = 0

    @property
    def remaining(self) -> int:
        """Number of cells not yet handed out."""
        return len(self._cells) - self._index

    def extend(self, cells: Iterable[Cell]) -> None:
        """Append more cells to the script."""
        self._cells.extend(tuple(c) for c in cells)

    def sample(self, cols: int, rows: int) -> Cell:
        if self._index >= len(self._cells):
            raise SamplerExhaustedError(
                f"Scripted sampler exhausted after {len(self._cells)} cells"
            )
        cell = self._cells[self._index]
        self._index += 1
        return cell

    def reset(self, seed: Optional[int] = None) -> None:
        self._index = 0
