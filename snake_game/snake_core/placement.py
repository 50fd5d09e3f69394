"""
Placement
=========

Collision-free placement of fruit and obstacles by rejection sampling.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Set

from snake_game.snake_core.grid import Cell, Grid
from snake_game.snake_core.rng import CellSampler, RandomCellSampler

logger = logging.getLogger(__name__)


class PlacementExhaustedError(RuntimeError):
    """Raised when every grid cell is occupied and nothing can be placed."""


class Placement:
    """
    Places fruit and obstacles on free cells.

    Candidates come from the injected sampler and are rejected until one is
    free. The free-cell count is checked first, so a full board raises
    PlacementExhaustedError instead of sampling forever.
    """

    def __init__(self, grid: Grid, sampler: Optional[CellSampler] = None):
        """
        Initialize placement.

        Args:
            grid: Board geometry.
            sampler: Cell source. Unseeded RandomCellSampler if None.
        """
        self._grid = grid
        self._sampler = sampler if sampler is not None else RandomCellSampler()

    @property
    def sampler(self) -> CellSampler:
        return self._sampler

    def free_cell_count(self, occupied: Set[Cell]) -> int:
        """Number of grid cells not in `occupied`."""
        return self._grid.cell_count - len(occupied)

    def _sample_free(self, occupied: Set[Cell]) -> Cell:
        if self.free_cell_count(occupied) <= 0:
            raise PlacementExhaustedError(
                f"No free cell left on {self._grid!r} ({len(occupied)} occupied)"
            )

        attempts = 0
        while True:
            attempts += 1
            cell = self._sampler.sample(self._grid.cols, self._grid.rows)
            if not self._grid.contains(cell):
                raise ValueError(f"Sampler returned {cell} outside {self._grid!r}")
            if cell not in occupied:
                logger.debug("Placed %s after %d attempt(s)", cell, attempts)
                return cell

    def place_fruit(
        self,
        snake: Sequence[Cell],
        obstacles: Iterable[Cell]
    ) -> Cell:
        """
        Pick a fruit cell disjoint from the snake and all obstacles.

        Args:
            snake: Snake body, head first.
            obstacles: Current obstacles.

        Returns:
            The fruit cell.

        Raises:
            PlacementExhaustedError: If the board is full.
        """
        occupied = set(snake)
        occupied.update(obstacles)
        return self._sample_free(occupied)

    def place_obstacles(
        self,
        count: int,
        snake: Sequence[Cell],
        fruit: Optional[Cell],
        obstacles: List[Cell]
    ) -> List[Cell]:
        """
        Append `count` new obstacles to `obstacles`.

        Each one avoids the snake, the fruit, and every obstacle already
        present, including those placed earlier in this batch.

        Args:
            count: Number of obstacles to add.
            snake: Snake body, head first.
            fruit: Fruit cell, or None.
            obstacles: Obstacle list, extended in place.

        Returns:
            The newly placed obstacles.

        Raises:
            PlacementExhaustedError: If the board fills up mid-batch. Obstacles
                placed before that point stay in `obstacles`.
        """
        occupied = set(snake)
        occupied.update(obstacles)
        if fruit is not None:
            occupied.add(fruit)

        placed: List[Cell] = []
        for _ in range(count):
            cell = self._sample_free(occupied)
            occupied.add(cell)
            obstacles.append(cell)
            placed.append(cell)
        return placed
