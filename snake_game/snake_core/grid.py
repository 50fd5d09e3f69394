"""
Grid
====

Fixed-size toroidal grid and the four movement directions.
"""

from __future__ import annotations

from enum import Enum
from typing import Tuple

# (x, y) with 0 <= x < cols and 0 <= y < rows
Cell = Tuple[int, int]


class Direction(Enum):
    """Movement direction. Up decreases y (screen orientation)."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))

    def is_opposite(self, other: "Direction") -> bool:
        return self.opposite is other


class Grid:
    """
    Board geometry with wrap-around edges.

    Any coordinate leaving one edge re-enters at the opposite edge.
    """

    def __init__(self, cols: int, rows: int):
        """
        Initialize grid.

        Args:
            cols: Number of columns.
            rows: Number of rows.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if cols <= 0 or rows <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {cols}x{rows}")
        self._cols = int(cols)
        self._rows = int(rows)

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cell_count(self) -> int:
        """Total number of cells."""
        return self._cols * self._rows

    @property
    def center(self) -> Cell:
        """Starting cell for a new snake."""
        return (self._cols // 2, self._rows // 2)

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self._cols and 0 <= y < self._rows

    def wrap(self, cell: Cell) -> Cell:
        """Fold an out-of-range coordinate back onto the board."""
        x, y = cell
        return (x % self._cols, y % self._rows)

    def shift(self, cell: Cell, direction: Direction) -> Cell:
        """
        Move one cell in a direction, wrapping at the edges.

        Args:
            cell: Starting cell.
            direction: Direction of travel.

        Returns:
            Neighbouring cell on the torus.
        """
        dx, dy = direction.delta
        return self.wrap((cell[0] + dx, cell[1] + dy))

    def __repr__(self) -> str:
        return f"Grid({self._cols}x{self._rows})"
