"""
Solid Renderer
==============

Fast numpy-based renderer that draws the grid as solid-color tiles.
No window or font is needed, which makes it usable headless and in tests.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from snake_game.snake_core.config_loader import GameConfig, get_config
from snake_game.snake_core.state_snapshot import GameSnapshot, GameState


class SolidRenderer:
    """
    Renders a snapshot as an RGB array.

    Layout matches the interactive window: a top bar of
    board.top_bar_height pixels, then rows x cols tiles of board.tile_size
    pixels. Each occupant fills its tile minus a 2 pixel gap.
    """

    # Gap between neighbouring tiles, in pixels
    TILE_GAP = 2

    def __init__(self, config: Optional[GameConfig] = None, tile_size: Optional[int] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
            tile_size: Pixel size of a tile. Uses board.tile_size if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._tile = tile_size if tile_size is not None else config.board.tile_size
        self._top_bar = config.board.top_bar_height

        display = config.display
        self._bg_color = np.array(display.background, dtype=np.uint8)
        self._bar_color = np.array(display.top_bar, dtype=np.uint8)
        self._snake_color = np.array(display.snake, dtype=np.uint8)
        self._head_color = np.array(display.snake_head, dtype=np.uint8)
        self._fruit_color = np.array(display.fruit, dtype=np.uint8)
        self._obstacle_color = np.array(display.obstacle, dtype=np.uint8)

    @property
    def tile_size(self) -> int:
        return self._tile

    def image_size(self, snapshot: GameSnapshot) -> Tuple[int, int]:
        """(width, height) in pixels for a snapshot's grid."""
        return (snapshot.cols * self._tile, self._top_bar + snapshot.rows * self._tile)

    def tile_origin(self, x: int, y: int) -> Tuple[int, int]:
        """Top-left pixel (px, py) of grid cell (x, y)."""
        return (x * self._tile, self._top_bar + y * self._tile)

    def render(self, snapshot: GameSnapshot) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            snapshot: State to draw.

        Returns:
            (height, width, 3) uint8 array.
        """
        width, height = self.image_size(snapshot)

        img = np.zeros((height, width, 3), dtype=np.uint8)
        img[:] = self._bg_color
        img[:self._top_bar, :] = self._bar_color

        if snapshot.state is GameState.TITLE:
            return img

        for cell in snapshot.obstacles:
            self._fill_tile(img, cell, self._obstacle_color)
        if snapshot.fruit is not None:
            self._fill_tile(img, snapshot.fruit, self._fruit_color)
        for cell in snapshot.snake[1:]:
            self._fill_tile(img, cell, self._snake_color)
        if snapshot.snake:
            self._fill_tile(img, snapshot.snake[0], self._head_color)

        # Dim the playfield when the simulation is not running
        if snapshot.state in (GameState.PAUSED, GameState.GAME_OVER):
            board = img[self._top_bar:]
            board[:] = (board.astype(np.uint16) // 2).astype(np.uint8)

        return img

    def _fill_tile(self, img: np.ndarray, cell, color: np.ndarray) -> None:
        px, py = self.tile_origin(cell[0], cell[1])
        size = max(1, self._tile - self.TILE_GAP)
        img[py:py + size, px:px + size] = color
