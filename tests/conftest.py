"""
Shared fixtures.
"""

import dataclasses

import pytest

from snake_game.snake_core.config_loader import GameConfig, load_config


@pytest.fixture
def config() -> GameConfig:
    return load_config()


@pytest.fixture
def make_config(config):
    """Factory for configs with a custom grid size and overrides."""

    def _make(cols: int, rows: int, **sections) -> GameConfig:
        tile = config.board.tile_size
        board = dataclasses.replace(
            config.board,
            width=cols * tile,
            height=rows * tile + config.board.top_bar_height
        )
        return dataclasses.replace(config, board=board, **sections)

    return _make
