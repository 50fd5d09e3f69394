"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Optional

import yaml


@dataclass(frozen=True)
class BoardConfig:
    """Logical board size the grid is derived from."""
    width: int             # Board width in pixels
    height: int            # Board height in pixels, top bar included
    tile_size: int         # Pixels per grid cell
    top_bar_height: int    # Pixels reserved above the playfield

    @property
    def cols(self) -> int:
        """Number of grid columns."""
        return self.width // self.tile_size

    @property
    def rows(self) -> int:
        """Number of grid rows (top bar excluded)."""
        return (self.height - self.top_bar_height) // self.tile_size


@dataclass(frozen=True)
class TimingConfig:
    """Tick timing."""
    move_delay: float  # Seconds of accumulated time per movement tick


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    fruit_reward: int
    best_scores_size: int


@dataclass(frozen=True)
class ObstacleConfig:
    """Obstacle accretion."""
    per_fruit: int


@dataclass(frozen=True)
class DisplayConfig:
    """Presentation settings used by the renderers."""
    fps: int
    background: Tuple[int, int, int]
    top_bar: Tuple[int, int, int]
    snake: Tuple[int, int, int]
    snake_head: Tuple[int, int, int]
    fruit: Tuple[int, int, int]
    obstacle: Tuple[int, int, int]
    text: Tuple[int, int, int]
    highlight: Tuple[int, int, int]


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    timing: TimingConfig
    scoring: ScoringConfig
    obstacles: ObstacleConfig
    display: DisplayConfig

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def rows(self) -> int:
        return self.board.rows


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.board.tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {config.board.tile_size}")

    if config.board.cols <= 0 or config.board.rows <= 0:
        raise ValueError(
            f"Board {config.board.width}x{config.board.height} with tile_size "
            f"{config.board.tile_size} yields an empty grid "
            f"({config.board.cols}x{config.board.rows})"
        )

    if config.timing.move_delay <= 0:
        raise ValueError(f"move_delay must be positive, got {config.timing.move_delay}")

    if config.scoring.fruit_reward < 0:
        raise ValueError(f"fruit_reward must be non-negative, got {config.scoring.fruit_reward}")

    if config.scoring.best_scores_size < 1:
        raise ValueError(
            f"best_scores_size must be at least 1, got {config.scoring.best_scores_size}"
        )

    if config.obstacles.per_fruit < 0:
        raise ValueError(f"per_fruit must be non-negative, got {config.obstacles.per_fruit}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"]),
        tile_size=int(board_data.get("tile_size", 20)),
        top_bar_height=int(board_data.get("top_bar_height", 0))
    )

    timing_data = raw.get("timing", {})
    timing = TimingConfig(
        move_delay=float(timing_data.get("move_delay", 0.1))
    )

    scoring_data = raw.get("scoring", {})
    scoring = ScoringConfig(
        fruit_reward=int(scoring_data.get("fruit_reward", 10)),
        best_scores_size=int(scoring_data.get("best_scores_size", 5))
    )

    obstacles_data = raw.get("obstacles", {})
    obstacles = ObstacleConfig(
        per_fruit=int(obstacles_data.get("per_fruit", 2))
    )

    # Display section is optional; headless users never read it
    display_data = raw.get("display", {})
    display = DisplayConfig(
        fps=int(display_data.get("fps", 30)),
        background=_parse_color(display_data.get("background", [150, 180, 120])),
        top_bar=_parse_color(display_data.get("top_bar", [50, 50, 50])),
        snake=_parse_color(display_data.get("snake", [0, 0, 255])),
        snake_head=_parse_color(display_data.get("snake_head", [0, 0, 180])),
        fruit=_parse_color(display_data.get("fruit", [255, 0, 0])),
        obstacle=_parse_color(display_data.get("obstacle", [0, 255, 0])),
        text=_parse_color(display_data.get("text", [255, 255, 255])),
        highlight=_parse_color(display_data.get("highlight", [255, 255, 0]))
    )

    config = GameConfig(
        board=board,
        timing=timing,
        scoring=scoring,
        obstacles=obstacles,
        display=display
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
