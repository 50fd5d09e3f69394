"""
Snake Core - The heart of the simulation.

This module provides the grid Snake state machine and all supporting
systems (grid geometry, placement, scoring, rules, snapshots).

Main exports:
- CoreGame: The simulation engine
- GameState: Title / Playing / Paused / GameOver
- Move, TogglePause, Start: Player intents
- GameConfig: Configuration loaded from game_config.yaml
- SolidRenderer: Headless numpy renderer
"""

from snake_game.snake_core.config_loader import GameConfig, load_config, get_config
from snake_game.snake_core.grid import Cell, Direction, Grid
from snake_game.snake_core.intents import Intent, Move, TogglePause, Start
from snake_game.snake_core.rng import (
    CellSampler,
    RandomCellSampler,
    ScriptedCellSampler,
    SamplerExhaustedError,
)
from snake_game.snake_core.placement import Placement, PlacementExhaustedError
from snake_game.snake_core.scoring import ScoreTracker, BestScores
from snake_game.snake_core.state_snapshot import GameSnapshot, GameState
from snake_game.snake_core.game import CoreGame, TickResult
from snake_game.snake_core.render_solid import SolidRenderer

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "Cell",
    "Direction",
    "Grid",
    "Intent",
    "Move",
    "TogglePause",
    "Start",
    "CellSampler",
    "RandomCellSampler",
    "ScriptedCellSampler",
    "SamplerExhaustedError",
    "Placement",
    "PlacementExhaustedError",
    "ScoreTracker",
    "BestScores",
    "GameSnapshot",
    "GameState",
    "CoreGame",
    "TickResult",
    "SolidRenderer",
]
