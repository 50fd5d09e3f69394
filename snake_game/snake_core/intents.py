"""
Intents
=======

Discrete player intents fed into the engine by an input adapter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from snake_game.snake_core.grid import Direction


@dataclass(frozen=True)
class Move:
    """Request a direction change. Honoured only while playing."""
    direction: Direction


@dataclass(frozen=True)
class TogglePause:
    """Pause or resume."""


@dataclass(frozen=True)
class Start:
    """Start a new game from the title or game-over screen."""


Intent = Union[Move, TogglePause, Start]
