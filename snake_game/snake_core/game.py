"""
Core Game
=========

Main game orchestrator combining grid, placement, scoring, and rules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from snake_game.snake_core.config_loader import GameConfig, get_config
from snake_game.snake_core.grid import Cell, Direction, Grid
from snake_game.snake_core.intents import Intent, Move, Start, TogglePause
from snake_game.snake_core.placement import Placement, PlacementExhaustedError
from snake_game.snake_core.rng import CellSampler, RandomCellSampler
from snake_game.snake_core.rules import GameRules, TerminationRules
from snake_game.snake_core.scoring import BestScores, ScoreTracker
from snake_game.snake_core.state_snapshot import GameSnapshot, GameState, SnapshotBuilder

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Result of a single movement tick."""
    snapshot: GameSnapshot
    terminated: bool
    termination_reason: str
    ate_fruit: bool
    delta_score: int
    new_obstacles: List[Cell] = field(default_factory=list)


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Title / Playing / Paused / GameOver state machine
    - Direction buffering
    - Movement, wrap-around and collisions
    - Fruit and obstacle placement
    - Scoring and best scores
    - State snapshots

    One tick = the snake moves one cell. Ticks are driven by advance(),
    which accumulates elapsed time and fires once it exceeds move_delay.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        sampler: Optional[CellSampler] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            sampler: Cell source for placement. Seeded RandomCellSampler if None.
            seed: Seed for the default sampler. Ignored when sampler is given.

        Raises:
            ValueError: If the configured grid has no cells.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._grid = Grid(config.cols, config.rows)
        self._move_delay = config.timing.move_delay
        self._obstacles_per_fruit = config.obstacles.per_fruit

        # Initialize subsystems
        self._sampler = sampler if sampler is not None else RandomCellSampler(seed)
        self._placement = Placement(self._grid, self._sampler)
        self._scorer = ScoreTracker(config)
        self._best_scores = BestScores(config.scoring.best_scores_size)
        self._rules = GameRules(self._grid)
        self._snapshot_builder = SnapshotBuilder(self._grid)

        # Game state
        self._state = GameState.TITLE
        self._snake: List[Cell] = []
        self._fruit: Optional[Cell] = None
        self._obstacles: List[Cell] = []
        self._accumulator: float = 0.0
        self._ticks: int = 0
        self._termination_reason: str = ""

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def grid(self) -> Grid:
        """Board dimensions and wrap helper."""
        return self._grid

    @property
    def state(self) -> GameState:
        """Current state machine label."""
        return self._state

    @property
    def snake(self) -> Tuple[Cell, ...]:
        """Snake body, head first."""
        return tuple(self._snake)

    @property
    def fruit(self) -> Optional[Cell]:
        """Fruit cell, or None if the board had no room."""
        return self._fruit

    @property
    def obstacles(self) -> Tuple[Cell, ...]:
        """Obstacle cells in insertion order."""
        return tuple(self._obstacles)

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def best_scores(self) -> Tuple[int, ...]:
        """Best scores of completed games, descending."""
        return self._best_scores.entries

    @property
    def direction(self) -> Direction:
        """Direction used by the last tick."""
        return self._rules.direction.committed

    @property
    def pending_direction(self) -> Direction:
        """Direction the next tick will use."""
        return self._rules.direction.pending

    @property
    def move_delay(self) -> float:
        """Seconds between ticks."""
        return self._move_delay

    @property
    def accumulator(self) -> float:
        """Elapsed time banked towards the next tick."""
        return self._accumulator

    @property
    def ticks(self) -> int:
        """Ticks run in the current game."""
        return self._ticks

    @property
    def is_over(self) -> bool:
        """True if the last game has ended."""
        return self._state is GameState.GAME_OVER

    @property
    def termination_reason(self) -> str:
        """Reason for game end, or empty string."""
        return self._termination_reason

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def new_game(self) -> GameSnapshot:
        """
        Reset per-game state and start playing.

        The snake is a single segment at the grid center heading right,
        there are no obstacles, and one fruit is placed on a free cell.

        Returns:
            Snapshot of the fresh game.
        """
        self._snake = [self._grid.center]
        self._obstacles = []
        self._fruit = None
        self._scorer.reset()
        self._rules.reset()
        self._accumulator = 0.0
        self._ticks = 0
        self._termination_reason = ""
        self._state = GameState.PLAYING

        try:
            self._fruit = self._placement.place_fruit(self._snake, self._obstacles)
        except PlacementExhaustedError:
            logger.warning("No room for a fruit on %r", self._grid)
            self._end_game(TerminationRules.BOARD_FULL)
            return self.snapshot()

        logger.info("New game on %r, fruit at %s", self._grid, self._fruit)
        return self.snapshot()

    def set_state(
        self,
        snake: Sequence[Cell],
        direction: Direction = Direction.RIGHT,
        fruit: Optional[Cell] = None,
        obstacles: Iterable[Cell] = (),
        score: int = 0
    ) -> GameSnapshot:
        """
        Load an explicit position and enter the Playing state.

        Args:
            snake: Body cells, head first.
            direction: Committed and pending direction.
            fruit: Fruit cell. Placed on a free cell if None.
            obstacles: Obstacle cells.
            score: Starting score.

        Returns:
            Snapshot of the loaded position.

        Raises:
            ValueError: If cells are off the grid, repeated, or overlapping.
            PlacementExhaustedError: If fruit is None and no cell is free.
                The engine state is left unchanged.
        """
        snake = [tuple(c) for c in snake]
        obstacles = [tuple(c) for c in obstacles]
        fruit = tuple(fruit) if fruit is not None else None

        if not snake:
            raise ValueError("Snake must have at least one segment")
        if score < 0:
            raise ValueError(f"score must be non-negative, got {score}")
        cells = snake + obstacles + ([fruit] if fruit is not None else [])
        for cell in cells:
            if not self._grid.contains(cell):
                raise ValueError(f"Cell {cell} is outside {self._grid!r}")
        if len(set(cells)) != len(cells):
            raise ValueError("Snake, fruit and obstacles must not share cells")

        # Placed before any mutation so a full board leaves the engine untouched
        if fruit is None:
            fruit = self._placement.place_fruit(snake, obstacles)

        self._snake = snake
        self._fruit = fruit
        self._obstacles = obstacles
        self._scorer.reset()
        self._scorer.set_score(score)
        self._rules.direction.reset(direction)
        self._accumulator = 0.0
        self._ticks = 0
        self._termination_reason = ""
        self._state = GameState.PLAYING
        return self.snapshot()

    def _end_game(self, reason: str) -> None:
        self._state = GameState.GAME_OVER
        self._termination_reason = reason
        self._best_scores.record(self._scorer.score)
        logger.info(
            "Game over (%s) after %d ticks, score %d, best %s",
            reason, self._ticks, self._scorer.score, list(self._best_scores.entries)
        )

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def apply(self, intent: Intent) -> bool:
        """
        Apply one player intent.

        Intents that make no sense in the current state are ignored.

        Args:
            intent: Move, TogglePause or Start.

        Returns:
            True if the intent changed anything.
        """
        if isinstance(intent, Move):
            if self._state is not GameState.PLAYING:
                logger.debug("Ignoring %s in state %s", intent, self._state.name)
                return False
            return self._rules.direction.request(intent.direction)

        if isinstance(intent, TogglePause):
            if self._state is GameState.PLAYING:
                self._state = GameState.PAUSED
            elif self._state is GameState.PAUSED:
                self._state = GameState.PLAYING
            else:
                logger.debug("Ignoring pause toggle in state %s", self._state.name)
                return False
            logger.info("State -> %s", self._state.name)
            return True

        if isinstance(intent, Start):
            if self._state not in (GameState.TITLE, GameState.GAME_OVER):
                logger.debug("Ignoring start in state %s", self._state.name)
                return False
            self.new_game()
            return True

        raise TypeError(f"Unknown intent: {intent!r}")

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def advance(self, elapsed: float) -> Optional[TickResult]:
        """
        Bank elapsed time and run a tick once it exceeds move_delay.

        Only Playing accumulates time, so a pause never leaves a tick owed.
        At most one tick runs per call.

        Args:
            elapsed: Seconds since the previous call.

        Returns:
            TickResult if a tick ran, else None.
        """
        if elapsed < 0:
            raise ValueError(f"elapsed must be non-negative, got {elapsed}")

        if self._state is not GameState.PLAYING:
            return None

        self._accumulator += elapsed
        if self._accumulator > self._move_delay:
            return self.tick()
        return None

    def tick(self) -> TickResult:
        """
        Move the snake one cell.

        Returns:
            TickResult with new state and metadata.
        """
        if self._state is not GameState.PLAYING:
            return TickResult(
                snapshot=self.snapshot(),
                terminated=self.is_over,
                termination_reason=self._termination_reason,
                ate_fruit=False,
                delta_score=0
            )

        score_before = self._scorer.score
        self._ticks += 1

        direction = self._rules.direction.commit()
        new_head = self._rules.movement.next_head(self._snake[0], direction)

        # The tail has not moved yet, so it still blocks
        collision = self._rules.termination.check_collision(
            new_head, self._snake, self._obstacles
        )
        if collision.terminated:
            self._end_game(collision.reason)
            return TickResult(
                snapshot=self.snapshot(),
                terminated=True,
                termination_reason=collision.reason,
                ate_fruit=False,
                delta_score=0
            )

        self._snake.insert(0, new_head)

        ate_fruit = new_head == self._fruit
        obstacles_before = len(self._obstacles)
        if ate_fruit:
            event = self._scorer.apply_fruit(new_head)
            logger.debug("%r", event)
            self._fruit = None
            try:
                self._fruit = self._placement.place_fruit(self._snake, self._obstacles)
                self._placement.place_obstacles(
                    self._obstacles_per_fruit,
                    self._snake,
                    self._fruit,
                    self._obstacles
                )
            except PlacementExhaustedError:
                self._end_game(TerminationRules.BOARD_FULL)
        else:
            self._snake.pop()

        self._accumulator = 0.0

        return TickResult(
            snapshot=self.snapshot(),
            terminated=self.is_over,
            termination_reason=self._termination_reason,
            ate_fruit=ate_fruit,
            delta_score=self._scorer.score - score_before,
            new_obstacles=self._obstacles[obstacles_before:]
        )

    def update(self, intents: Iterable[Intent], elapsed: float) -> GameSnapshot:
        """
        Run one frame: apply all intents in order, then advance the clock.

        A direction queued in the same frame as a tick is used by that tick.

        Args:
            intents: Intents collected since the previous frame.
            elapsed: Seconds since the previous frame.

        Returns:
            Snapshot after the frame.
        """
        for intent in intents:
            self.apply(intent)
        self.advance(elapsed)
        return self.snapshot()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        """Build current game state snapshot."""
        return self._snapshot_builder.build(
            state=self._state,
            snake=self._snake,
            fruit=self._fruit,
            obstacles=self._obstacles,
            score=self._scorer.score,
            best_scores=self._best_scores.entries,
            direction=self._rules.direction.committed,
            pending_direction=self._rules.direction.pending,
            ticks=self._ticks,
            termination_reason=self._termination_reason
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for logging and debugging."""
        return {
            "state": self._state.value,
            "score": self._scorer.score,
            "fruits_eaten": self._scorer.fruits_eaten,
            "length": len(self._snake),
            "obstacles": len(self._obstacles),
            "ticks": self._ticks,
            "best_scores": list(self._best_scores.entries),
            "terminated_reason": self._termination_reason,
        }
