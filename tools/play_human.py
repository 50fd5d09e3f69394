"""
Human Play Mode
================

Play Snake interactively in a pygame window.

Controls:
    - Arrows / WASD / ZQSD: Steer
    - Space: Pause / resume
    - Any key or click: Start (title and game-over screens)
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--move-delay SECONDS]
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from typing import List, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from snake_game.snake_core.config_loader import load_config, GameConfig
from snake_game.snake_core.game import CoreGame
from snake_game.snake_core.grid import Direction
from snake_game.snake_core.intents import Intent, Move, Start, TogglePause
from snake_game.snake_core.state_snapshot import GameSnapshot, GameState


class InputAdapter:
    """
    Translates raw pygame events into engine intents.

    Which intent a key maps to depends on the engine state: on the title and
    game-over screens any key or click starts a game.
    """

    def __init__(self):
        self._key_directions = {
            pygame.K_UP: Direction.UP,
            pygame.K_w: Direction.UP,
            pygame.K_z: Direction.UP,
            pygame.K_DOWN: Direction.DOWN,
            pygame.K_s: Direction.DOWN,
            pygame.K_LEFT: Direction.LEFT,
            pygame.K_a: Direction.LEFT,
            pygame.K_q: Direction.LEFT,
            pygame.K_RIGHT: Direction.RIGHT,
            pygame.K_d: Direction.RIGHT,
        }

    def translate(self, event, state: GameState) -> Optional[Intent]:
        """Map one event to an intent, or None."""
        if state in (GameState.TITLE, GameState.GAME_OVER):
            if event.type == pygame.MOUSEBUTTONDOWN:
                return Start()
            if event.type == pygame.KEYDOWN and event.key != pygame.K_ESCAPE:
                return Start()
            return None

        if event.type != pygame.KEYDOWN:
            return None
        if event.key == pygame.K_SPACE:
            return TogglePause()
        direction = self._key_directions.get(event.key)
        if direction is not None and state is GameState.PLAYING:
            return Move(direction)
        return None


class SnakeRenderer:
    """
    Draws snapshots into a pygame surface.
    Top bar with score and pause hint, then the tile grid.
    """

    def __init__(self, config: GameConfig):
        """Initialize renderer with window geometry from the config."""
        self._config = config
        self._tile = config.board.tile_size
        self._top_bar = config.board.top_bar_height
        self._window_width = config.board.width
        self._window_height = config.board.height

        display = config.display
        self._bg = display.background
        self._bar = display.top_bar
        self._snake = display.snake
        self._head = display.snake_head
        self._fruit = display.fruit
        self._obstacle = display.obstacle
        self._text = display.text
        self._highlight = display.highlight

        # Fonts
        pygame.font.init()
        self._font_huge = pygame.font.Font(None, 60)
        self._font_large = pygame.font.Font(None, 40)
        self._font_medium = pygame.font.Font(None, 30)
        self._font_small = pygame.font.Font(None, 24)

    @property
    def window_size(self):
        return (self._window_width, self._window_height)

    def render(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        """Render the complete game scene."""
        screen.fill(self._bg)
        self._draw_top_bar(screen, snapshot)

        if snapshot.state is GameState.TITLE:
            self._draw_title(screen)
        elif snapshot.state is GameState.GAME_OVER:
            self._draw_game_over(screen, snapshot)
        else:
            self._draw_board(screen, snapshot)
            if snapshot.state is GameState.PAUSED:
                self._draw_centered(screen, "PAUSE", self._font_huge, self._text,
                                    self._window_height // 2)

    def _draw_top_bar(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        pygame.draw.rect(screen, self._bar, (0, 0, self._window_width, self._top_bar))

        score = self._font_small.render(f"Score: {snapshot.score}", True, self._text)
        screen.blit(score, (5, 5))

        if snapshot.state is GameState.PAUSED:
            hint_text = "Press SPACE to resume"
        else:
            hint_text = "Press SPACE to pause"
        hint = self._font_small.render(hint_text, True, self._text)
        screen.blit(hint, (self._window_width - hint.get_width() - 10, 5))

    def _draw_board(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        for cell in snapshot.obstacles:
            self._draw_tile(screen, cell, self._obstacle)
        if snapshot.fruit is not None:
            self._draw_tile(screen, snapshot.fruit, self._fruit)
        for cell in snapshot.snake[1:]:
            self._draw_tile(screen, cell, self._snake)
        if snapshot.snake:
            self._draw_tile(screen, snapshot.snake[0], self._head)

    def _draw_tile(self, screen: pygame.Surface, cell, color) -> None:
        x, y = cell
        rect = pygame.Rect(
            x * self._tile,
            self._top_bar + y * self._tile,
            self._tile - 2,
            self._tile - 2
        )
        pygame.draw.rect(screen, color, rect)

    def _draw_title(self, screen: pygame.Surface) -> None:
        mid = self._window_height // 2
        self._draw_centered(screen, "SNAKE", self._font_huge, self._text, mid - 60)
        self._draw_centered(screen, "Press any key or click to start",
                            self._font_large, self._highlight, mid + 20)
        self._draw_centered(screen, "Keys: Z/W (up), Q/A (left), S (down), D (right)",
                            self._font_small, self._text, mid + 70)
        self._draw_centered(screen, "Arrow keys work too",
                            self._font_small, self._text, mid + 100)

    def _draw_game_over(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        mid = self._window_height // 2
        self._draw_centered(screen, "GAME OVER", self._font_huge, self._text, mid - 100)
        self._draw_centered(screen, "TOP 5 SCORES:", self._font_medium, self._highlight, mid)

        for i, best in enumerate(snapshot.best_scores):
            self._draw_centered(screen, f"{i + 1}. {best}", self._font_medium,
                                self._highlight, mid + 30 + i * 26)

        self._draw_centered(screen, "Press any key or click to restart",
                            self._font_small, self._text, self._window_height - 100)

    def _draw_centered(self, screen, text: str, font, color, y: int) -> None:
        surface = font.render(text, True, color)
        screen.blit(surface, ((self._window_width - surface.get_width()) // 2, y))


class HumanPlayer:
    """
    Human-playable Snake game.

    Each frame: translate pending events into intents, feed them and the
    frame time to the engine, then draw the resulting snapshot.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        target_fps: Optional[int] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps if target_fps is not None else config.display.fps

        # Initialize game
        self._game = CoreGame(config=config, seed=seed)

        # Initialize pygame
        pygame.init()
        self._renderer = SnakeRenderer(config)
        self._screen = pygame.display.set_mode(self._renderer.window_size)
        pygame.display.set_caption("Snake")
        self._clock = pygame.time.Clock()
        self._input = InputAdapter()

        self._running = True

    def run(self) -> int:
        """Run the game loop. Returns the best score of the session."""
        print("=== Snake ===")
        print("Arrows/WASD/ZQSD to steer, SPACE to pause, ESC to quit")
        print()

        previous_state = self._game.state
        while self._running:
            elapsed = self._clock.tick(self._target_fps) / 1000.0
            intents = self._collect_intents()
            snapshot = self._game.update(intents, elapsed)

            if snapshot.state is GameState.GAME_OVER and previous_state is not GameState.GAME_OVER:
                print(f"GAME OVER - Score: {snapshot.score} ({snapshot.termination_reason})")
                print(f"Best scores: {list(snapshot.best_scores)}")
            previous_state = snapshot.state

            self._renderer.render(self._screen, snapshot)
            pygame.display.flip()

        pygame.quit()
        best = self._game.best_scores
        return best[0] if best else 0

    def _collect_intents(self) -> List[Intent]:
        """Drain the pygame queue, in arrival order."""
        intents: List[Intent] = []
        state = self._game.state
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._running = False
            else:
                intent = self._input.translate(event, state)
                if intent is None:
                    continue
                intents.append(intent)
                # Later events in the same frame see the state this intent leads to
                state = self._predict_state(state, intent)
        return intents

    @staticmethod
    def _predict_state(state: GameState, intent: Intent) -> GameState:
        if isinstance(intent, Start):
            return GameState.PLAYING
        if isinstance(intent, TogglePause):
            return GameState.PAUSED if state is GameState.PLAYING else GameState.PLAYING
        return state


def main():
    parser = argparse.ArgumentParser(description="Play Snake interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=None, help="Target FPS")
    parser.add_argument("--move-delay", type=float, default=None,
                        help="Seconds between snake moves")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--verbose", action="store_true", help="Log engine events")

    args = parser.parse_args()
    if args.move_delay is not None and args.move_delay <= 0:
        parser.error("--move-delay must be positive")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )

    try:
        config = load_config(args.config)
        if args.move_delay is not None:
            config = dataclasses.replace(
                config,
                timing=dataclasses.replace(config.timing, move_delay=args.move_delay)
            )
        player = HumanPlayer(config=config, seed=args.seed, target_fps=args.fps)
        best = player.run()
        print(f"\nBest Score: {best}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
