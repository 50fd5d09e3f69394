"""
Tests for the simulation engine: state machine, ticks, collisions, fruit.
"""

import dataclasses

import pytest

from snake_game.snake_core.game import CoreGame
from snake_game.snake_core.grid import Direction
from snake_game.snake_core.intents import Move, Start, TogglePause
from snake_game.snake_core.placement import PlacementExhaustedError
from snake_game.snake_core.rng import RandomCellSampler, ScriptedCellSampler
from snake_game.snake_core.rules import TerminationRules
from snake_game.snake_core.state_snapshot import GameState


@pytest.fixture
def small_config(make_config):
    return make_config(10, 10)


@pytest.fixture
def sampler():
    return ScriptedCellSampler([(0, 0)])


@pytest.fixture
def game(small_config, sampler):
    return CoreGame(config=small_config, sampler=sampler)


@pytest.fixture
def playing(game):
    game.apply(Start())
    return game


def assert_disjoint(game):
    snake = list(game.snake)
    obstacles = list(game.obstacles)
    assert len(set(snake)) == len(snake)
    assert len(set(obstacles)) == len(obstacles)
    assert not set(snake) & set(obstacles)
    assert game.fruit not in snake
    assert game.fruit not in obstacles
    for cell in snake + obstacles + [game.fruit]:
        assert game.grid.contains(cell)


class TestStateMachine:
    """Test Title / Playing / Paused / GameOver transitions."""

    def test_initial_state_is_title(self, game):
        assert game.state is GameState.TITLE
        assert game.snake == ()

    def test_start_from_title(self, game):
        assert game.apply(Start())

        assert game.state is GameState.PLAYING
        assert game.snake == ((5, 5),)
        assert game.fruit == (0, 0)
        assert game.obstacles == ()
        assert game.score == 0
        assert game.direction is Direction.RIGHT
        assert game.pending_direction is Direction.RIGHT

    def test_start_ignored_while_playing(self, playing):
        playing.tick()
        assert not playing.apply(Start())
        assert playing.snake == ((6, 5),)

    def test_pause_toggle(self, playing):
        assert playing.apply(TogglePause())
        assert playing.state is GameState.PAUSED

        assert playing.apply(TogglePause())
        assert playing.state is GameState.PLAYING

    def test_pause_ignored_on_title(self, game):
        assert not game.apply(TogglePause())
        assert game.state is GameState.TITLE

    def test_move_ignored_on_title(self, game):
        assert not game.apply(Move(Direction.UP))
        assert game.pending_direction is Direction.RIGHT

    def test_unknown_intent(self, game):
        with pytest.raises(TypeError):
            game.apply("left")

    def test_restart_after_game_over(self, playing, sampler):
        playing.set_state([(5, 5)], Direction.RIGHT, fruit=(0, 0), obstacles=[(6, 5)], score=20)
        playing.tick()
        assert playing.state is GameState.GAME_OVER

        sampler.extend([(3, 3)])
        assert playing.apply(Start())

        assert playing.state is GameState.PLAYING
        assert playing.snake == ((5, 5),)
        assert playing.obstacles == ()
        assert playing.score == 0
        assert playing.fruit == (3, 3)
        assert playing.best_scores == (20,)

    def test_pause_ignored_after_game_over(self, playing):
        playing.set_state([(5, 5)], Direction.RIGHT, fruit=(0, 0), obstacles=[(6, 5)])
        playing.tick()
        assert not playing.apply(TogglePause())
        assert playing.state is GameState.GAME_OVER


class TestDirectionBuffer:
    """Test pending direction and the reversal guard."""

    def test_reversal_rejected(self, playing):
        assert not playing.apply(Move(Direction.LEFT))
        assert playing.pending_direction is Direction.RIGHT

    @pytest.mark.parametrize("direction", [Direction.UP, Direction.DOWN])
    def test_perpendicular_accepted(self, playing, direction):
        assert playing.apply(Move(direction))
        assert playing.pending_direction is direction
        assert playing.direction is Direction.RIGHT

    def test_guard_checks_committed_direction(self, playing):
        """Up then Left in one frame: Left is still the reverse of Right."""
        playing.apply(Move(Direction.UP))
        playing.apply(Move(Direction.LEFT))
        assert playing.pending_direction is Direction.UP

    def test_last_valid_request_wins(self, playing):
        playing.apply(Move(Direction.UP))
        playing.apply(Move(Direction.DOWN))
        assert playing.pending_direction is Direction.DOWN

    def test_commit_on_tick(self, playing):
        playing.apply(Move(Direction.UP))
        playing.tick()

        assert playing.direction is Direction.UP
        assert playing.snake == ((5, 4),)
        # Now Down is the reversal
        assert not playing.apply(Move(Direction.DOWN))


class TestMovement:
    """Test per-tick movement."""

    def test_scenario_a_single_segment(self, playing):
        """10x10, snake at (5,5) heading right: one tick moves it to (6,5)."""
        result = playing.tick()

        assert playing.snake == ((6, 5),)
        assert not result.terminated
        assert not result.ate_fruit
        assert result.delta_score == 0

    def test_constant_length(self, playing):
        playing.set_state([(5, 5), (4, 5), (3, 5)], Direction.RIGHT, fruit=(0, 0))

        playing.tick()

        assert playing.snake == ((6, 5), (5, 5), (4, 5))

    @pytest.mark.parametrize("start, direction, expected", [
        ((9, 5), Direction.RIGHT, (0, 5)),
        ((0, 5), Direction.LEFT, (9, 5)),
        ((5, 0), Direction.UP, (5, 9)),
        ((5, 9), Direction.DOWN, (5, 0)),
    ])
    def test_wrap_around(self, playing, start, direction, expected):
        playing.set_state([start], direction, fruit=(1, 1))
        playing.tick()
        assert playing.snake[0] == expected

    def test_ticks_counted(self, playing):
        playing.tick()
        playing.tick()
        assert playing.ticks == 2


class TestFruit:
    """Test fruit consumption, growth and obstacle accretion."""

    def test_scenario_b_eat_fruit(self, playing, sampler):
        """Eating grows the snake, scores 10 and adds two obstacles."""
        playing.set_state([(5, 5), (4, 5), (3, 5)], Direction.RIGHT, fruit=(6, 5))
        # Fruit: (6,5) is the new head -> rejected, then (0,0).
        # Obstacles: (0,0) is the fruit, second (9,9) repeats the first.
        sampler.extend([(6, 5), (0, 0), (0, 0), (9, 9), (9, 9), (8, 8)])

        result = playing.tick()

        assert playing.snake == ((6, 5), (5, 5), (4, 5), (3, 5))
        assert playing.score == 10
        assert playing.fruit == (0, 0)
        assert playing.obstacles == ((9, 9), (8, 8))
        assert result.ate_fruit
        assert result.delta_score == 10
        assert result.new_obstacles == [(9, 9), (8, 8)]
        assert_disjoint(playing)

    def test_obstacles_accumulate(self, playing, sampler):
        playing.set_state([(5, 5)], Direction.RIGHT, fruit=(6, 5), obstacles=[(1, 1)])
        sampler.extend([(7, 5), (2, 2), (3, 3)])

        playing.tick()

        assert playing.obstacles == ((1, 1), (2, 2), (3, 3))
        assert playing.snake == ((6, 5), (5, 5))

    def test_obstacles_per_fruit_from_config(self, make_config, config):
        custom = make_config(
            10, 10,
            obstacles=dataclasses.replace(config.obstacles, per_fruit=0)
        )
        sampler = ScriptedCellSampler([(7, 5)])
        game = CoreGame(config=custom, sampler=sampler)
        game.set_state([(5, 5)], Direction.RIGHT, fruit=(6, 5))

        game.tick()

        assert game.obstacles == ()
        assert game.fruit == (7, 5)


class TestCollisions:
    """Test fatal ticks."""

    def test_scenario_c_self_collision(self, playing):
        """Moving left from (5,5) onto the segment at (4,5) ends the game."""
        playing.set_state([(5, 5), (4, 5), (3, 5)], Direction.LEFT, fruit=(0, 0), score=30)

        result = playing.tick()

        assert result.terminated
        assert result.termination_reason == TerminationRules.SELF_COLLISION
        assert playing.state is GameState.GAME_OVER
        assert playing.best_scores == (30,)
        # Body untouched by the fatal tick
        assert playing.snake == ((5, 5), (4, 5), (3, 5))

    def test_tail_still_blocks(self, playing):
        """The tail cell counts even though it would move away this tick."""
        playing.set_state([(5, 5), (5, 6), (4, 6), (4, 5)], Direction.LEFT, fruit=(0, 0))

        result = playing.tick()

        assert result.terminated
        assert result.termination_reason == TerminationRules.SELF_COLLISION

    def test_obstacle_collision(self, playing):
        playing.set_state([(5, 5)], Direction.RIGHT, fruit=(0, 0), obstacles=[(6, 5)])

        result = playing.tick()

        assert result.terminated
        assert result.termination_reason == TerminationRules.OBSTACLE_COLLISION
        assert playing.is_over

    def test_collision_across_edge(self, playing):
        playing.set_state([(9, 5)], Direction.RIGHT, fruit=(1, 1), obstacles=[(0, 5)])
        assert playing.tick().terminated

    def test_tick_after_game_over_is_noop(self, playing):
        playing.set_state([(5, 5)], Direction.RIGHT, fruit=(0, 0), obstacles=[(6, 5)])
        playing.tick()

        result = playing.tick()

        assert result.terminated
        assert playing.snake == ((5, 5),)
        assert playing.best_scores == (0,)

    def test_best_scores_across_games(self, playing):
        scores = [40, 10, 70, 0, 30, 90, 20]
        for score in scores:
            playing.set_state([(5, 5)], Direction.RIGHT, fruit=(0, 0),
                              obstacles=[(6, 5)], score=score)
            playing.tick()

        assert playing.best_scores == (90, 70, 40, 30, 20)


class TestBoardFull:
    """Test placement exhaustion handling."""

    def test_no_room_for_fruit_after_eating(self, make_config):
        """2x1 board: eating the only fruit fills the grid."""
        game = CoreGame(config=make_config(2, 1), sampler=ScriptedCellSampler([(0, 0)]))
        game.apply(Start())
        assert game.snake == ((1, 0),)

        result = game.tick()

        assert result.ate_fruit
        assert result.terminated
        assert result.termination_reason == TerminationRules.BOARD_FULL
        assert game.state is GameState.GAME_OVER
        assert game.fruit is None
        assert game.score == 10
        assert game.best_scores == (10,)

    def test_no_room_for_obstacles(self, make_config):
        """3x1 board: fruit fits, the first obstacle does not."""
        game = CoreGame(config=make_config(3, 1), sampler=ScriptedCellSampler([(2, 0), (0, 0)]))
        game.apply(Start())
        assert game.snake == ((1, 0),)
        assert game.fruit == (2, 0)

        result = game.tick()

        assert result.terminated
        assert result.termination_reason == TerminationRules.BOARD_FULL
        assert game.fruit == (0, 0)
        assert game.obstacles == ()

    def test_single_cell_board(self, make_config):
        game = CoreGame(config=make_config(1, 1), sampler=ScriptedCellSampler([]))
        game.apply(Start())

        assert game.state is GameState.GAME_OVER
        assert game.termination_reason == TerminationRules.BOARD_FULL
        assert game.best_scores == (0,)


class TestTiming:
    """Test the elapsed-time accumulator."""

    def test_below_threshold_no_tick(self, playing):
        assert playing.advance(0.05) is None
        assert playing.snake == ((5, 5),)
        assert playing.accumulator == pytest.approx(0.05)

    def test_equal_to_threshold_no_tick(self, playing):
        """The accumulator must strictly exceed move_delay."""
        assert playing.advance(playing.move_delay) is None

    def test_tick_when_exceeded(self, playing):
        playing.advance(0.06)
        result = playing.advance(0.06)

        assert result is not None
        assert playing.snake == ((6, 5),)
        assert playing.accumulator == 0.0

    def test_one_tick_per_call(self, playing):
        playing.advance(10.0)
        assert playing.snake == ((6, 5),)
        assert playing.ticks == 1

    def test_negative_elapsed_rejected(self, playing):
        with pytest.raises(ValueError):
            playing.advance(-0.1)

    def test_no_time_on_title(self, game):
        assert game.advance(1.0) is None
        assert game.accumulator == 0.0

    def test_pause_freezes_accumulator(self, playing):
        playing.advance(0.08)
        playing.apply(TogglePause())

        assert playing.advance(5.0) is None
        assert playing.accumulator == pytest.approx(0.08)

        playing.apply(TogglePause())
        assert playing.advance(0.01) is None
        assert playing.advance(0.02) is not None
        assert playing.snake == ((6, 5),)


class TestUpdate:
    """Test the per-frame entry point."""

    def test_intents_before_tick(self, playing):
        """A turn queued in the same frame as a tick is used by it."""
        snapshot = playing.update([Move(Direction.UP)], 0.2)

        assert snapshot.snake == ((5, 4),)
        assert snapshot.direction is Direction.UP

    def test_start_from_title(self, game):
        snapshot = game.update([Start()], 0.0)
        assert snapshot.state is GameState.PLAYING

    def test_scenario_d_pause(self, playing):
        """Moves while paused are dropped; the pending turn survives."""
        playing.update([Move(Direction.UP), TogglePause()], 0.0)
        assert playing.state is GameState.PAUSED

        playing.update([Move(Direction.DOWN)], 1.0)
        assert playing.pending_direction is Direction.UP
        assert playing.snake == ((5, 5),)

        snapshot = playing.update([TogglePause()], 0.0)
        assert snapshot.state is GameState.PLAYING
        assert snapshot.pending_direction is Direction.UP


class TestInvariants:
    """Play whole games with a random sampler and check every tick."""

    @staticmethod
    def _steer(game):
        head = game.snake[0]
        fruit = game.fruit
        if fruit[0] != head[0]:
            wanted = Direction.RIGHT if fruit[0] > head[0] else Direction.LEFT
        else:
            wanted = Direction.DOWN if fruit[1] > head[1] else Direction.UP
        game.apply(Move(wanted))

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_random_games(self, small_config, seed):
        game = CoreGame(config=small_config, sampler=RandomCellSampler(seed))
        game.apply(Start())

        for _ in range(300):
            if game.state is not GameState.PLAYING:
                break
            self._steer(game)

            length = len(game.snake)
            score = game.score
            obstacles = len(game.obstacles)
            result = game.tick()

            if result.terminated:
                assert game.best_scores[0] >= 0
                break

            assert_disjoint(game)
            if result.ate_fruit:
                assert len(game.snake) == length + 1
                assert game.score == score + 10
                assert len(game.obstacles) == obstacles + 2
            else:
                assert len(game.snake) == length
                assert game.score == score
                assert len(game.obstacles) == obstacles


class TestSetState:
    """Test explicit state injection."""

    def test_rejects_overlap(self, playing):
        with pytest.raises(ValueError):
            playing.set_state([(5, 5), (4, 5)], fruit=(4, 5))

    def test_rejects_duplicate_segments(self, playing):
        with pytest.raises(ValueError):
            playing.set_state([(5, 5), (5, 5)], fruit=(0, 0))

    def test_rejects_off_grid(self, playing):
        with pytest.raises(ValueError):
            playing.set_state([(10, 5)], fruit=(0, 0))

    def test_rejects_empty_snake(self, playing):
        with pytest.raises(ValueError):
            playing.set_state([], fruit=(0, 0))

    def test_places_fruit_when_missing(self, playing, sampler):
        sampler.extend([(5, 5), (2, 2)])
        playing.set_state([(5, 5)])
        assert playing.fruit == (2, 2)

    def test_info(self, playing):
        info = playing.get_info()
        assert info["state"] == "playing"
        assert info["length"] == 1
        assert info["score"] == 0

    def test_full_board_leaves_state_untouched(self, make_config):
        game = CoreGame(config=make_config(2, 1), sampler=ScriptedCellSampler([(0, 0)]))
        game.apply(Start())
        assert game.snake == ((1, 0),)
        assert game.fruit == (0, 0)

        with pytest.raises(PlacementExhaustedError):
            game.set_state([(0, 0), (1, 0)])

        assert game.state is GameState.PLAYING
        assert game.snake == ((1, 0),)
        assert game.fruit == (0, 0)
        assert_disjoint(game)

    def test_negative_score_leaves_state_untouched(self, playing):
        with pytest.raises(ValueError):
            playing.set_state([(1, 1)], fruit=(2, 2), score=-10)

        assert playing.snake == ((5, 5),)
        assert playing.fruit == (0, 0)
