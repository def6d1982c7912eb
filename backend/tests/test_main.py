"""
Tests for main.py - Snake game engine.

These tests cover the tick algorithm, the play state machine, direction
handling, food placement and the headless simulation.
"""

import argparse
import pytest
import sys
import os
from unittest.mock import Mock, patch

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import (
    SnakeGame,
    direction_from_key,
    run_simulation,
    main,
)
from domain import Snake, GameState
from domain.constants import (
    UP, DOWN, LEFT, RIGHT,
    VALID_MOVES,
    GRID_SIZE,
    INITIAL_SNAKE,
    INITIAL_SPEED,
    MIN_SPEED,
)
from players import RandomPlayer


def playing_game(positions=None, direction=RIGHT, food=(0, 0)):
    """A started game with a chosen body, heading and food cell."""
    game = SnakeGame()
    if positions is not None:
        game.snake = Snake(positions)
    game.direction = direction
    game.set_food(food)
    game.start()
    return game


class TestSnake:
    """Tests for the Snake class."""

    def test_snake_keeps_head_first_order(self):
        """Snake positions come back head first."""
        snake = Snake([(5, 5), (4, 5), (3, 5)])
        assert snake.positions == [(5, 5), (4, 5), (3, 5)]
        assert snake.head == (5, 5)
        assert len(snake) == 3

    def test_snake_initial_attributes(self):
        """A new snake is alive with no death info."""
        snake = Snake([(5, 5)])
        assert snake.alive is True
        assert snake.death_reason is None
        assert snake.death_round is None


class TestSnakeGameInitialization:
    """Tests for a fresh SnakeGame."""

    def test_game_initialization(self):
        """SnakeGame starts idle with the seeded snake."""
        game = SnakeGame()

        assert game.snake.positions == INITIAL_SNAKE
        assert game.direction == RIGHT
        assert game.score == 0
        assert game.speed == INITIAL_SPEED
        assert game.is_playing is False
        assert game.game_over is False
        assert game.tick_number == 0

    def test_initial_food_not_on_snake(self):
        """Food is placed on a free cell."""
        game = SnakeGame()
        assert game.food not in game.snake.positions
        x, y = game.food
        assert 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


class TestTick:
    """Tests for SnakeGame.tick()."""

    def test_move_without_food(self):
        """Moving right drops the tail and keeps the length."""
        game = playing_game(food=(0, 0))

        game.tick()

        assert game.snake.positions == [(8, 10), (7, 10), (6, 10)]
        assert len(game.snake) == 3
        assert game.score == 0
        assert game.tick_number == 1

    def test_eating_food(self):
        """Eating grows the snake, scores and speeds up."""
        game = playing_game(food=(8, 10))

        game.tick()

        assert game.snake.positions == [(8, 10), (7, 10), (6, 10), (5, 10)]
        assert game.score == 10
        assert game.speed == 90
        assert len(game.snake) == 4
        assert game.food not in game.snake.positions

    def test_eating_relocates_food_to_free_cell(self):
        """New food is sampled until it misses the snake."""
        game = playing_game(food=(8, 10))

        # first sample hits the new head, second is free
        with patch('main.random.randint', side_effect=[8, 10, 3, 4]):
            game.tick()

        assert game.food == (3, 4)

    def test_wall_collision(self):
        """Leaving the board ends the game."""
        game = playing_game([(0, 10), (1, 10), (2, 10)], direction=LEFT, food=(5, 5))

        game.tick()

        assert game.game_over is True
        assert game.is_playing is False
        assert game.snake.alive is False
        assert game.snake.death_reason == "wall"
        assert game.snake.positions == [(0, 10), (1, 10), (2, 10)]

    @pytest.mark.parametrize("head,direction", [
        ((GRID_SIZE - 1, 5), RIGHT),
        ((5, 0), UP),
        ((5, GRID_SIZE - 1), DOWN),
    ])
    def test_wall_collision_every_side(self, head, direction):
        """All four walls are fatal."""
        game = playing_game([head], direction=direction, food=(10, 10))

        game.tick()

        assert game.game_over is True
        assert game.snake.death_reason == "wall"

    def test_self_collision(self):
        """Running into the body ends the game."""
        game = playing_game([(5, 5), (5, 6), (5, 7), (5, 8)], direction=DOWN, food=(0, 0))

        game.tick()

        assert game.game_over is True
        assert game.is_playing is False
        assert game.snake.death_reason == "self"
        assert game.snake.death_round == 0
        assert len(game.snake) == 4

    def test_tail_cell_counts_as_collision(self):
        """The tail is checked before it moves away."""
        game = playing_game([(5, 5), (6, 5), (6, 6), (5, 6)], direction=DOWN, food=(0, 0))

        game.tick()

        assert game.game_over is True
        assert game.snake.death_reason == "self"

    def test_up_decreases_y(self):
        """UP moves towards row 0."""
        game = playing_game(direction=UP, food=(0, 0))
        game.tick()
        assert game.snake.head == (7, 9)

    def test_tick_ignored_when_not_playing(self):
        """Idle games do not move."""
        game = SnakeGame()
        game.tick()
        assert game.snake.positions == INITIAL_SNAKE
        assert game.tick_number == 0

    def test_tick_on_empty_snake_is_noop(self):
        """An empty body never raises."""
        game = playing_game(food=(0, 0))
        game.snake.segments.clear()

        game.tick()

        assert game.game_over is False
        assert game.tick_number == 0

    def test_speed_floor(self):
        """Speed never drops below the minimum."""
        game = playing_game(food=(8, 10))
        game.speed = MIN_SPEED + 5

        game.tick()

        assert game.speed == MIN_SPEED

    def test_length_tracks_food_eaten(self):
        """Length is 3 plus the number of foods eaten."""
        game = playing_game(food=(0, 0))
        eaten = 0

        for step in range(10):
            if step % 2 == 0:
                head_x, head_y = game.snake.head
                game.set_food((head_x + 1, head_y))
                eaten += 1
            else:
                game.set_food((0, 0))
            game.tick()

            assert len(game.snake) == 3 + eaten
            assert len(game.snake.segments.to_array()) == len(game.snake)

        assert game.score == eaten * 10
        assert game.speed == INITIAL_SPEED - eaten * 10


class TestDirection:
    """Tests for change_direction()."""

    def test_reversal_is_rejected(self):
        """The exact opposite heading is ignored."""
        game = playing_game(food=(0, 0))

        assert game.change_direction(LEFT) is False
        assert game.direction == RIGHT

    def test_turn_is_accepted(self):
        """Perpendicular turns are applied."""
        game = playing_game(food=(0, 0))

        assert game.change_direction(UP) is True
        assert game.direction == UP
        assert game.change_direction(DOWN) is False
        assert game.direction == UP

    def test_latest_request_wins(self):
        """Only the last accepted request before the tick counts."""
        game = playing_game(food=(0, 0))

        game.change_direction(UP)
        game.change_direction(RIGHT)
        game.tick()

        assert game.snake.head == (8, 10)

    def test_ignored_when_not_playing(self):
        """Requests while idle are dropped."""
        game = SnakeGame()

        assert game.change_direction(UP) is False
        assert game.direction == RIGHT

    def test_invalid_direction_raises(self):
        """Unknown direction names are a programming error."""
        game = playing_game(food=(0, 0))

        with pytest.raises(ValueError):
            game.change_direction("NORTH")

    @pytest.mark.parametrize("key,expected", [
        ("ArrowUp", UP),
        ("ArrowDown", DOWN),
        ("ArrowLeft", LEFT),
        ("ArrowRight", RIGHT),
        ("w", UP),
        ("W", UP),
        ("A", LEFT),
        ("S", DOWN),
        ("D", RIGHT),
        ("left", LEFT),
        ("RIGHT", RIGHT),
        ("Enter", None),
        ("x", None),
    ])
    def test_direction_from_key(self, key, expected):
        """Browser key names map to directions."""
        assert direction_from_key(key) == expected


class TestStateMachine:
    """Tests for start / pause / toggle / reset."""

    def test_start_and_pause(self):
        """Pause keeps the board and stops ticking."""
        game = playing_game(food=(0, 0))
        game.tick()
        game.pause()

        assert game.is_playing is False
        assert game.game_over is False
        game.tick()
        assert game.snake.head == (8, 10)

        game.start()
        game.tick()
        assert game.snake.head == (9, 10)

    def test_toggle(self):
        """toggle() flips between playing and paused."""
        game = SnakeGame()

        assert game.toggle() is True
        assert game.is_playing is True
        assert game.toggle() is False
        assert game.is_playing is False

    def test_cannot_start_after_game_over(self):
        """GameOver only leaves through reset()."""
        game = playing_game([(0, 10)], direction=LEFT, food=(5, 5))
        game.tick()

        assert game.start() is False
        assert game.is_playing is False
        assert game.toggle() is False

    def test_reset_restores_initial_state(self):
        """reset() rebuilds the snake and returns to idle."""
        game = playing_game(food=(8, 10))
        game.tick()
        game.change_direction(UP)
        game.end_game("wall")

        game.reset()

        assert game.snake.positions == INITIAL_SNAKE
        assert game.snake.alive is True
        assert game.direction == RIGHT
        assert game.score == 0
        assert game.speed == INITIAL_SPEED
        assert game.tick_number == 0
        assert game.is_playing is False
        assert game.game_over is False
        assert game.food not in game.snake.positions

    def test_reset_while_playing_does_not_autostart(self):
        """A reset game waits for start()."""
        game = playing_game(food=(0, 0))
        game.reset()
        assert game.is_playing is False


class TestFood:
    """Tests for food placement."""

    def test_random_free_cell_never_on_snake(self):
        """1000 placements never land on the body."""
        body = [(x, 10) for x in range(15, 0, -1)]
        game = SnakeGame()
        game.snake = Snake(body)
        occupied = set(body)

        for _ in range(1000):
            cell = game._random_free_cell()
            assert cell not in occupied

    def test_set_food(self):
        """set_food() places the food where asked."""
        game = SnakeGame()
        game.set_food((1, 1))
        assert game.food == (1, 1)

    def test_set_food_out_of_bounds_raises(self):
        """set_food() rejects cells off the board."""
        game = SnakeGame()
        with pytest.raises(ValueError):
            game.set_food((GRID_SIZE, 0))

    def test_set_food_on_snake_raises(self):
        """set_food() rejects cells under the snake."""
        game = SnakeGame()
        with pytest.raises(ValueError):
            game.set_food(INITIAL_SNAKE[1])


class TestGameState:
    """Tests for the GameState snapshot."""

    def test_get_current_state(self):
        """get_current_state() returns a GameState snapshot."""
        game = playing_game(food=(2, 3))
        state = game.get_current_state()

        assert isinstance(state, GameState)
        assert state.snake_positions == INITIAL_SNAKE
        assert state.head == (7, 10)
        assert state.food == (2, 3)
        assert state.length == 3
        assert state.status == "playing"

    def test_snapshot_is_detached(self):
        """Later ticks do not change an earlier snapshot."""
        game = playing_game(food=(0, 0))
        state = game.get_current_state()
        game.tick()
        assert state.snake_positions == INITIAL_SNAKE

    @pytest.mark.parametrize("speed,level", [(100, 1), (90, 3), (50, 11), (30, 15)])
    def test_level(self, speed, level):
        """Level rises by one per 5 ms of speed-up."""
        state = GameState(0, [(1, 1)], (2, 2), 0, speed, RIGHT, False, False)
        assert state.level == level

    def test_to_dict(self):
        """to_dict() is JSON friendly."""
        game = playing_game(food=(2, 3))
        data = game.get_current_state().to_dict()

        assert data["snake"] == [[7, 10], [6, 10], [5, 10]]
        assert data["head"] == [7, 10]
        assert data["food"] == [2, 3]
        assert data["length"] == 3
        assert data["speed"] == 100
        assert data["level"] == 1
        assert data["is_playing"] is True
        assert data["game_over"] is False
        assert data["status"] == "playing"
        assert data["linked_list"] == "(7,10) -> (6,10) -> (5,10) -> null"

    def test_print_board(self):
        """print_board() marks head, body and food."""
        state = GameState(0, [(1, 0), (0, 0)], (2, 1), 0, 100, RIGHT, False, False, width=3, height=2)
        lines = state.print_board().split("\n")

        assert lines[0] == " 0 o H ."
        assert lines[1] == " 1 . . F"

    def test_status_game_over(self):
        """Game over wins over the playing flag."""
        state = GameState(4, [(1, 1)], (2, 2), 0, 100, RIGHT, False, True, death_reason="wall")
        assert state.status == "game_over"
        assert "status=game_over" in repr(state)


class TestRandomPlayer:
    """Tests for the RandomPlayer class."""

    def test_random_player_returns_valid_move(self):
        """RandomPlayer.get_move() returns a valid direction."""
        state = SnakeGame().get_current_state()
        assert RandomPlayer().get_move(state) in VALID_MOVES

    def test_random_player_avoids_walls_and_reversal(self):
        """In the top-left corner heading UP only RIGHT is safe."""
        state = GameState(0, [(0, 0), (0, 1), (0, 2)], (5, 5), 0, 100, UP, True, False)

        for _ in range(20):
            assert RandomPlayer().get_move(state) == RIGHT

    def test_random_player_avoids_body(self):
        """RandomPlayer never steers into its own body."""
        state = GameState(0, [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)], (9, 9), 0, 100, UP, True, False)

        for _ in range(20):
            assert RandomPlayer().get_move(state) in {UP, LEFT}


class TestSimulation:
    """Tests for run_simulation() and the CLI."""

    def test_run_simulation_respects_max_ticks(self):
        """The game stops after max_ticks when the snake survives."""
        player = Mock()
        player.get_move = Mock(side_effect=[UP, RIGHT, DOWN])
        params = argparse.Namespace(max_ticks=3, delay=0.0, quiet=True)

        result = run_simulation(params, player=player)

        assert result["ticks"] == 3
        assert result["game_over"] is False
        assert result["death_reason"] is None
        assert player.get_move.call_count == 3

    def test_run_simulation_until_wall(self):
        """A player that never turns hits the right wall."""
        player = Mock()
        player.get_move = Mock(return_value=RIGHT)
        params = argparse.Namespace(max_ticks=100, delay=0.0, quiet=True)

        with patch('main.random.randint', return_value=0):
            result = run_simulation(params, player=player)

        assert result["game_over"] is True
        assert result["death_reason"] == "wall"
        assert result["ticks"] == GRID_SIZE - 1 - 7

    def test_main_prints_summary(self, capsys):
        """The CLI prints a JSON summary."""
        argv = ["main.py", "--max_ticks", "5", "--seed", "1", "--quiet"]
        with patch.object(sys, "argv", argv):
            main()

        out = capsys.readouterr().out
        assert "Simulation Result Summary" in out
        assert '"score"' in out

    def test_main_rejects_bad_max_ticks(self):
        """--max_ticks must be positive."""
        with patch.object(sys, "argv", ["main.py", "--max_ticks", "0"]):
            with pytest.raises(ValueError):
                main()
