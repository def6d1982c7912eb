import random
import logging
from typing import Tuple, Dict, Optional, Any
import time
import json
import argparse
from dotenv import load_dotenv

from domain.constants import (
    VALID_MOVES,
    OPPOSITES,
    DIRECTION_OFFSETS,
    KEY_BINDINGS,
    GRID_SIZE,
    INITIAL_SPEED,
    MIN_SPEED,
    SPEED_STEP,
    SCORE_INCREMENT,
    INITIAL_DIRECTION,
    INITIAL_SNAKE,
)
from domain.snake import Snake
from domain.game_state import GameState
from players import Player, RandomPlayer

load_dotenv()

logger = logging.getLogger(__name__)


def direction_from_key(key: str) -> Optional[str]:
    """
    Map a browser key name (or a direction name) to a direction.
    Returns None for keys that do not steer the snake.
    """
    if key in KEY_BINDINGS:
        return KEY_BINDINGS[key]
    # Shift or Caps Lock turn "w" into "W"
    if key.lower() in KEY_BINDINGS:
        return KEY_BINDINGS[key.lower()]
    upper = key.upper()
    if upper in VALID_MOVES:
        return upper
    return None


class SnakeGame:
    """
    Manages:
      - The snake (a linked list of cells)
      - Direction
      - Food
      - Score and speed
      - Idle / Playing / GameOver state
    """
    def __init__(self, grid_size: int = GRID_SIZE):
        self.grid_size = grid_size
        self.reset()

    def reset(self):
        """
        Throw the old snake away and start over in the Idle state.
        Does not start the game.
        """
        self.snake = Snake(INITIAL_SNAKE)
        self.direction = INITIAL_DIRECTION
        self.score = 0
        self.speed = INITIAL_SPEED
        self.tick_number = 0
        self.is_playing = False
        self.game_over = False
        self.food: Tuple[int, int] = self._random_free_cell()
        logger.debug("Game reset, food at %s", self.food)

    # -------------------------------
    # Controls
    # -------------------------------

    def start(self) -> bool:
        """Idle -> Playing. Returns whether the game is now running."""
        if self.game_over:
            return False
        self.is_playing = True
        return True

    def pause(self):
        """Playing -> Idle, keeping the board as it is."""
        self.is_playing = False

    def toggle(self) -> bool:
        if self.is_playing:
            self.pause()
        else:
            self.start()
        return self.is_playing

    def change_direction(self, direction: str) -> bool:
        """
        Request a new heading. Ignored unless playing, and ignored when it
        would reverse the snake into itself. Returns whether it was applied.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {direction!r}")
        if not self.is_playing:
            return False
        if direction == OPPOSITES[self.direction]:
            return False
        self.direction = direction
        return True

    def set_food(self, cell: Tuple[int, int]):
        """Place the food at a given cell instead of a random one."""
        x, y = cell
        if not self._in_bounds(x, y):
            raise ValueError(f"Food out of bounds at {cell}.")
        if self.snake.segments.contains(cell):
            raise ValueError(f"Food cannot be placed on the snake at {cell}.")
        self.food = (x, y)

    # -------------------------------
    # Tick
    # -------------------------------

    def tick(self):
        """
        Advance the game one step:
          1) Compute the next head from the current direction
          2) Wall or self collision ends the game
          3) Otherwise add the new head
          4) Food: score, speed up, new food, keep the tail
          5) No food: drop the tail
        """
        if not self.is_playing or self.game_over:
            return

        segments = self.snake.segments
        head = segments.get_head()
        if head is None:
            return

        dx, dy = DIRECTION_OFFSETS[self.direction]
        new_x, new_y = head[0] + dx, head[1] + dy

        if not self._in_bounds(new_x, new_y):
            self.end_game("wall")
            return

        if segments.contains((new_x, new_y)):
            self.end_game("self")
            return

        segments.add_to_head((new_x, new_y))

        if (new_x, new_y) == self.food:
            self.score += SCORE_INCREMENT
            self.speed = max(MIN_SPEED, self.speed - SPEED_STEP)
            self.food = self._random_free_cell()
            logger.debug(
                "Ate food at %s: score=%d speed=%d next food=%s",
                (new_x, new_y), self.score, self.speed, self.food
            )
        else:
            segments.remove_tail()

        self.tick_number += 1

    def end_game(self, reason: str):
        self.is_playing = False
        self.game_over = True
        self.snake.alive = False
        self.snake.death_reason = reason
        self.snake.death_round = self.tick_number
        logger.info(
            "Game Over: %s collision at tick %d. Score %d, length %d.",
            reason, self.tick_number, self.score, len(self.snake)
        )

    # -------------------------------
    # Helpers
    # -------------------------------

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.grid_size and 0 <= y < self.grid_size

    def _random_free_cell(self) -> Tuple[int, int]:
        """
        Return a random cell (x, y) not occupied by the snake.
        Simple rejection sampling; the board never fills up in practice.
        """
        while True:
            x = random.randint(0, self.grid_size - 1)
            y = random.randint(0, self.grid_size - 1)
            if not self.snake.segments.contains((x, y)):
                return (x, y)

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            tick_number=self.tick_number,
            snake_positions=self.snake.positions,
            food=self.food,
            score=self.score,
            speed=self.speed,
            direction=self.direction,
            is_playing=self.is_playing,
            game_over=self.game_over,
            death_reason=self.snake.death_reason,
            width=self.grid_size,
            height=self.grid_size
        )

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        state = self.get_current_state()
        print("\n" + state.print_board())
        print(state.print_linked_list() + "\n")


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(game_params: argparse.Namespace, player: Optional[Player] = None) -> Dict[str, Any]:
    """
    Runs a single headless game with a player choosing the moves.

    Args:
        game_params: An object (like argparse.Namespace) containing
                     max_ticks, delay and quiet.
        player: Direction source; a RandomPlayer when omitted.

    Returns:
        A dictionary summarizing the game.
    """
    game = SnakeGame()
    player = player or RandomPlayer()
    max_ticks = getattr(game_params, 'max_ticks', 500)
    delay = getattr(game_params, 'delay', 0.0)
    quiet = getattr(game_params, 'quiet', False)

    game.start()
    while game.is_playing and game.tick_number < max_ticks:
        game.change_direction(player.get_move(game.get_current_state()))
        game.tick()
        if not quiet:
            game.print_board()
            print(f"Tick {game.tick_number}: score={game.score} length={len(game.snake)} speed={game.speed}ms")
        if delay:
            time.sleep(delay)

    state = game.get_current_state()
    return {
        "ticks": state.tick_number,
        "score": state.score,
        "length": state.length,
        "level": state.level,
        "game_over": state.game_over,
        "death_reason": state.death_reason,
    }


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Run a headless Linked List Snake game with a random player."
    )
    parser.add_argument("--max_ticks", type=int, required=False, default=500,
                        help="Stop after this many ticks if the snake is still alive")
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Random seed for food placement and moves")
    parser.add_argument("--delay", type=float, required=False, default=0.0,
                        help="Seconds to wait between ticks")
    parser.add_argument("--quiet", action="store_true",
                        help="Only print the final summary")

    args = parser.parse_args()

    if args.max_ticks < 1:
        raise ValueError("--max_ticks must be at least 1.")

    if args.seed is not None:
        random.seed(args.seed)

    result = run_simulation(args)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
