"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Tuple, Optional

from .constants import GRID_SIZE, INITIAL_SPEED


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        tick_number: how many moves have been committed (0-based)
        snake_positions: list of (x, y), head first
        food: (x, y) of the food cell
        score: points collected so far
        speed: tick interval in milliseconds
        direction: current heading
        is_playing: whether the timer is running
        game_over: whether the snake has died
        death_reason: 'wall', 'self' or None
        width, height: board dimensions
    """

    def __init__(
        self,
        tick_number: int,
        snake_positions: List[Tuple[int, int]],
        food: Optional[Tuple[int, int]],
        score: int,
        speed: int,
        direction: str,
        is_playing: bool,
        game_over: bool,
        death_reason: Optional[str] = None,
        width: int = GRID_SIZE,
        height: int = GRID_SIZE
    ):
        self.tick_number = tick_number
        self.snake_positions = snake_positions
        self.food = food
        self.score = score
        self.speed = speed
        self.direction = direction
        self.is_playing = is_playing
        self.game_over = game_over
        self.death_reason = death_reason
        self.width = width
        self.height = height

    @property
    def head(self) -> Optional[Tuple[int, int]]:
        return self.snake_positions[0] if self.snake_positions else None

    @property
    def length(self) -> int:
        return len(self.snake_positions)

    @property
    def level(self) -> int:
        """One level per 5 ms shaved off the initial tick interval."""
        return (INITIAL_SPEED - self.speed) // 5 + 1

    @property
    def status(self) -> str:
        if self.game_over:
            return "game_over"
        if self.is_playing:
            return "playing"
        return "idle"

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        o = snake body
        H = snake head
        (0,0) is the top left, matching the browser grid
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake_positions):
            board[y][x] = 'H' if pos_idx == 0 else 'o'

        result = []
        for y in range(self.height):
            result.append(f"{y:2d} {' '.join(board[y])}")

        # x-axis labels use the last digit so columns stay aligned
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def print_linked_list(self) -> str:
        """Render the body the way the list is linked: HEAD -> ... -> null."""
        nodes = [f"({x},{y})" for x, y in self.snake_positions]
        return " -> ".join(nodes + ["null"])

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form consumed by the browser renderer."""
        return {
            "tick_number": self.tick_number,
            "snake": [list(cell) for cell in self.snake_positions],
            "head": list(self.head) if self.head is not None else None,
            "food": list(self.food) if self.food is not None else None,
            "score": self.score,
            "length": self.length,
            "speed": self.speed,
            "level": self.level,
            "direction": self.direction,
            "is_playing": self.is_playing,
            "game_over": self.game_over,
            "death_reason": self.death_reason,
            "status": self.status,
            "width": self.width,
            "height": self.height,
            "board_state": self.print_board(),
            "linked_list": self.print_linked_list(),
        }

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, status={self.status}, "
            f"length={self.length}, food={self.food}, score={self.score}>"
        )
