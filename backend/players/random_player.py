"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List

from domain.constants import DIRECTION_OFFSETS, OPPOSITES, VALID_MOVES
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids walls, its own body
    and reversing into itself.
    """

    def get_move(self, game_state: GameState) -> str:
        snake_positions = game_state.snake_positions
        head_x, head_y = snake_positions[0]

        valid_moves: List[str] = []
        for move, (dx, dy) in DIRECTION_OFFSETS.items():
            if move == OPPOSITES[game_state.direction]:
                continue

            new_x, new_y = head_x + dx, head_y + dy

            # Check wall collisions
            if (new_x < 0 or new_x >= game_state.width or
                new_y < 0 or new_y >= game_state.height):
                continue

            # The tail counts: the body is checked before the tail moves
            if (new_x, new_y) in snake_positions:
                continue

            valid_moves.append(move)

        # If no valid moves, just return a random move (we'll die anyway)
        if not valid_moves:
            return random.choice(sorted(VALID_MOVES))

        return random.choice(valid_moves)
