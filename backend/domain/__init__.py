"""
Domain entities for the Linked List Snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (timers, HTTP, rendering).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES, GRID_SIZE,
    INITIAL_SPEED, MIN_SPEED, SPEED_STEP, SCORE_INCREMENT,
)
from .linked_list import ListNode, LinkedList
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES', 'GRID_SIZE',
    'INITIAL_SPEED', 'MIN_SPEED', 'SPEED_STEP', 'SCORE_INCREMENT',
    'ListNode', 'LinkedList',
    'Snake',
    'GameState',
]
