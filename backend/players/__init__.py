"""
Player implementations for Linked List Snake.

Players drive the snake in headless games, standing in for the keyboard.
"""

from .base import Player
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'RandomPlayer',
]
