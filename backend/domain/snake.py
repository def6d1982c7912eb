"""
Snake entity for the game engine.
"""

from typing import List, Tuple, Optional

from .linked_list import LinkedList


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        segments: LinkedList of (x, y) from head to tail
        alive: whether the snake is still alive
        death_reason: 'wall' or 'self'
        death_round: the tick number when the snake died
    """

    def __init__(self, positions: List[Tuple[int, int]]):
        self.segments = LinkedList()
        # positions are head first, so build from the tail forward
        for cell in reversed(positions):
            self.segments.add_to_head(cell)
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_round: Optional[int] = None

    @property
    def head(self) -> Optional[Tuple[int, int]]:
        """Return the head position, or None for an empty body."""
        return self.segments.get_head()

    @property
    def positions(self) -> List[Tuple[int, int]]:
        """Return the body as a list, head first."""
        return self.segments.to_array()

    def __len__(self) -> int:
        return len(self.segments)
