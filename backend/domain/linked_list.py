"""
Singly linked list holding the snake's body segments.

The head is the most recently added cell, the tail the oldest one. Nodes only
point forward, so removing the tail walks the list from the head.
"""

from typing import Iterator, List, Optional, Tuple

Cell = Tuple[int, int]


class ListNode:
    """One segment of the snake: a grid cell plus a link to the next segment."""

    __slots__ = ("x", "y", "next")

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.next: Optional["ListNode"] = None

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)

    def __repr__(self):
        return f"<ListNode ({self.x}, {self.y})>"


class LinkedList:
    """
    Ordered snake body, head first.

    All operations are total: calling them on an empty list returns None or
    does nothing instead of raising.
    """

    def __init__(self):
        self.head: Optional[ListNode] = None
        self.tail: Optional[ListNode] = None
        self.length = 0

    def add_to_head(self, cell: Cell) -> None:
        """Insert a cell in front of the current head in O(1)."""
        x, y = cell
        node = ListNode(x, y)

        if self.head is None:
            self.head = node
            self.tail = node
        else:
            node.next = self.head
            self.head = node

        self.length += 1

    def remove_tail(self) -> Optional[Cell]:
        """
        Remove the tail segment and return its cell.

        O(n): there are no backward links, so we walk from the head to the
        node just before the tail. A single-element list is emptied.
        """
        if self.head is None:
            return None

        if self.head is self.tail:
            removed = self.tail
            self.clear()
            return removed.cell

        current = self.head
        while current.next is not self.tail:
            current = current.next

        removed = self.tail
        current.next = None
        self.tail = current
        self.length -= 1
        return removed.cell

    def contains(self, cell: Cell) -> bool:
        """Linear scan from the head."""
        x, y = cell
        current = self.head
        while current is not None:
            if current.x == x and current.y == y:
                return True
            current = current.next
        return False

    def get_head(self) -> Optional[Cell]:
        return self.head.cell if self.head is not None else None

    def get_tail(self) -> Optional[Cell]:
        return self.tail.cell if self.tail is not None else None

    def to_array(self) -> List[Cell]:
        """Export the segments head-first as a plain list."""
        return list(self)

    def clear(self) -> None:
        self.head = None
        self.tail = None
        self.length = 0

    def __iter__(self) -> Iterator[Cell]:
        current = self.head
        while current is not None:
            yield current.cell
            current = current.next

    def __contains__(self, cell) -> bool:
        return self.contains(cell)

    def __len__(self) -> int:
        return self.length

    def __repr__(self):
        return f"<LinkedList length={self.length}, head={self.get_head()}, tail={self.get_tail()}>"
