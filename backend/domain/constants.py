"""
Game constants for Linked List Snake.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Screen coordinates: y grows downwards
DIRECTION_OFFSETS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Keyboard names sent by the browser (KeyboardEvent.key)
KEY_BINDINGS = {
    "ArrowUp": UP,
    "ArrowDown": DOWN,
    "ArrowLeft": LEFT,
    "ArrowRight": RIGHT,
    "w": UP,
    "s": DOWN,
    "a": LEFT,
    "d": RIGHT,
}

# Board settings
GRID_SIZE = 20
CELL_SIZE = 25

# Speed is the tick interval in milliseconds
INITIAL_SPEED = 100
MIN_SPEED = 30
SPEED_STEP = 10
SCORE_INCREMENT = 10

INITIAL_DIRECTION = RIGHT
INITIAL_SNAKE = [(7, 10), (6, 10), (5, 10)]  # head first
