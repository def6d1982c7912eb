"""
Board Rendering Service for Linked List Snake

Draws a GameState to an image using PIL (Pillow):
1. Score panel (score, length, level, status)
2. Game board with checkerboard grid, food, body and head with eyes
3. Linked list strip: one box per node from HEAD to TAIL, joined by
   arrows and terminated by a null box

The browser fetches the PNG from the API after each tick.
"""

import io
import logging
from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont

from domain.constants import CELL_SIZE
from domain.game_state import GameState

logger = logging.getLogger(__name__)

PANEL_HEIGHT = 60
NODE_WIDTH = 70
NODE_HEIGHT = 44
NODE_GAP = 24
LIST_ROW_HEIGHT = NODE_HEIGHT + 16
MARGIN = 10


class ColorScheme:
    """Color configuration matching the browser design"""

    # Board
    BOARD_DARK = "#1F2937"
    BOARD_LIGHT = "#283344"
    GRID_LINE = "#374151"
    BORDER = "#111827"

    # Snake
    SNAKE_BODY = "#4ADE80"
    SNAKE_HEAD = "#10B981"
    EYE = "#FFFFFF"

    # Food
    FOOD = "#EF4444"

    # UI
    BACKGROUND = "#FFFFFF"
    PANEL = "#10B981"
    PANEL_TEXT = "#FFFFFF"
    NULL_NODE = "#9CA3AF"
    ARROW = "#22C55E"
    GAME_OVER = "#DC2626"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def darken_color(hex_color: str, amount: float = 0.3) -> Tuple[int, int, int]:
    """Darken a hex color by a given amount"""
    r, g, b = hex_to_rgb(hex_color)
    r = max(0, int(r * (1 - amount)))
    g = max(0, int(g * (1 - amount)))
    b = max(0, int(b * (1 - amount)))
    return (r, g, b)


class BoardRenderer:
    """Render Snake game states to images"""

    def __init__(self, cell_size: int = CELL_SIZE, nodes_per_row: int = 8):
        self.cell_size = cell_size
        self.nodes_per_row = nodes_per_row
        self.font = ImageFont.load_default()

    def image_size(self, state: GameState) -> Tuple[int, int]:
        """Width and height of the rendered image for a given state."""
        board_w = state.width * self.cell_size
        board_h = state.height * self.cell_size
        list_rows = self._list_rows(state.length + 1)
        width = max(board_w, self.nodes_per_row * (NODE_WIDTH + NODE_GAP)) + 2 * MARGIN
        height = PANEL_HEIGHT + board_h + list_rows * LIST_ROW_HEIGHT + 4 * MARGIN
        return width, height

    def render_frame(self, state: GameState) -> Image.Image:
        """Render a single frame of the game"""
        width, height = self.image_size(state)
        img = Image.new('RGB', (width, height), hex_to_rgb(ColorScheme.BACKGROUND))
        draw = ImageDraw.Draw(img)

        self._draw_panel(draw, MARGIN, MARGIN, width - 2 * MARGIN, state)

        board_y = MARGIN * 2 + PANEL_HEIGHT
        self._draw_board(draw, MARGIN, board_y, state)

        list_y = board_y + state.height * self.cell_size + MARGIN
        self._draw_linked_list(draw, MARGIN, list_y, state.snake_positions)

        return img

    def render_png(self, state: GameState) -> bytes:
        """Render a frame and encode it as PNG bytes."""
        buffer = io.BytesIO()
        self.render_frame(state).save(buffer, format="PNG")
        return buffer.getvalue()

    def _list_rows(self, node_count: int) -> int:
        return max(1, -(-node_count // self.nodes_per_row))

    def _draw_panel(self, draw: ImageDraw.ImageDraw, x: int, y: int, width: int, state: GameState):
        """Draw the score / length / level header"""
        fill = ColorScheme.GAME_OVER if state.game_over else ColorScheme.PANEL
        draw.rectangle([x, y, x + width, y + PANEL_HEIGHT], fill=hex_to_rgb(fill))

        status_text = {
            "idle": "Paused",
            "playing": "Playing",
            "game_over": "Game Over!",
        }[state.status]
        draw.text((x + 12, y + 10), f"Score: {state.score}", fill=hex_to_rgb(ColorScheme.PANEL_TEXT), font=self.font)
        draw.text((x + 12, y + 34), status_text, fill=hex_to_rgb(ColorScheme.PANEL_TEXT), font=self.font)
        draw.text(
            (x + width // 2, y + 10),
            f"Length: {state.length}   Level: {state.level}",
            fill=hex_to_rgb(ColorScheme.PANEL_TEXT),
            font=self.font
        )

    def _draw_board(self, draw: ImageDraw.ImageDraw, x: int, y: int, state: GameState):
        """Draw the game board"""
        cs = self.cell_size
        board_w = state.width * cs
        board_h = state.height * cs

        # Checkerboard background
        for gy in range(state.height):
            for gx in range(state.width):
                color = ColorScheme.BOARD_DARK if (gx + gy) % 2 == 0 else ColorScheme.BOARD_LIGHT
                draw.rectangle(
                    [x + gx * cs, y + gy * cs, x + (gx + 1) * cs - 1, y + (gy + 1) * cs - 1],
                    fill=hex_to_rgb(color),
                    outline=hex_to_rgb(ColorScheme.GRID_LINE)
                )

        draw.rectangle([x, y, x + board_w, y + board_h], outline=hex_to_rgb(ColorScheme.BORDER), width=3)

        # Food
        if state.food is not None:
            fx, fy = state.food
            draw.ellipse(
                [x + fx * cs + 3, y + fy * cs + 3, x + (fx + 1) * cs - 3, y + (fy + 1) * cs - 3],
                fill=hex_to_rgb(ColorScheme.FOOD)
            )

        # Body
        for pos_x, pos_y in state.snake_positions[1:]:
            self._draw_cell(draw, x + pos_x * cs, y + pos_y * cs, cs, hex_to_rgb(ColorScheme.SNAKE_BODY), padding=1)

        # Head with eyes
        if state.head is not None:
            hx, hy = state.head
            left = x + hx * cs
            top = y + hy * cs
            draw.ellipse([left, top, left + cs - 1, top + cs - 1], fill=darken_color(ColorScheme.SNAKE_HEAD, 0.2))

            eye = max(2, cs // 5)
            eye_y = top + cs // 3
            draw.ellipse([left + cs // 4, eye_y, left + cs // 4 + eye, eye_y + eye], fill=hex_to_rgb(ColorScheme.EYE))
            draw.ellipse(
                [left + cs - cs // 4 - eye, eye_y, left + cs - cs // 4, eye_y + eye],
                fill=hex_to_rgb(ColorScheme.EYE)
            )

    def _draw_cell(
        self,
        draw: ImageDraw.ImageDraw,
        x: int,
        y: int,
        size: int,
        color: Tuple[int, int, int],
        padding: int = 2
    ):
        """Draw a single filled cell"""
        draw.rectangle(
            [x + padding, y + padding, x + size - padding - 1, y + size - padding - 1],
            fill=color
        )

    def _node_label(self, idx: int, count: int) -> str:
        if idx == 0:
            return "HEAD"
        if idx == count - 1:
            return "TAIL"
        return f"Node {idx}"

    def _node_origin(self, x: int, y: int, idx: int) -> Tuple[int, int]:
        row, col = divmod(idx, self.nodes_per_row)
        return x + col * (NODE_WIDTH + NODE_GAP), y + row * LIST_ROW_HEIGHT

    def _draw_linked_list(self, draw: ImageDraw.ImageDraw, x: int, y: int, positions: List[Tuple[int, int]]):
        """Draw every node head to tail, then the null terminator"""
        count = len(positions)
        for idx, (cx, cy) in enumerate(positions):
            nx, ny = self._node_origin(x, y, idx)
            color = ColorScheme.SNAKE_HEAD if idx == 0 else ColorScheme.SNAKE_BODY
            draw.rounded_rectangle(
                [nx, ny, nx + NODE_WIDTH, ny + NODE_HEIGHT],
                radius=6,
                fill=hex_to_rgb(color),
                outline=darken_color(color, 0.3),
                width=2
            )
            draw.text((nx + 6, ny + 4), self._node_label(idx, count), fill=hex_to_rgb(ColorScheme.PANEL_TEXT), font=self.font)
            draw.text((nx + 6, ny + 22), f"x:{cx} y:{cy}", fill=hex_to_rgb(ColorScheme.PANEL_TEXT), font=self.font)
            self._draw_arrow(draw, nx + NODE_WIDTH, ny + NODE_HEIGHT // 2)

        nx, ny = self._node_origin(x, y, count)
        draw.rounded_rectangle(
            [nx, ny, nx + NODE_WIDTH, ny + NODE_HEIGHT],
            radius=6,
            fill=hex_to_rgb(ColorScheme.NULL_NODE)
        )
        draw.text((nx + 22, ny + 14), "null", fill=(55, 65, 81), font=self.font)

    def _draw_arrow(self, draw: ImageDraw.ImageDraw, x: int, y: int):
        """Arrow pointing from a node to the next one"""
        end = x + NODE_GAP - 4
        draw.line([x + 2, y, end, y], fill=hex_to_rgb(ColorScheme.ARROW), width=2)
        draw.polygon([(end, y - 4), (end + 4, y), (end, y + 4)], fill=hex_to_rgb(ColorScheme.ARROW))
