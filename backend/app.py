import os
import logging
from flask import Flask, Response, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from main import SnakeGame, direction_from_key
from services.board_renderer import BoardRenderer
from services.game_loop import GameLoop

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

# Enable CORS for API routes so the browser frontend (different origin) can call Flask
# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins_env:
    allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
else:
    # sensible defaults for local dev
    allowed_origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

# One game per server process; the loop owns its timer
loop = GameLoop(SnakeGame())
renderer = BoardRenderer()


@app.route("/api/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})


@app.route("/api/game", methods=["GET"])
def get_game():
    """
    Get the current state of the game.

    Returns the body as a list of [x, y] cells (head first), the food cell,
    score, length, speed, level and the playing/game-over flags.
    """
    try:
        return jsonify(loop.snapshot().to_dict())
    except Exception as error:
        logging.error(f"Error fetching game state: {error}")
        return jsonify({"error": "Failed to load game state"}), 500


@app.route("/api/game/start", methods=["POST"])
def start_game():
    try:
        return jsonify(loop.start().to_dict())
    except Exception as error:
        logging.error(f"Error starting game: {error}")
        return jsonify({"error": "Failed to start game"}), 500


@app.route("/api/game/pause", methods=["POST"])
def pause_game():
    try:
        return jsonify(loop.pause().to_dict())
    except Exception as error:
        logging.error(f"Error pausing game: {error}")
        return jsonify({"error": "Failed to pause game"}), 500


@app.route("/api/game/toggle", methods=["POST"])
def toggle_game():
    """The start/pause button."""
    try:
        return jsonify(loop.toggle().to_dict())
    except Exception as error:
        logging.error(f"Error toggling game: {error}")
        return jsonify({"error": "Failed to toggle game"}), 500


@app.route("/api/game/reset", methods=["POST"])
def reset_game():
    """
    Reset to a fresh, paused game with a new snake and food.
    """
    try:
        return jsonify(loop.reset().to_dict())
    except Exception as error:
        logging.error(f"Error resetting game: {error}")
        return jsonify({"error": "Failed to reset game"}), 500


@app.route("/api/game/direction", methods=["POST"])
def change_direction():
    """
    Steer the snake.

    Body (JSON), one of:
    - {"direction": "UP" | "DOWN" | "LEFT" | "RIGHT"}
    - {"key": "ArrowUp" | "ArrowDown" | "ArrowLeft" | "ArrowRight"}

    Returns:
    - 200: {"accepted": bool, "state": {...}}; reversals and requests while
      not playing are not accepted
    - 400: missing or unknown direction
    """
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "Provide a 'direction' or 'key'."}), 400

    raw = payload.get("direction") or payload.get("key")

    if not isinstance(raw, str):
        return jsonify({"error": "Provide a 'direction' or 'key'."}), 400

    direction = direction_from_key(raw)
    if direction is None:
        return jsonify({"error": f"Unknown direction '{raw}'"}), 400

    try:
        accepted = loop.change_direction(direction)
        return jsonify({
            "accepted": accepted,
            "state": loop.snapshot().to_dict()
        })
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    except Exception as error:
        logging.error(f"Error changing direction: {error}")
        return jsonify({"error": "Failed to change direction"}), 500


@app.route("/api/game/board.png", methods=["GET"])
def get_board_image():
    """
    Render the board and the linked list as a PNG.
    """
    try:
        png = renderer.render_png(loop.snapshot())
        return Response(png, mimetype="image/png", headers={"Cache-Control": "no-store"})
    except Exception as error:
        logging.error(f"Error rendering board: {error}")
        return jsonify({"error": "Failed to render board"}), 500


if __name__ == "__main__":
    # Run the Flask app in debug mode.
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=os.getenv("FLASK_DEBUG", "").lower() in ("1", "true")
    )
