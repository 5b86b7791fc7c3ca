import os
import logging
from argparse import Namespace

from flask import Flask, jsonify, request
from flask_cors import CORS
from dotenv import load_dotenv

from config import get_cors_origins
from data_access.high_scores import get_top_scores, get_best_score
from data_access.repositories import HighScoreRepository
from domain.errors import ConfigurationError
from main import run_simulation
from players.variant_registry import list_variants

load_dotenv()

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

# Enable CORS for API routes so a browser frontend (different origin) can call Flask
# Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
CORS(app, resources={r"/api/*": {"origins": get_cors_origins()}})

MAX_SIMULATION_TICKS = 20000


@app.route("/api/highscores", methods=["GET"])
def get_highscores():
    """
    Get the high score table.

    Query parameters:
    - limit: Maximum number of entries (default: 10)

    Returns the leaderboard plus the overall best entry.
    """
    try:
        limit = request.args.get("limit", default=10, type=int)
        scores = get_top_scores(limit=limit)
        best = get_best_score()

        return jsonify({
            "highScores": scores,
            "best": {"name": best[0], "score": best[1]} if best else None
        })

    except Exception as error:
        logging.error(f"Error fetching high scores: {error}")
        return jsonify({"error": "Failed to load high scores"}), 500


@app.route("/api/players", methods=["GET"])
def get_players():
    """List the controllers that can drive the player snake in simulations."""
    return jsonify({"players": list_variants()})


@app.route("/api/simulations", methods=["POST"])
def create_simulation():
    """
    Run one headless game and return its summary.

    JSON body:
    - width, height: board size (default 32x32)
    - max_ticks: tick limit (default 5000, at most MAX_SIMULATION_TICKS)
    - player: controller key for the player snake (default 'astar')
    - seed: optional random seed
    - name: optional name to record the player's score under
    """
    body = request.get_json(silent=True) or {}
    try:
        params = Namespace(
            width=int(body.get("width", 32)),
            height=int(body.get("height", 32)),
            max_ticks=min(int(body.get("max_ticks", 5000)), MAX_SIMULATION_TICKS),
            player=body.get("player"),
            seed=body.get("seed"),
            name=body.get("name"),
            save_replay=False,
        )
    except (TypeError, ValueError) as error:
        return jsonify({"error": f"Invalid simulation parameters: {error}"}), 400

    try:
        store = HighScoreRepository() if params.name else None
        result = run_simulation(params, high_score_store=store)
        return jsonify(result), 201

    except (ConfigurationError, ValueError) as error:
        logging.warning(f"Rejected simulation request: {error}")
        return jsonify({"error": str(error)}), 400
    except Exception as error:
        logging.error(f"Error running simulation: {error}")
        return jsonify({"error": "Failed to run simulation"}), 500


if __name__ == "__main__":
    # Run the Flask app in debug mode.
    app.run(debug=os.getenv("FLASK_DEBUG"))
