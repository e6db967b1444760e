from __future__ import annotations

import logging
import random
import sys
import threading
from pathlib import Path
from typing import Any, Mapping, Optional

from flask import Flask, jsonify, request

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from gameplay import Difficulty, GameController, MoveSelector, Phase

_log = logging.getLogger(__name__)


def create_app(test_config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(
        DEFAULT_DIFFICULTY=Difficulty.EASY.value,
        HINT_DURATION_S=2.0,
        OPPONENT_DELAY_MS=300,
        RANDOM_SEED=None,
    )
    if test_config is None:
        app.config.from_prefixed_env("CHESSGAME")
    else:
        app.config.from_mapping(test_config)

    seed = app.config["RANDOM_SEED"]
    rng = random.Random(int(seed)) if seed is not None else random.Random()
    controller = GameController(
        difficulty=app.config["DEFAULT_DIFFICULTY"],
        selector=MoveSelector(rng),
        hint_duration_s=float(app.config["HINT_DURATION_S"]),
    )
    opponent_delay_ms = int(app.config["OPPONENT_DELAY_MS"])
    # One controller, one writer: the dev server handles requests on threads.
    lock = threading.Lock()
    app.extensions["chess_controller"] = controller

    def snapshot(**extra: object) -> dict:
        snap = controller.snapshot()
        snap["opponent_delay_ms"] = opponent_delay_ms
        snap.update(extra)
        return snap

    @app.get("/api/state")
    def api_state():
        with lock:
            return jsonify(snapshot())

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400
        with lock:
            try:
                difficulty = Difficulty.parse(data.get("difficulty") or controller.difficulty)
                # Reset game (optionally from FEN)
                controller.reset(difficulty, data.get("fen"))
            except ValueError as exc:
                return jsonify({"error": str(exc)}), 400
            return jsonify(snapshot())

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        if not isinstance(payload, dict):
            return jsonify({"accepted": False, "error": "Request body must be a JSON object"}), 400
        from_square = payload.get("from")
        to_square = payload.get("to")
        if not from_square or not to_square:
            return jsonify({"error": "Missing 'from' or 'to' square"}), 400
        promotion = payload.get("promotion") or "q"

        with lock:
            if not controller.submit_player_move(from_square, to_square, promotion):
                error = f"Illegal move: {from_square}{to_square}"
                if controller.phase is not Phase.AWAITING_PLAYER_MOVE:
                    error = f"Cannot move while game is {controller.phase.value}"
                return jsonify(snapshot(accepted=False, ai_move=None, error=error)), 400

            ai_move = None
            if opponent_delay_ms <= 0:
                move = controller.run_opponent_step()
                ai_move = move.uci() if move else None
            return jsonify(snapshot(accepted=True, ai_move=ai_move))

    @app.post("/api/opponent")
    def api_opponent():
        with lock:
            move = controller.run_opponent_step()
            return jsonify(snapshot(ai_move=move.uci() if move else None))

    @app.post("/api/hint")
    def api_hint():
        with lock:
            if controller.request_hint() is None:
                return jsonify(snapshot(error="No hint available right now")), 409
            return jsonify(snapshot())

    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_app().run(host="0.0.0.0", port=5000, debug=True)
