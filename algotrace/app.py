"""
app.py — AlgoTrace JSON API
============================
Thin Flask surface a browser renderer talks to.  It builds traces and
hands them over as JSON; playback happens client-side or through a
PlaybackController in-process.

Routes:
  GET  /api/algorithms          – registry cards (label, pseudocode, complexity)
  GET  /api/algorithms/<key>    – one registry card
  POST /api/trace               – {"algorithm", "input"} → exported trace + metrics
  POST /api/compare             – {"left": {...}, "right": {...}} → comparison

Errors:
  InvalidInputError (incl. unknown algorithm) → 400 {"error": message}
"""

import dataclasses
import logging
from typing import Any, Dict, Mapping

from flask import Flask, jsonify, request

from algotrace import config
from algotrace.algorithms import get_algorithm, list_algorithms
from algotrace.engine import build_trace, compare, compute_metrics, export_metrics, export_trace
from algotrace.errors import InvalidInputError, UnknownAlgorithmError

logger = logging.getLogger(__name__)


def _run_request(data: Any) -> Dict[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidInputError("Request body must be a JSON object")
    algorithm_id = data.get("algorithm")
    if not algorithm_id:
        raise InvalidInputError("Missing 'algorithm'")
    if not isinstance(algorithm_id, str):
        raise InvalidInputError("'algorithm' must be a string")
    raw = data.get("input") or {}
    if not isinstance(raw, Mapping):
        raise InvalidInputError("'input' must be a JSON object")
    trace = build_trace(algorithm_id, raw)
    return {"trace": trace, "metrics": compute_metrics(trace)}


def create_app() -> Flask:
    app = Flask(__name__)

    # ---------------------------------------------------------------------------
    # Errors
    # ---------------------------------------------------------------------------
    @app.errorhandler(InvalidInputError)
    def handle_invalid_input(exc: InvalidInputError):
        logger.info("Rejected request: %s", exc)
        return jsonify({"error": str(exc)}), 400

    # ---------------------------------------------------------------------------
    # API: Registry
    # ---------------------------------------------------------------------------
    @app.route("/api/algorithms", methods=["GET"])
    def api_algorithms():
        tag = request.args.get("tag")
        algos = [a for a in list_algorithms() if tag is None or tag in a.tags]
        return jsonify({"algorithms": [a.to_dict() for a in algos]})

    @app.route("/api/algorithms/<key>", methods=["GET"])
    def api_algorithm(key: str):
        info = get_algorithm(key)
        if info is None:
            raise UnknownAlgorithmError(key)
        return jsonify(info.to_dict())

    # ---------------------------------------------------------------------------
    # API: Run Algorithm
    # ---------------------------------------------------------------------------
    @app.route("/api/trace", methods=["POST"])
    def api_trace():
        run = _run_request(request.get_json(silent=True))
        return jsonify({
            "trace":   export_trace(run["trace"]),
            "metrics": export_metrics(run["metrics"]),
        })

    # ---------------------------------------------------------------------------
    # API: Comparison Mode
    # ---------------------------------------------------------------------------
    @app.route("/api/compare", methods=["POST"])
    def api_compare():
        data = request.get_json(silent=True)
        if not isinstance(data, Mapping):
            raise InvalidInputError("Request body must be a JSON object")
        left = _run_request(data.get("left"))
        right = _run_request(data.get("right"))
        result = compare(left["metrics"], right["metrics"])
        return jsonify(dataclasses.asdict(result))

    return app


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    create_app().run(debug=False, port=5000)
