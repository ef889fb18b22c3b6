from __future__ import annotations

import logging
import os
import random
from typing import Any, Callable, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Board,
    BoardCondition,
    FractalError,
    GameState,
    InvalidBoardShape,
    InvalidPath,
    PLAYERS,
    X,
    check_path,
    clear,
    descend,
    evaluate,
    force_condition,
    initial_state,
    legal_moves,
    read_at,
    take_turn,
)

logger = logging.getLogger(__name__)

APP_ENV = os.getenv("FRACTAL_TTT_ENV", "development")
MAX_DEPTH = int(os.getenv("FRACTAL_TTT_MAX_DEPTH", "4"))
LOG_LEVEL = os.getenv("FRACTAL_TTT_LOG_LEVEL", "INFO")

app = Flask(__name__)


# ---------- JSON conversion ----------

def _path_to_json(p: Optional[Tuple[int, ...]]) -> Optional[list]:
    return None if p is None else [int(i) for i in p]


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "board": s.board.to_nested(),
        "nextPlayer": s.next_player,
        "turnPath": _path_to_json(s.turn_path),
        "previousTurn": _path_to_json(s.previous_turn),
    }


def json_to_state(obj: Dict[str, Any]) -> GameState:
    board = Board.from_nested(obj["board"])
    next_player = str(obj.get("nextPlayer", X))
    if next_player not in PLAYERS:
        raise ValueError(f"nextPlayer must be one of {PLAYERS}")
    turn_path = check_path(obj.get("turnPath") or [])
    if turn_path and not isinstance(read_at(board, turn_path), Board):
        raise InvalidPath("turnPath must address a sub-board", context={"path": list(turn_path)})
    prev = obj.get("previousTurn")
    previous_turn = check_path(prev) if prev else None
    return GameState(board=board, next_player=next_player, turn_path=turn_path, previous_turn=previous_turn)


def _state_response(s: GameState, **extra: Any) -> Dict[str, Any]:
    body = {
        "ok": True,
        "state": state_to_json(s),
        "outcome": s.outcome.to_json(),
        "depth": s.depth,
        "legalMoves": [list(p) for p in legal_moves(s)],
    }
    body.update(extra)
    return body


def _bad_request(msg: str) -> Any:
    return jsonify({"ok": False, "error": msg}), 400


def _read_state() -> Tuple[Optional[GameState], Any]:
    """Parses body["state"]; returns (state, None) or (None, error response)."""
    body = request.get_json(force=True, silent=True) or {}
    s_in = body.get("state")
    if not isinstance(s_in, dict):
        return None, _bad_request("state required")
    try:
        return json_to_state(s_in), None
    except (KeyError, TypeError, ValueError, FractalError) as e:
        return None, _bad_request(f"bad state: {e}")


def _read_depth(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError("depth must be an integer")
    depth = value
    if not 1 <= depth <= MAX_DEPTH:
        raise ValueError(f"depth must be between 1 and {MAX_DEPTH}")
    return depth


def _run(transition: Callable[[], GameState]) -> Any:
    """Applies a transition, mapping rule errors to 400 and broken invariants to 500."""
    try:
        next_state = transition()
    except InvalidBoardShape as e:
        logger.exception("Board invariant broken")
        return jsonify({"ok": False, "error": e.message, "code": e.code}), 500
    except FractalError as e:
        return jsonify({"ok": False, "error": e.message, "code": e.code, "context": e.context}), 400
    return jsonify(_state_response(next_state))


# ---------- Core Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        depth = _read_depth(body.get("depth", 1))
    except (TypeError, ValueError) as e:
        return _bad_request(str(e))
    return jsonify(_state_response(initial_state(depth)))


@app.post("/api/legal")
def api_legal() -> Any:
    state, err = _read_state()
    if err is not None:
        return err
    return jsonify({"ok": True, "legalMoves": [list(p) for p in legal_moves(state)]})


@app.post("/api/move")
def api_move() -> Any:
    state, err = _read_state()
    if err is not None:
        return err
    body = request.get_json(force=True, silent=True) or {}
    try:
        path = tuple(int(i) for i in body["path"])
    except (KeyError, TypeError, ValueError):
        return _bad_request("path required")
    return _run(lambda: take_turn(state, path))


@app.post("/api/descend")
def api_descend() -> Any:
    state, err = _read_state()
    if err is not None:
        return err
    return _run(lambda: descend(state))


@app.post("/api/clear")
def api_clear() -> Any:
    state, err = _read_state()
    if err is not None:
        return err
    return _run(lambda: clear(state))


@app.post("/api/evaluate")
def api_evaluate() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        board = Board.from_nested(body["board"])
    except (KeyError, TypeError, FractalError) as e:
        return _bad_request(f"bad board: {e}")
    return jsonify({"ok": True, "outcome": evaluate(board).to_json(), "depth": board.depth})


# ---------- Development tools ----------

@app.post("/api/dev/force")
def api_dev_force() -> Any:
    if APP_ENV != "development":
        return jsonify({"ok": False, "error": "dev tools disabled"}), 404
    body = request.get_json(force=True, silent=True) or {}
    try:
        condition = BoardCondition(str(body.get("condition", "")))
        depth = _read_depth(body.get("depth", 1))
    except (TypeError, ValueError) as e:
        return _bad_request(str(e))
    seed = body.get("seed", None)
    rng = random.Random(seed) if seed is not None else None
    s_in = body.get("state")
    base = initial_state()
    if isinstance(s_in, dict):
        try:
            base = json_to_state(s_in)
        except (KeyError, TypeError, ValueError, FractalError) as e:
            return _bad_request(f"bad state: {e}")
    return _run(lambda: force_condition(base, condition, depth, rng=rng))


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
