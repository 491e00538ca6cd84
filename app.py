from __future__ import annotations

import os
import random
import sys
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request, send_from_directory

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        Board,
        Direction,
        GameConfig,
        MoveResult,
        Session,
        WIN_VALUE,
        apply_move as g_apply_move,
        default_rng,
        is_terminal as g_is_terminal,
        legal_directions as g_legal_directions,
        new_game as g_new_game,
        trace,
    )
except ImportError:
    from game import (  # type: ignore
        Board,
        Direction,
        GameConfig,
        MoveResult,
        Session,
        WIN_VALUE,
        apply_move as g_apply_move,
        default_rng,
        is_terminal as g_is_terminal,
        legal_directions as g_legal_directions,
        new_game as g_new_game,
        trace,
    )

CONFIG = GameConfig.from_env()

STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))
app = Flask(__name__, static_url_path="/static", static_folder=STATIC_DIR)


def _rng_for(body: Dict[str, Any]) -> random.Random:
    seed = body.get("seed", None)
    if seed is None:
        return default_rng()
    return random.Random(int(seed))


# ---------- JSON mapping ----------

def session_to_json(s: Session) -> Dict[str, Any]:
    return {
        "board": s.board.rows(),
        "score": int(s.score),
        "bestScore": int(s.best_score),
        "won": bool(s.won),
        "lost": bool(s.lost),
        "status": s.status.value,
    }


def _json_int(obj: Dict[str, Any], key: str) -> int:
    value = obj.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{key} must be an integer")
    return int(value)


def _json_flag(obj: Dict[str, Any], key: str) -> bool:
    value = obj.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false")
    return value


def json_to_session(obj: Dict[str, Any]) -> Session:
    board = Board.from_rows(obj["board"])
    score = _json_int(obj, "score")
    best = _json_int(obj, "bestScore")
    if score < 0 or best < 0:
        raise ValueError("scores must not be negative")
    return Session(
        board=board,
        score=score,
        best_score=max(best, score),
        won=_json_flag(obj, "won"),
        lost=_json_flag(obj, "lost"),
    )


def _result_to_json(result: MoveResult) -> Dict[str, Any]:
    return {
        "displacements": [
            {"from": list(d.source), "to": list(d.dest), "value": int(d.value)}
            for d in result.displacements
        ],
        "mergeEvents": [
            {"cell": list(e.cell), "value": int(e.value), "spawned": bool(e.is_newly_spawned)}
            for e in result.merge_events
        ],
    }


def _legal_json(s: Session) -> List[str]:
    if s.lost:
        return []
    return [d.value for d in g_legal_directions(s.board)]


def _bad_body() -> Any:
    return jsonify({"ok": False, "error": "JSON object body required"}), 400


def _session_from_body(body: Dict[str, Any]) -> Optional[Session]:
    s_in = body.get("session")
    if not isinstance(s_in, dict):
        return None
    return json_to_session(s_in)


# ---------- Static routes ----------

@app.get("/")
def index() -> Any:
    return send_from_directory(app.static_folder, "index.html")


@app.get("/main.js")
def main_js() -> Any:
    resp = send_from_directory(app.static_folder, "main.js")
    resp.headers["Content-Type"] = "application/javascript; charset=utf-8"
    return resp


@app.get("/styles.css")
def styles_css() -> Any:
    resp = send_from_directory(app.static_folder, "styles.css")
    resp.headers["Content-Type"] = "text/css; charset=utf-8"
    return resp


@app.get("/static/<path:filename>")
def static_files(filename: str) -> Any:
    return send_from_directory(app.static_folder, filename)


# ---------- Game API (used by main.js) ----------

@app.get("/api/config")
def api_config() -> Any:
    return jsonify({
        "ok": True,
        "animationMs": CONFIG.animation_ms,
        "inputCooldownMs": CONFIG.input_cooldown_ms,
        "easing": CONFIG.easing,
        "winValue": WIN_VALUE,
    })


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    if not isinstance(body, dict):
        return _bad_body()
    try:
        best = max(0, _json_int(body, "bestScore"))
        rng = _rng_for(body)
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad request: {e}"}), 400
    session = g_new_game(best_score=best, rng=rng)
    return jsonify({
        "ok": True,
        "session": session_to_json(session),
        "legalMoves": _legal_json(session),
    })


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    if not isinstance(body, dict):
        return _bad_body()
    try:
        session = _session_from_body(body)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad session: {e}"}), 400
    if session is None:
        return jsonify({"ok": False, "error": "session required"}), 400
    try:
        direction = Direction.parse(body.get("direction", ""))
    except ValueError as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    if session.lost:
        return jsonify({"ok": False, "error": "Game over", "session": session_to_json(session)}), 409
    try:
        rng = _rng_for(body)
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad seed: {e}"}), 400

    next_session, result = g_apply_move(session, direction, rng)
    trace("api", f"move {direction.value} changed={result.changed} score={next_session.score}")
    payload: Dict[str, Any] = {
        "ok": True,
        "changed": bool(result.changed),
        "session": session_to_json(next_session),
        "scoreDelta": int(result.score_delta),
        "terminal": {"won": next_session.won, "lost": next_session.lost},
        "legalMoves": _legal_json(next_session),
    }
    payload.update(_result_to_json(result))
    return jsonify(payload)


@app.post("/api/terminal")
def api_terminal() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    if not isinstance(body, dict):
        return _bad_body()
    try:
        session = _session_from_body(body)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad session: {e}"}), 400
    if session is None:
        return jsonify({"ok": False, "error": "session required"}), 400
    terminal = g_is_terminal(session.board, already_won=session.won)
    lost = terminal.lost or session.lost
    status = "lost" if lost else ("won" if terminal.won else "playing")
    return jsonify({"ok": True, "won": terminal.won, "lost": lost, "status": status})


@app.post("/api/legal")
def api_legal() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    if not isinstance(body, dict):
        return _bad_body()
    try:
        session = _session_from_body(body)
    except (KeyError, TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad session: {e}"}), 400
    if session is None:
        return jsonify({"ok": False, "error": "session required"}), 400
    return jsonify({"ok": True, "legalMoves": _legal_json(session)})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
