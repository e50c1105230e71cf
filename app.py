from __future__ import annotations

import os
from typing import Any, Dict, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    FINISHED,
    PHASES,
    PRESETS,
    GameState,
    Rejection,
    Wall,
    WallInventory,
    as_coord,
    check_orientation,
    commit_move,
    commit_wall,
    get_preset,
    legal_moves,
    new_game,
    opponent,
    pass_turn,
    plan_turn,
    skip_wall,
    wall_is_legal,
)

DEFAULT_PRESET = os.getenv("BLOCKADE_PRESET", "standard")

app = Flask(__name__)


# ---------- JSON (de)serialization ----------

def board_to_json(name: str) -> Dict[str, Any]:
    b = get_preset(name)
    return {
        "name": b.name,
        "rows": b.rows,
        "cols": b.cols,
        "blackStarts": [[r, c] for (r, c) in b.black_starts],
        "whiteStarts": [[r, c] for (r, c) in b.white_starts],
        "wallsPerOrientation": b.walls_per_orientation,
    }


def _inv_to_json(inv: WallInventory) -> Dict[str, int]:
    return {"horizontal": int(inv.horizontal), "vertical": int(inv.vertical)}


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "board": board_to_json(s.board.name),
        "black": [[int(r), int(c)] for (r, c) in s.black],
        "white": [[int(r), int(c)] for (r, c) in s.white],
        "walls": [
            {"orientation": w.orientation, "row": int(w.row), "col": int(w.col), "owner": w.owner}
            for w in s.walls
        ],
        "inventory": {"black": _inv_to_json(s.black_inventory), "white": _inv_to_json(s.white_inventory)},
        "turn": s.turn,
        "phase": s.phase,
        "winner": s.winner,
    }


def _tokens_from_json(items: Any) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    if not isinstance(items, list) or len(items) != 2:
        raise ValueError("each side needs exactly two tokens")
    a, b = (as_coord(tuple(x)) for x in items)
    return a, b


def _inv_from_json(obj: Any) -> WallInventory:
    if not isinstance(obj, dict):
        raise ValueError("inventory must be an object")
    inv = WallInventory(int(obj["horizontal"]), int(obj["vertical"]))
    if inv.horizontal < 0 or inv.vertical < 0:
        raise ValueError("wall inventory cannot be negative")
    return inv


def json_to_state(obj: Dict[str, Any]) -> GameState:
    if not isinstance(obj, dict):
        raise ValueError("state must be an object")
    b = obj.get("board") or {}
    if not isinstance(b, dict):
        raise ValueError("board must be an object")
    board = get_preset(str(b.get("name", DEFAULT_PRESET)))
    inv = obj["inventory"]
    if not isinstance(inv, dict):
        raise ValueError("inventory must be an object")
    turn = str(obj["turn"])
    opponent(turn)  # raises on an unknown side
    phase = str(obj["phase"])
    if phase not in PHASES:
        raise ValueError(f"unknown phase: {phase}")
    winner = obj.get("winner")
    if winner is not None:
        opponent(winner)  # raises on an unknown side
    if (winner is None) == (phase == FINISHED):
        raise ValueError("winner must be set exactly when the game is finished")

    black = _tokens_from_json(obj["black"])
    white = _tokens_from_json(obj["white"])
    tokens = black + white
    for t in tokens:
        if not board.in_bounds(t):
            raise ValueError(f"token out of bounds: {t}")
    if len(set(tokens)) != len(tokens):
        raise ValueError("tokens must stand on distinct cells")

    walls_json = obj.get("walls", [])
    if not isinstance(walls_json, list) or not all(isinstance(w, dict) for w in walls_json):
        raise ValueError("walls must be a list of objects")
    walls = tuple(
        Wall(orientation=check_orientation(str(w["orientation"])), row=int(w["row"]), col=int(w["col"]), owner=w.get("owner"))
        for w in walls_json
    )
    return GameState(
        board=board,
        black=black,
        white=white,
        walls=walls,
        black_inventory=_inv_from_json(inv["black"]),
        white_inventory=_inv_from_json(inv["white"]),
        turn=turn,
        phase=phase,
        winner=winner,
    )


# ---------- helpers ----------

def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        raise ValueError("JSON object body required")
    return body


def _bad_request(e: Exception) -> Any:
    return jsonify({"ok": False, "error": f"bad request: {e}"}), 400


def _rejected(state: GameState, reason: Rejection) -> Any:
    return jsonify({"ok": False, "error": reason.message, "code": reason.name, "state": state_to_json(state)}), 400


def _player(body: Dict[str, Any], state: GameState) -> str:
    return str(body.get("player", state.turn))


# ---------- Game API ----------

@app.get("/api/presets")
def api_presets() -> Any:
    return jsonify({"ok": True, "presets": [board_to_json(name) for name in sorted(PRESETS)], "default": DEFAULT_PRESET})


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        state = new_game(str(body.get("preset", DEFAULT_PRESET)))
    except ValueError as e:
        return _bad_request(e)
    return jsonify({"ok": True, "state": state_to_json(state)})


@app.post("/api/legal")
def api_legal() -> Any:
    try:
        body = _body()
        state = json_to_state(body["state"])
        dests = legal_moves(state, _player(body, state), int(body["index"]))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    return jsonify({"ok": True, "legalMoves": [[r, c] for (r, c) in sorted(dests)]})


@app.post("/api/move")
def api_move() -> Any:
    try:
        body = _body()
        state = json_to_state(body["state"])
        res = commit_move(state, _player(body, state), int(body["index"]), as_coord(tuple(body["dest"])))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    if not res.ok and res.reason is not None:
        return _rejected(res.state, res.reason)
    return jsonify({"ok": True, "state": state_to_json(res.state)})


@app.post("/api/wall/check")
def api_wall_check() -> Any:
    try:
        body = _body()
        state = json_to_state(body["state"])
        reason = wall_is_legal(state, _player(body, state), str(body["orientation"]), as_coord(tuple(body["anchor"])))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    out: Dict[str, Any] = {"ok": True, "legal": reason is None}
    if reason is not None:
        out["error"] = reason.message
        out["code"] = reason.name
    return jsonify(out)


@app.post("/api/wall")
def api_wall() -> Any:
    try:
        body = _body()
        state = json_to_state(body["state"])
        res = commit_wall(state, _player(body, state), str(body["orientation"]), as_coord(tuple(body["anchor"])))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    if not res.ok and res.reason is not None:
        return _rejected(res.state, res.reason)
    return jsonify({"ok": True, "state": state_to_json(res.state)})


@app.post("/api/pass")
def api_pass() -> Any:
    try:
        body = _body()
        state = json_to_state(body["state"])
        res = pass_turn(state, _player(body, state))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    if not res.ok and res.reason is not None:
        return _rejected(res.state, res.reason)
    return jsonify({"ok": True, "state": state_to_json(res.state)})


@app.post("/api/skip_wall")
def api_skip_wall() -> Any:
    try:
        body = _body()
        state = json_to_state(body["state"])
        res = skip_wall(state, _player(body, state))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    if not res.ok and res.reason is not None:
        return _rejected(res.state, res.reason)
    return jsonify({"ok": True, "state": state_to_json(res.state)})


@app.post("/api/ai")
def api_ai() -> Any:
    try:
        body = _body()
        state = json_to_state(body["state"])
        player = _player(body, state)
        seed: Optional[int] = body.get("seed")
        plan = plan_turn(state, player, None if seed is None else int(seed))
    except (KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    if plan.state is state:
        return _rejected(state, Rejection.GAME_ALREADY_FINISHED if state.is_finished() else Rejection.WRONG_PHASE_OR_TURN)
    move = None if plan.move is None else {"index": plan.move.index, "dest": list(plan.move.dest)}
    wall = None if plan.wall is None else {"orientation": plan.wall.orientation, "anchor": list(plan.wall.anchor)}
    return jsonify({
        "ok": True,
        "move": move,
        "wall": wall,
        "state": state_to_json(plan.state),
        "winner": plan.state.winner,
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
