from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional

from flask import Flask, jsonify, request

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        NO_CARD,
        Board,
        GameSession,
        check_board,
        check_seed,
        dump_deal,
        format_seed,
        get_card,
        is_card,
        is_game_solvable,
        shuffle,
    )
    from .freecell_core.config import configure_logging, default_seed, env_flag  # type: ignore
except ImportError:
    from game import (  # type: ignore
        NO_CARD,
        Board,
        GameSession,
        check_board,
        check_seed,
        dump_deal,
        format_seed,
        get_card,
        is_card,
        is_game_solvable,
        shuffle,
    )
    from freecell_core.config import configure_logging, default_seed, env_flag  # type: ignore

app = Flask(__name__)


# ---------- State <-> JSON ----------
# The API is stateless: the client sends back the state it was given.

def _board_from_json(raw: Any) -> Board:
    if not isinstance(raw, list) or len(raw) != 52:
        raise ValueError("board must be a list of 52 locations")
    board = Board(tuple(int(x) for x in raw))
    problems = check_board(board)
    if problems:
        raise ValueError("inconsistent board: " + "; ".join(problems[:3]))
    return board


def state_to_json(s: GameSession) -> Dict[str, Any]:
    return {
        "seed": int(s.seed),
        "history": [b.as_list() for b in s.history.stack],
        "undos": int(s.history.undos),
        "selected": int(s.selected) if s.is_selection_active() else None,
    }


def json_to_state(obj: Dict[str, Any]) -> GameSession:
    if not isinstance(obj, dict):
        raise ValueError("state required")
    seed = check_seed(int(obj.get("seed", 0)))
    history = obj.get("history")
    if not isinstance(history, list) or not history:
        raise ValueError("history must hold at least the initial deal")
    snapshots = [_board_from_json(snap) for snap in history]
    selected = obj.get("selected")
    s = GameSession()
    s.restore(
        seed,
        snapshots,
        undos=int(obj.get("undos", 0)),
        selected=int(selected) if selected is not None else NO_CARD,
    )
    return s


def _view(s: GameSession) -> Dict[str, Any]:
    """Everything a client needs to draw the table."""
    selected = s.get_selected()
    return {
        "board": s.board.as_list(),
        "previousBoard": s.previous_board().as_list(),
        "selected": selected,
        "selectedSyms": [get_card(cid).sym for cid in selected],
        "targets": s.legal_targets(),
        "moveCount": s.move_count(),
        "won": s.is_game_won(),
        "solvable": s.is_game_solvable(),
        "game": format_seed(s.seed),
        "pretty": s.board.pretty(),
    }


def _reply(s: GameSession, **extra: Any) -> Any:
    body: Dict[str, Any] = {"ok": True, "state": state_to_json(s), "view": _view(s)}
    body.update(extra)
    return jsonify(body)


def _bad(msg: str) -> Any:
    return jsonify({"ok": False, "error": msg}), 400


def _json_body() -> Optional[Dict[str, Any]]:
    """Request JSON as a dict. Missing or unparsable bodies count as empty, other JSON values as None."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _session_from_body(body: Dict[str, Any]) -> GameSession:
    return json_to_state(body.get("state"))


# ---------- Game API ----------

@app.get("/api/health")
def api_health() -> Any:
    return jsonify({"ok": True})


@app.get("/api/deal/<int:seed>")
def api_deal(seed: int) -> Any:
    try:
        check_seed(seed)
    except ValueError as e:
        return _bad(str(e))
    deal = shuffle(seed)
    return jsonify({
        "ok": True,
        "game": format_seed(seed),
        "deal": [c.sym for c in deal],
        "text": dump_deal(deal),
        "solvable": is_game_solvable(seed),
    })


@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return _bad("request body must be a JSON object")
    seed = body.get("seed", None)
    try:
        s = GameSession()
        s.new_game(default_seed() if seed is None else int(seed))
    except (TypeError, ValueError) as e:
        return _bad(f"bad seed: {e}")
    return _reply(s)


@app.post("/api/new_from")
def api_new_from() -> Any:
    body = _json_body()
    if body is None:
        return _bad("request body must be a JSON object")
    layout = body.get("layout")
    if not isinstance(layout, dict):
        return _bad("layout required")
    try:
        board = Board.from_layout(
            cascades=layout.get("cascades", []),
            freecells=layout.get("freecells", []),
            foundations=layout.get("foundations", []),
        )
        problems = check_board(board)
        if problems:
            raise ValueError("; ".join(problems[:3]))
        seed = check_seed(int(body.get("seed", 0)))
    except (TypeError, ValueError) as e:
        return _bad(f"bad layout: {e}")
    s = GameSession()
    s.start_from(board, seed)
    return _reply(s)


@app.post("/api/interact")
def api_interact() -> Any:
    body = _json_body()
    if body is None:
        return _bad("request body must be a JSON object")
    try:
        s = _session_from_body(body)
        pick = body["pick"]
        if isinstance(pick, bool) or not isinstance(pick, int):
            raise ValueError("pick must be an integer")
    except (KeyError, TypeError, ValueError) as e:
        return _bad(f"bad request: {e}")
    moved = s.interact(pick)
    auto_moved = 0
    if moved and body.get("auto", False):
        auto_moved = s.auto_move_all()
    return _reply(s, moved=moved, autoMoved=auto_moved)


@app.post("/api/undo")
def api_undo() -> Any:
    body = _json_body()
    if body is None:
        return _bad("request body must be a JSON object")
    try:
        s = _session_from_body(body)
    except (TypeError, ValueError) as e:
        return _bad(f"bad state: {e}")
    s.undo()
    return _reply(s)


@app.post("/api/auto")
def api_auto() -> Any:
    body = _json_body()
    if body is None:
        return _bad("request body must be a JSON object")
    try:
        s = _session_from_body(body)
    except (TypeError, ValueError) as e:
        return _bad(f"bad state: {e}")
    if body.get("all", False):
        count = s.auto_move_all()
    else:
        count = 1 if s.auto_move_card() else 0
    return _reply(s, moved=count > 0, autoMoved=count)


@app.post("/api/targets")
def api_targets() -> Any:
    body = _json_body()
    if body is None:
        return _bad("request body must be a JSON object")
    try:
        s = _session_from_body(body)
    except (TypeError, ValueError) as e:
        return _bad(f"bad state: {e}")
    targets: List[int] = s.legal_targets()
    return jsonify({
        "ok": True,
        "targets": targets,
        "cards": [get_card(t).sym for t in targets if is_card(t)],
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging()
    debug = env_flag("FLASK_DEBUG", os.getenv("DEBUG", "0"))
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
