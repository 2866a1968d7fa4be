# puzzle_hub/games/yohaku/routes.py
from __future__ import annotations
import logging
import random
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from puzzle_hub import limiter
from puzzle_hub.db import db
from puzzle_hub.models import YohakuResult
from ..core.coerce_utils import coerce_grid, coerce_int, settings_from_json
from .logic.checker import check_answer, next_hint
from .logic.errors import (
    GenerationInvariantViolation, InvalidAnswer, InvalidSettings, SessionNotFound,
)
from .logic.planner import generate_puzzle
from .logic.session_store import LiveSession, get_session_store
from .logic.types import Puzzle

logger = logging.getLogger(__name__)

bp = Blueprint("yohaku", __name__, url_prefix="/games/yohaku")


def _generate_limit() -> str:
    return current_app.config.get("YOHAKU_GENERATE_LIMIT", "30 per minute")

# --------- Error handlers ----------
@bp.errorhandler(InvalidSettings)
@bp.errorhandler(InvalidAnswer)
def _bad_request(e):
    return jsonify({"ok": False, "error": str(e)}), 400

@bp.errorhandler(SessionNotFound)
def _not_found(e):
    return jsonify({"ok": False, "error": str(e)}), 404

@bp.errorhandler(GenerationInvariantViolation)
def _generation_failed(e):
    logger.exception("Yohaku generation invariant violated")
    return jsonify({"ok": False, "error": "Puzzle generation failed"}), 500

# --------- Helpers ----------
def _body() -> Dict[str, Any]:
    j = request.get_json(silent=True)
    return j if isinstance(j, dict) else {}

def _seed(j: Dict[str, Any]) -> Optional[int]:
    raw = j.get("seed")
    return None if raw is None else coerce_int(raw, "seed")

def _session_id(j: Dict[str, Any]) -> Optional[str]:
    sid = j.get("sessionId") or j.get("session_id")
    return str(sid) if sid else None

def _live_session(j: Dict[str, Any]) -> Optional[LiveSession]:
    sid = _session_id(j)
    return get_session_store().get(sid) if sid else None

def _current_puzzle(live: LiveSession) -> Puzzle:
    """Call with live.lock held so the puzzle cannot move on underneath."""
    puz = live.session.current_puzzle
    if puz is None:
        raise InvalidAnswer("Session already finished; start a new game")
    return puz

def _echoed_puzzle(j: Dict[str, Any]) -> Puzzle:
    """A puzzle the client sent back for stateless validate/hint."""
    raw = j.get("puzzle")
    if not isinstance(raw, dict):
        raise InvalidAnswer("sessionId or puzzle is required")
    try:
        return Puzzle.from_dict(raw)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise InvalidAnswer(f"Malformed puzzle: {e}") from None

def _progress_payload(live: LiveSession) -> Dict[str, Any]:
    nxt = live.session.current_puzzle
    return {
        "progress": live.progress(),
        "finished": live.session.finished,
        "nextPuzzle": nxt.to_dict() if nxt else None,
    }

# --------- Routes ----------
@bp.post("/api/generate")
@limiter.limit(_generate_limit)
def api_generate():
    j = _body()
    settings = settings_from_json(j, max_size=current_app.config.get("YOHAKU_MAX_SIZE"))
    level = 1 if j.get("level") is None else coerce_int(j["level"], "level")
    seed = _seed(j)
    rng = random.Random(seed) if seed is not None else None

    puzzle = generate_puzzle(settings, level, rng)
    logger.debug("generated %s size=%d op=%s diff=%s", puzzle.id, settings.size,
                 settings.operation, settings.difficulty)
    return jsonify({"ok": True, "puzzle": puzzle.to_dict(), "settings": settings.to_dict()}), 200

@bp.post("/api/start-game")
@limiter.limit(_generate_limit)
def api_start_game():
    j = _body()
    base = settings_from_json(j, for_session=True)
    live = get_session_store().create(base, seed=_seed(j))
    return jsonify({
        "ok": True,
        "session": live.session.to_dict(),
        "progress": live.progress(),
        "message": "Game session created with 10 progressive puzzles!",
    }), 200

@bp.get("/api/session/<session_id>")
def api_session(session_id: str):
    live = get_session_store().get(session_id)
    return jsonify({"ok": True, "session": live.session.to_dict(), "progress": live.progress()}), 200

@bp.post("/api/validate")
def api_validate():
    j = _body()
    if "grid" not in j:
        raise InvalidAnswer("grid is required")
    grid = coerce_grid(j.get("grid"))
    live = _live_session(j)

    if live is None:
        result = check_answer(_echoed_puzzle(j), grid)
        return jsonify({"ok": True, **result.to_dict()}), 200

    # check and award against the same puzzle; a repeat submission that
    # queued behind a solve is checked against the next level
    with live.lock:
        puzzle = _current_puzzle(live)
        result = check_answer(puzzle, grid)
        awarded = live.playflow.submit(result.valid)
        if result.valid:
            live.record_solve(awarded)
            live.advance()
            logger.info("session %s solved level %d (+%d)", live.session.id, puzzle.level, awarded)
        return jsonify({"ok": True, **result.to_dict(), "awarded": awarded,
                        **_progress_payload(live)}), 200

@bp.post("/api/hint")
def api_hint():
    j = _body()
    filled = coerce_grid(j["grid"]) if j.get("grid") is not None else None
    live = _live_session(j)
    if live is None:
        hint = next_hint(_echoed_puzzle(j), filled)
    else:
        with live.lock:
            hint = next_hint(_current_puzzle(live), filled)
            live.playflow.help()
    return jsonify({
        "ok": True,
        "hint": hint["reason"],
        "cell": None if hint["row"] is None else
                {"row": hint["row"], "col": hint["col"], "value": hint["value"]},
    }), 200

@bp.post("/api/skip")
def api_skip():
    sid = _session_id(_body())
    if not sid:
        raise InvalidAnswer("sessionId is required")
    live = get_session_store().get(sid)
    with live.lock:
        if live.session.finished:
            raise InvalidAnswer("Session already finished; start a new game")
        live.playflow.skip()
        live.advance()
        logger.info("session %s skipped to puzzle %d", sid, live.session.current_puzzle_index)
        return jsonify({"ok": True, **_progress_payload(live)}), 200

@bp.post("/api/exit")
def api_exit():
    sid = _session_id(_body())
    if not sid:
        raise InvalidAnswer("sessionId is required")
    store = get_session_store()
    live = store.get(sid)
    with live.lock:
        summary = live.playflow.summary()
        s = live.session
        row = YohakuResult(
            session_id=s.id,
            operation=s.settings.operation,
            total_score=s.total_score,
            completed_count=s.completed_count,
            puzzle_count=len(s.puzzles),
            started_at=s.start_time,
            meta={"playflow": summary},
        )
    db.session.add(row)
    try:
        db.session.commit()
    except SQLAlchemyError:
        # the live session stays in the store so the player can exit again
        db.session.rollback()
        logger.exception("could not save yohaku session %s", s.id)
        raise
    store.pop(sid)
    logger.info("session %s exited: score=%d completed=%d/%d",
                s.id, s.total_score, s.completed_count, len(s.puzzles))
    return jsonify({
        "ok": True,
        "resultId": row.id,
        "summary": summary,
        "progress": live.progress(),
    }), 200
