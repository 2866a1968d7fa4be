# puzzle_hub/games/yohaku/logic/session_store.py
from __future__ import annotations
import logging
import random
import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Dict, Optional

from flask import current_app

from ...core.playflow import Playflow
from .errors import SessionNotFound
from .planner import generate_session
from .types import GameSession, GameSettings, Puzzle

logger = logging.getLogger(__name__)

EXTENSION_KEY = "yohaku_sessions"
DEFAULT_CAP = 500


@dataclass
class LiveSession:
    session: GameSession
    playflow: Playflow
    rng: random.Random
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def start_current(self) -> Optional[Puzzle]:
        puz = self.session.current_puzzle
        if puz is not None:
            self.playflow.start_puzzle(puz.level, puz.id, puz.timer_duration, puz.score)
        return puz

    def advance(self) -> Optional[Puzzle]:
        self.session.current_puzzle_index += 1
        return self.start_current()

    def record_solve(self, awarded: int) -> None:
        self.session.total_score += awarded
        self.session.completed_count += 1

    def progress(self) -> Dict[str, int]:
        s = self.session
        return {
            "currentPuzzle": s.current_puzzle_index,
            "completedCount": s.completed_count,
            "totalScore": s.total_score,
            "remaining": max(0, len(s.puzzles) - s.current_puzzle_index),
        }


class YohakuSessionStore:
    """
    In-memory live sessions, one random.Random each, guarded by a lock.
    Lives inside current_app.extensions['yohaku_sessions'].
    """
    def __init__(self, cap: Optional[int] = None, bonus_per_second: int = 5):
        self.cap = cap or DEFAULT_CAP
        self.bonus_per_second = bonus_per_second
        self._lock = threading.Lock()
        self._live: "OrderedDict[str, LiveSession]" = OrderedDict()

    # -------- public API --------
    def create(self, base: GameSettings, seed: Optional[int] = None) -> LiveSession:
        rng = random.Random(seed if seed is not None else secrets.randbits(64))
        session = generate_session(base, rng)
        live = LiveSession(
            session=session,
            playflow=Playflow(session_id=session.id, bonus_per_second=self.bonus_per_second),
            rng=rng,
        )
        live.start_current()
        with self._lock:
            self._live[session.id] = live
            while len(self._live) > self.cap:
                old_id, _ = self._live.popitem(last=False)
                logger.info("evicted yohaku session %s (cap=%d)", old_id, self.cap)
        logger.info("started yohaku session %s op=%s", session.id, base.operation)
        return live

    def get(self, session_id: str) -> LiveSession:
        with self._lock:
            live = self._live.get(str(session_id))
        if live is None:
            raise SessionNotFound(str(session_id))
        return live

    def pop(self, session_id: str) -> LiveSession:
        with self._lock:
            live = self._live.pop(str(session_id), None)
        if live is None:
            raise SessionNotFound(str(session_id))
        return live

    def __len__(self) -> int:
        with self._lock:
            return len(self._live)


def get_session_store() -> YohakuSessionStore:
    ext = current_app.extensions
    store: YohakuSessionStore | None = ext.get(EXTENSION_KEY)
    if store is None:
        store = YohakuSessionStore(
            cap=current_app.config.get("YOHAKU_SESSION_CAP"),
            bonus_per_second=current_app.config.get("YOHAKU_TIME_BONUS_PER_SECOND", 5),
        )
        ext[EXTENSION_KEY] = store
    return store
