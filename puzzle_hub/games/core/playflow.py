# puzzle_hub/games/core/playflow.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, List
from time import time

Outcome = str  # 'solved_no_help'|'solved_with_help'|'skipped'|'timed_out'|'unsolved_exit'

def _now_ms() -> int:
    return int(time() * 1000)

def time_bonus(seconds_left: int, per_second: int = 5) -> int:
    return max(0, int(seconds_left) * per_second)

@dataclass
class PlayInstance:
    level: int
    puzzle_id: str
    timer_s: int
    potential: int
    started_at_ms: int = field(default_factory=_now_ms)
    ended_at_ms: Optional[int] = None
    attempts: int = 0
    incorrect_attempts: int = 0
    hints: int = 0
    skipped: bool = False
    solved: bool = False
    awarded: int = 0
    final_outcome: Optional[Outcome] = None

    def seconds_left(self, now_ms: Optional[int] = None) -> int:
        now_ms = _now_ms() if now_ms is None else now_ms
        elapsed_s = (now_ms - self.started_at_ms) // 1000
        return max(0, self.timer_s - elapsed_s)

    def mark_end(self, outcome: Outcome, now_ms: Optional[int] = None):
        if self.ended_at_ms is None:
            self.ended_at_ms = _now_ms() if now_ms is None else now_ms
        self.final_outcome = outcome

@dataclass
class Playflow:
    """Per-session record of how each level went; owns the awarded score."""
    session_id: str
    bonus_per_second: int = 5
    started_at_ms: int = field(default_factory=_now_ms)
    current: Optional[PlayInstance] = None
    items: Dict[int, PlayInstance] = field(default_factory=dict)  # level -> PlayInstance

    # ---- lifecycle ----
    def start_puzzle(self, level: int, puzzle_id: str, timer_s: int, potential: int,
                     now_ms: Optional[int] = None) -> PlayInstance:
        # a puzzle left hanging is finalized as unsolved_exit
        if self.current and not self.current.final_outcome:
            self.current.mark_end('unsolved_exit', now_ms)
        pi = PlayInstance(level=level, puzzle_id=puzzle_id, timer_s=timer_s, potential=potential)
        if now_ms is not None:
            pi.started_at_ms = now_ms
        self.items[level] = pi
        self.current = pi
        return pi

    def submit(self, correct: bool, now_ms: Optional[int] = None) -> int:
        """Record an attempt; returns points awarded (0 unless this solves the puzzle)."""
        if not self.current or self.current.final_outcome:
            return 0
        cur = self.current
        cur.attempts += 1
        if not correct:
            cur.incorrect_attempts += 1
            return 0
        cur.solved = True
        cur.awarded = cur.potential + time_bonus(cur.seconds_left(now_ms), self.bonus_per_second)
        cur.mark_end('solved_with_help' if cur.hints else 'solved_no_help', now_ms)
        return cur.awarded

    def help(self):
        if self.current and not self.current.final_outcome:
            self.current.hints += 1

    def skip(self, now_ms: Optional[int] = None):
        if not self.current:
            return
        if not self.current.final_outcome:
            self.current.skipped = True
            self.current.mark_end('skipped', now_ms)
        self.current = None

    def finalize(self, now_ms: Optional[int] = None):
        """Close a dangling puzzle when the player leaves."""
        if self.current and not self.current.final_outcome:
            timed_out = self.current.seconds_left(now_ms) == 0
            self.current.mark_end('timed_out' if timed_out else 'unsolved_exit', now_ms)

    # ---- readout ----
    @property
    def total_awarded(self) -> int:
        return sum(it.awarded for it in self.items.values())

    def summary(self, finalize: bool = True) -> Dict:
        if finalize:
            self.finalize()

        totals = dict(solved=0, hinted=0, incorrect=0, skipped=0, awarded=0)
        per_puzzle: List[Dict] = []
        for level in sorted(self.items):
            it = self.items[level]
            if it.solved: totals['solved'] += 1
            if it.hints: totals['hinted'] += 1
            if it.incorrect_attempts > 0: totals['incorrect'] += 1
            if it.skipped: totals['skipped'] += 1
            totals['awarded'] += it.awarded
            per_puzzle.append(dict(
                level=level,
                puzzle_id=it.puzzle_id,
                final_outcome=it.final_outcome,
                attempts=it.attempts,
                incorrect_attempts=it.incorrect_attempts,
                hints=it.hints,
                skipped=it.skipped,
                solved=it.solved,
                potential=it.potential,
                awarded=it.awarded,
                started_at_ms=it.started_at_ms,
                ended_at_ms=it.ended_at_ms,
            ))

        return dict(
            session_id=self.session_id,
            started_at_ms=self.started_at_ms,
            ended_at_ms=_now_ms(),
            totals=totals,
            per_puzzle=per_puzzle,
        )
