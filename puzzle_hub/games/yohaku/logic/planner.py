# puzzle_hub/games/yohaku/logic/planner.py
from __future__ import annotations
import logging
import random
import time
from typing import Dict, List, NamedTuple, Optional

from .errors import InvalidSettings
from .grid import build_solution, validate_settings
from .obfuscator import obfuscate
from .types import DEFAULT_RANGE, GameSession, GameSettings, Puzzle

logger = logging.getLogger(__name__)

SESSION_LENGTH = 10
BASE_SCORE = 100
LEVEL_BONUS = 10
DIFFICULTY_MULTIPLIER: Dict[str, int] = {"easy": 1, "medium": 2, "hard": 3}


class LevelPlan(NamedTuple):
    difficulty: str
    size: int
    timer_duration: int


# Levels 1-3 easy, 4-6 medium, 7-8 hard on 2x2; 9 medium 3x3; 10 hard 3x3.
PROGRESSION: Dict[int, LevelPlan] = {
    1:  LevelPlan("easy", 2, 60),
    2:  LevelPlan("easy", 2, 60),
    3:  LevelPlan("easy", 2, 60),
    4:  LevelPlan("medium", 2, 45),
    5:  LevelPlan("medium", 2, 45),
    6:  LevelPlan("medium", 2, 45),
    7:  LevelPlan("hard", 2, 30),
    8:  LevelPlan("hard", 2, 30),
    9:  LevelPlan("medium", 3, 90),
    10: LevelPlan("hard", 3, 90),
}


def level_settings(base: GameSettings, level: int) -> GameSettings:
    """
    Settings for one level of a session. Operation comes from `base`; size,
    difficulty and timer come from PROGRESSION. A non-default range is kept,
    an unset {0,0} range becomes {1,10}. `base` is left untouched.
    """
    plan = PROGRESSION.get(level)
    if plan is None:
        raise InvalidSettings(f"Session level must be 1..{SESSION_LENGTH}, got {level!r}")
    return base.with_(
        size=plan.size,
        difficulty=plan.difficulty,
        timer_duration=plan.timer_duration,
        range=DEFAULT_RANGE if base.range.is_unset() else base.range,
    )


def calculate_score(settings: GameSettings, level: int) -> int:
    """Potential score baked into a puzzle: 100 * size^2 * difficulty + level*10."""
    multiplier = DIFFICULTY_MULTIPLIER.get(settings.difficulty, 1)
    return BASE_SCORE * settings.size * settings.size * multiplier + level * LEVEL_BONUS


def generate_puzzle(settings: GameSettings, level: int = 1,
                    rng: Optional[random.Random] = None) -> Puzzle:
    """Build one puzzle. `level` only feeds the score and the id."""
    validate_settings(settings)
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        raise InvalidSettings(f"Puzzle level must be a positive integer, got {level!r}")
    rng = rng or random.Random()

    solution = build_solution(settings, rng)
    grid = obfuscate(solution, settings.difficulty, settings.size, rng)

    return Puzzle(
        id=f"yohaku_{time.time_ns()}_{level}",
        size=settings.size,
        grid=grid,
        solution=solution,
        operation=settings.operation,
        range=settings.range,
        difficulty=settings.difficulty,
        level=level,
        score=calculate_score(settings, level),
        timer_duration=settings.timer_duration,
    )


def generate_session(base: GameSettings, rng: Optional[random.Random] = None) -> GameSession:
    """All ten levels are generated up front; any failure aborts the whole session."""
    rng = rng or random.Random()
    puzzles: List[Puzzle] = []
    for level in range(1, SESSION_LENGTH + 1):
        puzzles.append(generate_puzzle(level_settings(base, level), level, rng))

    session = GameSession(
        id=f"session_{time.time_ns()}",
        puzzles=tuple(puzzles),
        settings=base,
    )
    logger.debug("generated session %s (%s), potential=%d",
                 session.id, base.operation, sum(p.score for p in puzzles))
    return session
