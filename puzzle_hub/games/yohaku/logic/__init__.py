# puzzle_hub/games/yohaku/logic/__init__.py
from .errors import (
    InvalidSettings, InvalidAnswer, GenerationInvariantViolation, SessionNotFound, YohakuError,
)
from .types import NumberRange, GameSettings, Cell, Puzzle, GameSession
from .grid import build_solution, validate_settings
from .obfuscator import cells_to_hide, obfuscate
from .planner import generate_puzzle, generate_session, level_settings, calculate_score

__all__ = [
    "InvalidSettings", "InvalidAnswer", "GenerationInvariantViolation", "SessionNotFound", "YohakuError",
    "NumberRange", "GameSettings", "Cell", "Puzzle", "GameSession",
    "build_solution", "validate_settings",
    "cells_to_hide", "obfuscate",
    "generate_puzzle", "generate_session", "level_settings", "calculate_score",
]
