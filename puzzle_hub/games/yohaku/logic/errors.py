# puzzle_hub/games/yohaku/logic/errors.py
from __future__ import annotations


class YohakuError(Exception):
    """Base class for everything the Yohaku core raises."""


class InvalidSettings(YohakuError, ValueError):
    """Settings that cannot produce a well-formed puzzle (size, range, operation, level)."""


class GenerationInvariantViolation(YohakuError, RuntimeError):
    """An internal generation guard tripped; no partial puzzle is returned."""


class SessionNotFound(YohakuError, KeyError):
    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Unknown Yohaku session: {self.session_id}"


class InvalidAnswer(YohakuError, ValueError):
    """A submitted grid that does not fit the puzzle's shape."""
