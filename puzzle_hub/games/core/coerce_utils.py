# puzzle_hub/games/core/coerce_utils.py
from typing import Any, Dict, List, Optional

from ..yohaku.logic.errors import InvalidAnswer, InvalidSettings
from ..yohaku.logic.types import DEFAULT_RANGE, GameSettings, NumberRange

def coerce_int(val, field: str) -> int:
    """Coerce JSON-ish input to int or raise InvalidSettings naming the field."""
    if isinstance(val, bool):
        raise InvalidSettings(f"{field} must be an integer, got {val!r}")
    if isinstance(val, int):
        return val
    if isinstance(val, float) and val.is_integer():
        return int(val)
    if isinstance(val, str):
        try:    return int(val.strip())
        except ValueError: pass
    raise InvalidSettings(f"{field} must be an integer, got {val!r}")

def coerce_optional_int(val) -> Optional[int]:
    """Cell input: None/'' means empty, otherwise an int (or InvalidAnswer)."""
    if val is None:
        return None
    if isinstance(val, dict):
        return coerce_optional_int(val.get("value"))
    if isinstance(val, str) and not val.strip():
        return None
    try:
        return coerce_int(val, "cell value")
    except InvalidSettings as e:
        raise InvalidAnswer(str(e)) from None

def coerce_grid(val) -> List[List[Optional[int]]]:
    """Coerce a submitted grid (ints, strings or Cell dicts) to rows of Optional[int]."""
    if not isinstance(val, list) or not all(isinstance(r, list) for r in val):
        raise InvalidAnswer("grid must be a list of rows")
    return [[coerce_optional_int(c) for c in row] for row in val]

def normalize_level(level: Optional[str]) -> str:
    """Normalize difficulty strings; unknown values pass through lowercased."""
    if level is None: return "easy"
    ALIASES = {'0':'easy','easy':'easy','1':'medium','medium':'medium',
               '2':'hard','hard':'hard'}
    return ALIASES.get(str(level).strip().lower(), str(level).strip().lower())

def _given(j: Dict[str, Any], key: str, default):
    """Value of `key`, or `default` only when the key is absent or null."""
    val = j.get(key)
    return default if val is None else val

def settings_from_json(j: Optional[Dict[str, Any]], for_session: bool = False,
                       max_size: Optional[int] = None) -> GameSettings:
    """
    Build GameSettings from a request body, applying the API defaults:
    timer 30s, size 2, addition, range {1,10} when unset, easy.
    Defaults fill absent or null keys only; an explicit 0 or "" is kept
    and left for validation to reject.
    Session starts only default the operation; the planner owns the rest,
    so `max_size` only bounds single puzzles.
    """
    j = j or {}
    operation = str(_given(j, "operation", "addition")).strip().lower()

    rng = _given(j, "range", {})
    if not isinstance(rng, dict):
        raise InvalidSettings("range must be an object with min/max")
    number_range = NumberRange(
        coerce_int(_given(rng, "min", 0), "range.min"),
        coerce_int(_given(rng, "max", 0), "range.max"),
    )
    difficulty = normalize_level(_given(j, "difficulty", "easy"))

    if for_session:
        return GameSettings(
            size=coerce_int(_given(j, "size", 0), "size"),
            operation=operation,
            range=number_range,
            difficulty=difficulty,
            timer_duration=coerce_int(_given(j, "timerDuration", 0), "timerDuration"),
        )

    size = coerce_int(_given(j, "size", 2), "size")
    if max_size is not None and size > max_size:
        raise InvalidSettings(f"Grid size must be at most {max_size}, got {size}")
    return GameSettings(
        size=size,
        operation=operation,
        range=DEFAULT_RANGE if number_range.is_unset() else number_range,
        difficulty=difficulty,
        timer_duration=coerce_int(_given(j, "timerDuration", 30), "timerDuration"),
    )
