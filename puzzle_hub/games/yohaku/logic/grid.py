# puzzle_hub/games/yohaku/logic/grid.py
from __future__ import annotations
import logging
import random
from typing import Iterable, List, Sequence

from .errors import InvalidSettings
from .types import OPERATIONS, GameSettings, IntGrid

logger = logging.getLogger(__name__)

# ============================================================
# Operation folding
# ============================================================

def _add(a: int, b: int) -> int:
    return a + b

def _sub(a: int, b: int) -> int:
    return a - b

def _mul(a: int, b: int) -> int:
    return a * b

_STEP = {"addition": _add, "subtraction": _sub, "multiplication": _mul}


def fold(operation: str, values: Iterable[int]) -> int:
    """
    Left-to-right fold starting from the first value:
      fold('subtraction', [9, 2, 3]) -> (9 - 2) - 3 = 4
    Order matters for subtraction.
    """
    try:
        step = _STEP[operation]
    except KeyError:
        raise InvalidSettings(f"Unsupported operation: {operation!r}") from None
    it = iter(values)
    try:
        result = next(it)
    except StopIteration:
        raise InvalidSettings("Cannot fold an empty row") from None
    for v in it:
        result = step(result, v)
    return result


# ============================================================
# Settings guard
# ============================================================

def validate_settings(settings: GameSettings) -> None:
    """Raise InvalidSettings before any computation starts."""
    size = settings.size
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidSettings(f"Grid size must be an integer, got {size!r}")
    if size < 1:
        raise InvalidSettings(f"Grid size must be at least 1, got {size}")
    if settings.operation not in OPERATIONS:
        raise InvalidSettings(
            f"Unsupported operation {settings.operation!r}; expected one of {', '.join(OPERATIONS)}"
        )
    lo, hi = settings.range.min, settings.range.max
    for name, bound in (("min", lo), ("max", hi)):
        if isinstance(bound, bool) or not isinstance(bound, int):
            raise InvalidSettings(f"Number range {name} must be an integer, got {bound!r}")
    if hi < lo:
        raise InvalidSettings(f"Number range max ({hi}) is below min ({lo})")


# ============================================================
# Solution building
# ============================================================

def aggregate_solution(free_values: Sequence[Sequence[int]], operation: str) -> IntGrid:
    """
    Wrap an NxN block of free values with its aggregates:
      [i][N] = fold of row i, [N][j] = fold of column j,
      [N][N] = fold across the row of column aggregates.
    """
    n = len(free_values)
    if n < 1 or any(len(row) != n for row in free_values):
        raise InvalidSettings("Free values must form a non-empty square block")

    rows: List[List[int]] = [list(map(int, row)) + [0] for row in free_values]
    rows.append([0] * (n + 1))

    for i in range(n):
        rows[i][n] = fold(operation, rows[i][:n])
    for j in range(n):
        rows[n][j] = fold(operation, (rows[i][j] for i in range(n)))
    # canonical corner direction: across the aggregate row
    rows[n][n] = fold(operation, rows[n][:n])

    return tuple(tuple(r) for r in rows)


def build_solution(settings: GameSettings, rng: random.Random) -> IntGrid:
    """Draw every free cell uniformly from the inclusive range, then aggregate."""
    validate_settings(settings)
    n = settings.size
    lo, hi = settings.range.min, settings.range.max
    free = [[rng.randint(lo, hi) for _ in range(n)] for _ in range(n)]
    solution = aggregate_solution(free, settings.operation)
    logger.debug("built %dx%d %s solution, corner=%d", n + 1, n + 1, settings.operation, solution[n][n])
    return solution
