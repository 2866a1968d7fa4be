# puzzle_hub/games/yohaku/logic/obfuscator.py
from __future__ import annotations
import logging
import random
from typing import List

from .errors import GenerationInvariantViolation
from .types import (
    SUM_CELL, SUM_COLUMN, SUM_ROW, SUM_TOTAL,
    Cell, CellGrid, IntGrid,
)

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = "medium"

# difficulty -> (numerator, denominator) of free cells to hide, floored
HIDE_FRACTIONS = {
    "easy":   (1, 3),
    "medium": (1, 2),
    "hard":   (2, 3),
}

# random draws allowed per free cell before the hide loop gives up
MAX_HIDE_ATTEMPTS_PER_CELL = 1000


def cells_to_hide(difficulty: str, total: int) -> int:
    """
    easy -> total//3, medium -> total//2, hard -> (2*total)//3.
    Only the exact lowercase names match, as in calculate_score; anything
    else (including "HARD") is treated as medium.
    """
    key = difficulty if difficulty in HIDE_FRACTIONS else DEFAULT_DIFFICULTY
    num, den = HIDE_FRACTIONS[key]
    return (total * num) // den


def _sum_type(i: int, j: int, n: int) -> str:
    if i == n and j == n:
        return SUM_TOTAL
    if i == n:
        return SUM_COLUMN
    if j == n:
        return SUM_ROW
    return SUM_CELL


def obfuscate(solution: IntGrid, difficulty: str, size: int, rng: random.Random) -> CellGrid:
    """
    Copy the solution into a Cell grid, then hide exactly cells_to_hide()
    free cells picked uniformly at random. Aggregate cells stay visible.
    """
    n = size
    cells: List[List[Cell]] = [
        [
            Cell(
                value=solution[i][j],
                is_given=True,
                is_sum=(i == n or j == n),
                sum_type=_sum_type(i, j, n),
            )
            for j in range(n + 1)
        ]
        for i in range(n + 1)
    ]

    total = n * n
    target = cells_to_hide(difficulty, total)
    if target > total:
        raise GenerationInvariantViolation(
            f"Hide policy asked for {target} cells but only {total} free cells exist"
        )

    hidden = 0
    budget = MAX_HIDE_ATTEMPTS_PER_CELL * max(total, 1)
    draws = 0
    while hidden < target:
        if draws >= budget:
            raise GenerationInvariantViolation(
                f"Hide loop exceeded {budget} draws ({hidden}/{target} hidden)"
            )
        draws += 1
        i = rng.randrange(n)
        j = rng.randrange(n)
        c = cells[i][j]
        if c.is_given and not c.is_sum:
            cells[i][j] = Cell(value=0, is_given=False, is_sum=False, sum_type=SUM_CELL)
            hidden += 1

    logger.debug("hid %d/%d free cells (%s) in %d draws", hidden, total, difficulty, draws)
    return tuple(tuple(row) for row in cells)
