# puzzle_hub/games/yohaku/logic/checker.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .errors import InvalidAnswer
from .grid import aggregate_solution, fold
from .types import Puzzle

logger = logging.getLogger(__name__)

GENERIC_HINT = "Try focusing on the cells with the smallest possible values first!"

OPERATION_WORD = {"addition": "sum", "subtraction": "difference", "multiplication": "product"}

Answer = Sequence[Sequence[Optional[int]]]
Coord = Tuple[int, int]


@dataclass
class CheckResult:
    valid: bool
    wrong_cells: List[Coord] = field(default_factory=list)
    missing_cells: List[Coord] = field(default_factory=list)
    changed_givens: List[Coord] = field(default_factory=list)
    out_of_range: List[Coord] = field(default_factory=list)
    bad_rows: List[int] = field(default_factory=list)
    bad_columns: List[int] = field(default_factory=list)
    corner_ok: bool = True

    @property
    def message(self) -> str:
        if self.valid:
            return "Puzzle solved correctly!"
        if self.missing_cells:
            return f"{len(self.missing_cells)} cell(s) still empty."
        if self.changed_givens:
            return "Given numbers cannot be changed."
        if self.out_of_range:
            return "Some numbers are outside the puzzle's range."
        return "Some totals don't match yet. Keep trying!"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "message": self.message,
            "wrongCells": [list(c) for c in self.wrong_cells],
            "missingCells": [list(c) for c in self.missing_cells],
            "changedGivens": [list(c) for c in self.changed_givens],
            "outOfRange": [list(c) for c in self.out_of_range],
            "badRows": self.bad_rows,
            "badColumns": self.bad_columns,
            "cornerOk": self.corner_ok,
        }


def _free_block(puzzle: Puzzle, values: Answer) -> List[List[Optional[int]]]:
    """Accept the NxN free block or the full (N+1)x(N+1) grid."""
    n = puzzle.size
    rows = list(values or [])
    if len(rows) not in (n, n + 1):
        raise InvalidAnswer(f"Expected {n} or {n + 1} rows, got {len(rows)}")
    block: List[List[Optional[int]]] = []
    for i in range(n):
        row = list(rows[i])
        if len(row) not in (n, n + 1):
            raise InvalidAnswer(f"Row {i + 1}: expected {n} or {n + 1} values, got {len(row)}")
        block.append([None if v is None else int(v) for v in row[:n]])
    return block


def check_answer(puzzle: Puzzle, values: Answer) -> CheckResult:
    """
    Valid when givens are untouched, every cell is filled within range, and
    all row/column/corner totals re-fold to the visible aggregates. Any
    completion meeting those constraints is accepted, not only the stored one.
    """
    n = puzzle.size
    block = _free_block(puzzle, values)
    res = CheckResult(valid=False)

    for i in range(n):
        for j in range(n):
            v = block[i][j]
            cell = puzzle.grid[i][j]
            if v is None:
                res.missing_cells.append((i, j))
                if not cell.is_given:
                    res.wrong_cells.append((i, j))
                continue
            if cell.is_given:
                if v != cell.value:
                    res.changed_givens.append((i, j))
                continue
            if v not in puzzle.range:
                res.out_of_range.append((i, j))
            if v != puzzle.solution[i][j]:
                res.wrong_cells.append((i, j))

    if res.missing_cells:
        return res

    totals = aggregate_solution(block, puzzle.operation)
    res.bad_rows = [i for i in range(n) if totals[i][n] != puzzle.grid[i][n].value]
    res.bad_columns = [j for j in range(n) if totals[n][j] != puzzle.grid[n][j].value]
    res.corner_ok = totals[n][n] == puzzle.grid[n][n].value

    res.valid = not (res.changed_givens or res.out_of_range or res.bad_rows
                     or res.bad_columns) and res.corner_ok
    return res


# ============================================================
# Hints
# ============================================================

def _unresolved(puzzle: Puzzle, filled: Optional[Answer]) -> List[Coord]:
    block = _free_block(puzzle, filled) if filled is not None else None
    out: List[Coord] = []
    for i, j in puzzle.hidden_cells():
        if block is None or block[i][j] != puzzle.solution[i][j]:
            out.append((i, j))
    return out


def next_hint(puzzle: Puzzle, filled: Optional[Answer] = None) -> Dict[str, Any]:
    """
    Reveal one hidden cell the player has not got right yet, preferring a
    cell that is the last unknown of its row or column.
    """
    todo = _unresolved(puzzle, filled)
    if not todo:
        return {"row": None, "col": None, "value": None, "reason": GENERIC_HINT}

    n = puzzle.size
    word = OPERATION_WORD.get(puzzle.operation, "total")
    row_unknowns = {i: sum(1 for (r, _) in todo if r == i) for i in range(n)}
    col_unknowns = {j: sum(1 for (_, c) in todo if c == j) for j in range(n)}

    for i, j in todo:
        if row_unknowns[i] == 1:
            reason = (f"Row {i + 1} has only this cell left; its {word} must be "
                      f"{puzzle.grid[i][n].value}.")
            return {"row": i, "col": j, "value": puzzle.solution[i][j], "reason": reason}
        if col_unknowns[j] == 1:
            reason = (f"Column {j + 1} has only this cell left; its {word} must be "
                      f"{puzzle.grid[n][j].value}.")
            return {"row": i, "col": j, "value": puzzle.solution[i][j], "reason": reason}

    i, j = todo[0]
    return {
        "row": i, "col": j, "value": puzzle.solution[i][j],
        "reason": f"Row {i + 1}, column {j + 1} holds {puzzle.solution[i][j]}.",
    }


# ============================================================
# Solution search
# ============================================================

def find_solutions(puzzle: Puzzle, limit: int = 2) -> List[Tuple[Tuple[int, ...], ...]]:
    """
    Backtrack over the hidden cells (row-major, values within range) and
    return up to `limit` full solution grids consistent with every visible cell.
    """
    n = puzzle.size
    op = puzzle.operation
    hidden = puzzle.hidden_cells()
    work = [[puzzle.grid[i][j].value for j in range(n)] for i in range(n)]
    row_target = [puzzle.grid[i][n].value for i in range(n)]
    col_target = [puzzle.grid[n][j].value for j in range(n)]
    corner = puzzle.grid[n][n].value

    last_in_row: Dict[int, int] = {}
    last_in_col: Dict[int, int] = {}
    for k, (i, j) in enumerate(hidden):
        last_in_row[i] = k
        last_in_col[j] = k

    # rows/columns without unknowns must already agree
    for i in range(n):
        if i not in last_in_row and fold(op, work[i]) != row_target[i]:
            return []
    for j in range(n):
        if j not in last_in_col and fold(op, (work[r][j] for r in range(n))) != col_target[j]:
            return []

    found: List[Tuple[Tuple[int, ...], ...]] = []
    candidates = range(puzzle.range.min, puzzle.range.max + 1)

    def place(k: int) -> bool:
        if k == len(hidden):
            full = aggregate_solution(work, op)
            if full[n][n] == corner:
                found.append(full)
            return len(found) >= limit
        i, j = hidden[k]
        for v in candidates:
            work[i][j] = v
            if last_in_row.get(i) == k and fold(op, work[i]) != row_target[i]:
                continue
            if last_in_col.get(j) == k and fold(op, (work[r][j] for r in range(n))) != col_target[j]:
                continue
            if place(k + 1):
                return True
        work[i][j] = 0
        return False

    place(0)
    logger.debug("solution search for %s: %d found (limit %d)", puzzle.id, len(found), limit)
    return found


def is_unique(puzzle: Puzzle) -> bool:
    return len(find_solutions(puzzle, limit=2)) == 1
