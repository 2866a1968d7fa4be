# puzzle_hub/games/yohaku/logic/types.py
from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

OPERATIONS = ("addition", "subtraction", "multiplication")
DIFFICULTIES = ("easy", "medium", "hard")

# sumType tags
SUM_ROW = "row"
SUM_COLUMN = "column"
SUM_TOTAL = "total"
SUM_CELL = "cell"

IntGrid = Tuple[Tuple[int, ...], ...]


@dataclass(frozen=True)
class NumberRange:
    """Inclusive bounds for the random free-cell values."""
    min: int = 0
    max: int = 0

    def is_unset(self) -> bool:
        return self.min == 0 and self.max == 0

    def __contains__(self, value: int) -> bool:
        return self.min <= value <= self.max

    def to_dict(self) -> Dict[str, int]:
        return {"min": self.min, "max": self.max}


DEFAULT_RANGE = NumberRange(1, 10)


@dataclass(frozen=True)
class GameSettings:
    size: int = 2
    operation: str = "addition"
    range: NumberRange = field(default_factory=NumberRange)
    difficulty: str = "easy"
    timer_duration: int = 30

    def with_(self, **changes: Any) -> "GameSettings":
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timerDuration": self.timer_duration,
            "size": self.size,
            "operation": self.operation,
            "range": self.range.to_dict(),
            "difficulty": self.difficulty,
        }


@dataclass(frozen=True)
class Cell:
    value: int
    is_given: bool = True
    is_sum: bool = False
    sum_type: str = SUM_CELL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "isGiven": self.is_given,
            "isSum": self.is_sum,
            "sumType": self.sum_type,
        }


CellGrid = Tuple[Tuple[Cell, ...], ...]


@dataclass(frozen=True)
class Puzzle:
    """
    One Yohaku board. `grid` is what the player sees (hidden cells read 0),
    `solution` is the full (size+1)x(size+1) ground truth.
    """
    id: str
    size: int
    grid: CellGrid
    solution: IntGrid
    operation: str
    range: NumberRange
    difficulty: str
    level: int = 1
    score: int = 0
    timer_duration: int = 30

    def hidden_cells(self) -> List[Tuple[int, int]]:
        return [
            (i, j)
            for i in range(self.size)
            for j in range(self.size)
            if not self.grid[i][j].is_given
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "size": self.size,
            "grid": [[c.to_dict() for c in row] for row in self.grid],
            "solution": [list(row) for row in self.solution],
            "operation": self.operation,
            "range": self.range.to_dict(),
            "difficulty": self.difficulty,
            "level": self.level,
            "score": self.score,
            "timerDuration": self.timer_duration,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Puzzle":
        """
        Rebuild a puzzle a client echoed back (stateless validate/hint).
        Raises ValueError unless grid and solution are both (size+1)x(size+1)
        and every grid cell is an object.
        """
        rng = d.get("range") or {}
        if not isinstance(rng, dict):
            raise ValueError("range must be an object")
        size = int(d["size"])
        span = size + 1
        for name in ("grid", "solution"):
            rows = d[name]
            if (size < 1 or not isinstance(rows, list) or len(rows) != span
                    or any(not isinstance(r, list) or len(r) != span for r in rows)):
                raise ValueError(f"{name} must be {span}x{span} for size {size}")
        if any(not isinstance(c, dict) for row in d["grid"] for c in row):
            raise ValueError("grid cells must be objects")
        grid = tuple(
            tuple(
                Cell(
                    value=int(c.get("value", 0)),
                    is_given=bool(c.get("isGiven", True)),
                    is_sum=bool(c.get("isSum", False)),
                    sum_type=str(c.get("sumType", SUM_CELL)),
                )
                for c in row
            )
            for row in d["grid"]
        )
        return cls(
            id=str(d.get("id", "")),
            size=size,
            grid=grid,
            solution=tuple(tuple(int(v) for v in row) for row in d["solution"]),
            operation=str(d["operation"]),
            range=NumberRange(int(rng.get("min", 0)), int(rng.get("max", 0))),
            difficulty=str(d.get("difficulty", "medium")),
            level=int(d.get("level", 1)),
            score=int(d.get("score", 0)),
            timer_duration=int(d.get("timerDuration", 30)),
        )


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class GameSession:
    """
    Ten progressive puzzles. Only the progress fields change after creation,
    and only the calling layer changes them.
    """
    id: str
    puzzles: Tuple[Puzzle, ...]
    settings: GameSettings
    start_time: datetime = field(default_factory=_now_utc)
    current_puzzle_index: int = 0
    total_score: int = 0
    completed_count: int = 0

    @property
    def current_puzzle(self) -> Optional[Puzzle]:
        if 0 <= self.current_puzzle_index < len(self.puzzles):
            return self.puzzles[self.current_puzzle_index]
        return None

    @property
    def finished(self) -> bool:
        return self.current_puzzle_index >= len(self.puzzles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "puzzles": [p.to_dict() for p in self.puzzles],
            "currentPuzzle": self.current_puzzle_index,
            "totalScore": self.total_score,
            "completedCount": self.completed_count,
            "startTime": self.start_time.isoformat(),
            "settings": self.settings.to_dict(),
        }
