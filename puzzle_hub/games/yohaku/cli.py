# puzzle_hub/games/yohaku/cli.py
from __future__ import annotations
import random

import click
from flask import Flask, current_app

from .logic.checker import find_solutions
from .logic.errors import InvalidSettings
from .logic.planner import PROGRESSION, calculate_score, generate_puzzle, level_settings
from .logic.types import DIFFICULTIES, OPERATIONS, GameSettings, NumberRange

# candidate fillings (range width ** hidden cells) the uniqueness search may face
UNIQUENESS_SEARCH_LIMIT = 10 ** 6


def _render(puzzle) -> str:
    width = max(len(str(v)) for row in puzzle.solution for v in row) + 1
    lines = []
    for i, row in enumerate(puzzle.grid):
        if i == puzzle.size:
            lines.append("-" * ((width + 1) * (puzzle.size + 1) + 1))
        cells = [(str(c.value) if c.is_given else "?").rjust(width) for c in row]
        lines.append(" ".join(cells[:-1]) + " |" + cells[-1])
    return "\n".join(lines)


def _uniqueness(puzzle) -> str:
    width = puzzle.range.max - puzzle.range.min + 1
    if width ** len(puzzle.hidden_cells()) > UNIQUENESS_SEARCH_LIMIT:
        return "unknown"
    return "yes" if len(find_solutions(puzzle, limit=2)) == 1 else "no"


def register_cli(app: Flask) -> None:

    @app.cli.command("yohaku-puzzle")
    @click.option("--size", default=2, show_default=True, type=int)
    @click.option("--operation", default="addition", show_default=True, type=click.Choice(OPERATIONS))
    @click.option("--difficulty", default="easy", show_default=True, type=click.Choice(DIFFICULTIES))
    @click.option("--min", "lo", default=1, show_default=True, type=int)
    @click.option("--max", "hi", default=10, show_default=True, type=int)
    @click.option("--seed", default=None, type=int, help="Seed for a reproducible board.")
    def yohaku_puzzle(size, operation, difficulty, lo, hi, seed):
        """Print one Yohaku puzzle and whether its solution is unique."""
        max_size = current_app.config.get("YOHAKU_MAX_SIZE")
        if max_size is not None and size > max_size:
            raise click.ClickException(f"Grid size must be at most {max_size}, got {size}")
        settings = GameSettings(size=size, operation=operation, range=NumberRange(lo, hi),
                                difficulty=difficulty)
        try:
            puzzle = generate_puzzle(settings, 1, random.Random(seed))
        except InvalidSettings as e:
            raise click.ClickException(str(e))
        click.echo(_render(puzzle))
        click.echo(f"hidden={len(puzzle.hidden_cells())} score={puzzle.score} "
                   f"unique={_uniqueness(puzzle)}")

    @app.cli.command("yohaku-plan")
    @click.option("--operation", default="addition", show_default=True, type=click.Choice(OPERATIONS))
    def yohaku_plan(operation):
        """Print the ten-level session progression."""
        base = GameSettings(operation=operation)
        for level in sorted(PROGRESSION):
            s = level_settings(base, level)
            click.echo(f"L{level:<2} {s.difficulty:<6} {s.size}x{s.size} "
                       f"{s.timer_duration:>3}s score={calculate_score(s, level)}")
