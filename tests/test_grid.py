import random

import pytest

from puzzle_hub.games.yohaku.logic.errors import InvalidSettings
from puzzle_hub.games.yohaku.logic.grid import (
    aggregate_solution, build_solution, fold, validate_settings,
)
from puzzle_hub.games.yohaku.logic.types import GameSettings, NumberRange


def _settings(size=2, operation="addition", lo=1, hi=10):
    return GameSettings(size=size, operation=operation, range=NumberRange(lo, hi))


@pytest.mark.unit
def test_fold_is_left_to_right():
    assert fold("addition", [3, 4, 5]) == 12
    assert fold("subtraction", [9, 2, 3]) == 4
    assert fold("multiplication", [2, 3, 4]) == 24
    assert fold("subtraction", [7]) == 7


@pytest.mark.unit
def test_fold_rejects_unknown_operation():
    with pytest.raises(InvalidSettings):
        fold("division", [8, 2])


@pytest.mark.unit
@pytest.mark.parametrize("operation", ["addition", "subtraction", "multiplication"])
@pytest.mark.parametrize("size", [1, 2, 3, 4])
def test_aggregates_match_row_and_column_folds(operation, size, rng):
    sol = build_solution(_settings(size=size, operation=operation), rng)
    n = size
    assert len(sol) == n + 1 and all(len(r) == n + 1 for r in sol)
    for i in range(n):
        assert sol[i][n] == fold(operation, sol[i][:n])
    for j in range(n):
        assert sol[n][j] == fold(operation, [sol[i][j] for i in range(n)])
    assert sol[n][n] == fold(operation, sol[n][:n])


@pytest.mark.unit
def test_free_cells_stay_inside_range(rng):
    for _ in range(50):
        sol = build_solution(_settings(size=3, lo=-4, hi=6), rng)
        for i in range(3):
            for j in range(3):
                assert -4 <= sol[i][j] <= 6


@pytest.mark.unit
def test_single_value_range_fills_every_cell(rng):
    sol = build_solution(_settings(size=3, lo=7, hi=7), rng)
    assert all(sol[i][j] == 7 for i in range(3) for j in range(3))


@pytest.mark.unit
def test_size_one_cell_equals_its_aggregates(rng):
    sol = build_solution(_settings(size=1), rng)
    v = sol[0][0]
    assert sol == ((v, v), (v, v))


@pytest.mark.unit
def test_subtraction_aggregates_concrete():
    sol = aggregate_solution([[9, 1, 2], [3, 1, 1], [2, 2, 1]], "subtraction")
    assert [sol[i][3] for i in range(3)] == [6, 1, -1]
    assert list(sol[3][:3]) == [4, -2, 0]
    # canonical corner: across the row of column aggregates
    assert sol[3][3] == 4 - (-2) - 0


@pytest.mark.unit
@pytest.mark.parametrize("operation", ["addition", "subtraction", "multiplication"])
def test_corner_direction_question(operation):
    # The corner is defined as the fold across column aggregates. Folding
    # down the row aggregates is NOT used; for these three operations the two
    # happen to agree (each free cell's sign in a subtraction fold is the
    # product of its row sign and column sign), which this test pins down so
    # a future operation that breaks it is noticed rather than silently fixed.
    rnd = random.Random(7)
    for size in (2, 3, 4):
        free = [[rnd.randint(1, 9) for _ in range(size)] for _ in range(size)]
        sol = aggregate_solution(free, operation)
        across = fold(operation, sol[size][:size])
        down = fold(operation, [sol[i][size] for i in range(size)])
        assert sol[size][size] == across
        assert across == down


@pytest.mark.unit
def test_same_seed_same_solution():
    a = build_solution(_settings(size=3), random.Random(99))
    b = build_solution(_settings(size=3), random.Random(99))
    assert a == b


@pytest.mark.unit
@pytest.mark.parametrize("settings", [
    GameSettings(size=0),
    GameSettings(size=-2),
    GameSettings(size=2, range=NumberRange(10, 1)),
    GameSettings(size=2, operation="division"),
    GameSettings(size=2, operation=""),
    GameSettings(size="3"),
    GameSettings(size=True),
])
def test_invalid_settings_raise(settings):
    with pytest.raises(InvalidSettings):
        validate_settings(settings)
    with pytest.raises(InvalidSettings):
        build_solution(settings, random.Random(1))


@pytest.mark.unit
def test_aggregate_solution_rejects_ragged_block():
    with pytest.raises(InvalidSettings):
        aggregate_solution([[1, 2], [3]], "addition")


@pytest.mark.unit
@pytest.mark.parametrize("lo, hi", [(1.5, 3), (1, "9"), (True, 4), (None, 5)])
def test_validate_rejects_non_integer_range_bounds(lo, hi):
    with pytest.raises(InvalidSettings, match="must be an integer"):
        validate_settings(_settings(lo=lo, hi=hi))
    with pytest.raises(InvalidSettings):
        build_solution(_settings(lo=lo, hi=hi), random.Random(1))
