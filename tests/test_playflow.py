import pytest

from puzzle_hub.games.core.playflow import Playflow, time_bonus

T0 = 1_700_000_000_000


@pytest.mark.unit
def test_time_bonus():
    assert time_bonus(12) == 60
    assert time_bonus(0) == 0
    assert time_bonus(-4) == 0
    assert time_bonus(3, per_second=10) == 30


@pytest.mark.unit
def test_solve_awards_potential_plus_time_left():
    pf = Playflow(session_id="session_1")
    pf.start_puzzle(level=1, puzzle_id="p1", timer_s=60, potential=410, now_ms=T0)
    assert pf.submit(False, now_ms=T0 + 5_000) == 0
    awarded = pf.submit(True, now_ms=T0 + 20_000)
    assert awarded == 410 + 40 * 5
    it = pf.items[1]
    assert it.attempts == 2 and it.incorrect_attempts == 1
    assert it.final_outcome == "solved_no_help"
    assert pf.total_awarded == awarded


@pytest.mark.unit
def test_late_solve_gets_no_bonus_and_hints_are_recorded():
    pf = Playflow(session_id="s")
    pf.start_puzzle(level=7, puzzle_id="p7", timer_s=30, potential=1270, now_ms=T0)
    pf.help()
    assert pf.submit(True, now_ms=T0 + 95_000) == 1270
    assert pf.items[7].final_outcome == "solved_with_help"
    # further submits on a finished puzzle change nothing
    assert pf.submit(True, now_ms=T0 + 96_000) == 0
    assert pf.items[7].attempts == 1


@pytest.mark.unit
def test_skip_and_dangling_puzzles():
    pf = Playflow(session_id="s")
    pf.start_puzzle(1, "p1", 60, 410, now_ms=T0)
    pf.skip(now_ms=T0 + 1_000)
    assert pf.items[1].final_outcome == "skipped" and pf.current is None

    pf.start_puzzle(2, "p2", 60, 420, now_ms=T0)
    pf.start_puzzle(3, "p3", 60, 430, now_ms=T0 + 2_000)
    assert pf.items[2].final_outcome == "unsolved_exit"

    pf.finalize(now_ms=T0 + 120_000)
    assert pf.items[3].final_outcome == "timed_out"


@pytest.mark.unit
def test_summary_totals():
    pf = Playflow(session_id="session_9")
    pf.start_puzzle(1, "p1", 60, 410, now_ms=T0)
    pf.submit(True, now_ms=T0 + 60_000)
    pf.start_puzzle(2, "p2", 60, 420, now_ms=T0)
    pf.help()
    pf.skip(now_ms=T0 + 1_000)
    summary = pf.summary()
    assert summary["session_id"] == "session_9"
    assert summary["totals"] == dict(solved=1, hinted=1, incorrect=0, skipped=1, awarded=410)
    assert [p["level"] for p in summary["per_puzzle"]] == [1, 2]
