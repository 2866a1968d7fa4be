def test_yohaku_plan_prints_progression(runner):
    result = runner.invoke(args=["yohaku-plan"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 10
    assert lines[0].startswith("L1") and "easy" in lines[0] and "60s" in lines[0]
    assert "score=2800" in lines[-1] and "3x3" in lines[-1]


def test_yohaku_puzzle_prints_board(runner):
    result = runner.invoke(args=["yohaku-puzzle", "--size", "3", "--difficulty", "hard",
                                 "--max", "5", "--seed", "3"])
    assert result.exit_code == 0
    assert result.output.count("?") == 6
    assert "hidden=6" in result.output


def test_yohaku_puzzle_rejects_bad_range(runner):
    result = runner.invoke(args=["yohaku-puzzle", "--min", "9", "--max", "2"])
    assert result.exit_code != 0
    assert "below min" in result.output


def test_init_db(runner):
    result = runner.invoke(args=["yohaku-init-db"])
    assert result.exit_code == 0


def test_yohaku_puzzle_rejects_oversized_grid(runner, app):
    result = runner.invoke(args=["yohaku-puzzle", "--size", str(app.config["YOHAKU_MAX_SIZE"] + 1)])
    assert result.exit_code != 0
    assert "at most" in result.output


def test_yohaku_puzzle_skips_large_uniqueness_search(runner):
    result = runner.invoke(args=["yohaku-puzzle", "--size", "4", "--difficulty", "hard",
                                 "--max", "50", "--seed", "1"])
    assert result.exit_code == 0
    assert "unique=unknown" in result.output
