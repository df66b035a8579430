# tests/test_main.py
import pytest

from sudoku_grid.main import EXIT_ERROR, EXIT_NOT_SOLVED, EXIT_SOLVED, main

from conftest import PUZZLE, SOLUTION


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("SUDOKU_MAX_STEPS", raising=False)
    monkeypatch.delenv("SUDOKU_SEED", raising=False)


def test_solves_givens(capsys):
    assert main(["--givens", PUZZLE, "--seed", "1"]) == EXIT_SOLVED
    out = capsys.readouterr().out
    assert "VALIDATION REPORT" in out
    assert "Status: PASS" in out
    assert "5 3 4 | 6 7 8 | 9 1 2" in out


def test_random_grid(capsys):
    assert main(["--seed", "3"]) == EXIT_SOLVED
    out = capsys.readouterr().out
    assert "RANDOM GRID" in out
    assert "." not in out.split("RANDOM GRID:")[1]


def test_duplicate_givens_fail_validation(capsys):
    bad = "55" + "0" * 79
    assert main(["--givens", bad]) == EXIT_NOT_SOLVED
    out = capsys.readouterr().out
    assert "Status: FAIL" in out
    assert "Row rule violation" in out


def test_unsolvable_givens(capsys):
    unsolvable = "123456780" + "000000009" + "0" * 63
    assert main(["--givens", unsolvable]) == EXIT_NOT_SOLVED
    assert "No completion exists" in capsys.readouterr().out


def test_budget_exceeded(capsys):
    assert main(["--givens", PUZZLE, "--max-steps", "5"]) == EXIT_ERROR
    assert "within 5 search steps" in capsys.readouterr().out


def test_bad_givens(capsys):
    assert main(["--givens", "12x"]) == EXIT_ERROR
    assert "Expected 81 characters" in capsys.readouterr().err


def test_check_reports_placement(capsys):
    assert main(["--givens", SOLUTION, "--check", "4", "4", "5"]) == EXIT_SOLVED
    out = capsys.readouterr().out
    assert "PLACEMENT CHECK" in out
    assert "Can place:   False" in out
    assert "box starts at r4, c4" in out


def test_check_rejects_bad_coordinate(capsys):
    assert main(["--givens", PUZZLE, "--check", "9", "0", "1"]) == EXIT_ERROR
    assert "out of range" in capsys.readouterr().err
