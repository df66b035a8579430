# tests/conftest.py
import pytest

from sudoku_grid.grid import Grid

PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def assert_fully_valid(grid: Grid) -> None:
    """Every row, column and box holds 1..9 exactly once."""
    m = grid.to_matrix()
    digits = set(range(1, 10))
    for r in range(9):
        assert set(m[r]) == digits, f"row {r}: {m[r]}"
    for c in range(9):
        assert {m[r][c] for r in range(9)} == digits, f"col {c}"
    for br in range(0, 9, 3):
        for bc in range(0, 9, 3):
            box = {m[r][c] for r in range(br, br + 3) for c in range(bc, bc + 3)}
            assert box == digits, f"box at ({br}, {bc})"


@pytest.fixture
def puzzle_grid() -> Grid:
    return Grid.from_string(PUZZLE)
