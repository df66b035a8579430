from __future__ import annotations
from typing import Dict, List

from sudoku_grid.grid import Grid
from sudoku_grid.models import ConflictType, Coordinate, ValidationResult


def _cells_1_indexed(cells: List[Coordinate]) -> List[tuple]:
    return [(c.row + 1, c.col + 1) for c in cells]


def _first_duplicate(grid: Grid, unit: List[Coordinate]):
    positions: Dict[int, List[Coordinate]] = {}
    for coord in unit:
        v = grid.cell_at_unchecked(coord).state.value
        if v is None:
            continue
        positions.setdefault(v, []).append(coord)
    for d, cells in positions.items():
        if len(cells) > 1:
            return d, cells
    return None


def find_violation(grid: Grid) -> ValidationResult:
    """
    Sudoku rule violations (duplicate digit in row/col/box).
    Returns the FIRST detected violation with a clear explanation.
    """

    # A) Row duplicates
    for r in range(Grid.ROW_COUNT):
        dup = _first_duplicate(grid, [Coordinate(r, c) for c in range(Grid.COL_COUNT)])
        if dup:
            d, cells = dup
            return ValidationResult(
                is_valid=False,
                conflict_type=ConflictType.ROW,
                conflict_cells=cells,
                digit=d,
                explanation=(
                    f"Row rule violation: digit {d} appears more than once in row {r+1}.\n"
                    f"Conflict cells (1-indexed): {_cells_1_indexed(cells)}."
                )
            )

    # B) Column duplicates
    for c in range(Grid.COL_COUNT):
        dup = _first_duplicate(grid, [Coordinate(r, c) for r in range(Grid.ROW_COUNT)])
        if dup:
            d, cells = dup
            return ValidationResult(
                is_valid=False,
                conflict_type=ConflictType.COL,
                conflict_cells=cells,
                digit=d,
                explanation=(
                    f"Column rule violation: digit {d} appears more than once in column {c+1}.\n"
                    f"Conflict cells (1-indexed): {_cells_1_indexed(cells)}."
                )
            )

    # C) Box duplicates
    for br in range(0, Grid.ROW_COUNT, Grid.SUBGRID_ROWS):
        for bc in range(0, Grid.COL_COUNT, Grid.SUBGRID_COLS):
            unit = [Coordinate(r, c)
                    for r in range(br, br + Grid.SUBGRID_ROWS)
                    for c in range(bc, bc + Grid.SUBGRID_COLS)]
            dup = _first_duplicate(grid, unit)
            if dup:
                d, cells = dup
                box_index = br + bc // Grid.SUBGRID_COLS + 1
                return ValidationResult(
                    is_valid=False,
                    conflict_type=ConflictType.BOX,
                    conflict_cells=cells,
                    digit=d,
                    explanation=(
                        f"Box rule violation: digit {d} appears more than once in box {box_index}.\n"
                        f"Conflict cells (1-indexed): {_cells_1_indexed(cells)}."
                    )
                )

    return ValidationResult(
        is_valid=True,
        explanation="No violations detected (no row/col/box duplicates)."
    )


def validation_to_dict(result: ValidationResult) -> dict:
    return {
        "ok": result.is_valid,
        "conflict_type": result.conflict_type.value,
        "conflict_cells": [[c.row, c.col] for c in result.conflict_cells],
        "digit": result.digit if not result.is_valid else None,
        "explanation": result.explanation,
    }
