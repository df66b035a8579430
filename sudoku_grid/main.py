import argparse
import logging
import random
import sys

from sudoku_grid.config import SolverConfig
from sudoku_grid.errors import GridError, SearchError
from sudoku_grid.grid import Grid
from sudoku_grid.models import Coordinate, SolveStatus
from sudoku_grid.reports import find_violation
from sudoku_grid.solver import solve

EXIT_SOLVED = 0
EXIT_NOT_SOLVED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sudoku-grid", description="Solve or generate a 9x9 Sudoku grid.")
    p.add_argument("--givens", required=False,
                   help="81-char givens (digits + . or 0); omit to generate a random full grid")
    p.add_argument("--seed", type=int, default=None, help="Seed for the candidate shuffle")
    p.add_argument("--max-steps", type=int, default=None, help="Search step budget")
    p.add_argument("--check", nargs=3, type=int, metavar=("ROW", "COL", "VALUE"),
                   help="Report whether VALUE may be placed at (ROW, COL), 0-based")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return p


def print_check(grid: Grid, row: int, col: int, value: int) -> None:
    coord = Coordinate(row, col)
    start = Grid.get_subgrid_start(coord)
    print("PLACEMENT CHECK")
    print("-" * 60)
    print(f"Cell (r{row+1}, c{col+1}), value {value}")
    print(f"  Row free:    {grid.can_place_in_row(row, value)}")
    print(f"  Column free: {grid.can_place_in_column(col, value)}")
    print(f"  Box free:    {grid.can_place_in_subgrid(coord, value)} (box starts at r{start.row+1}, c{start.col+1})")
    print(f"  Can place:   {grid.can_place_at(coord, value)}")
    print("-" * 60)


def run(args) -> int:
    config = SolverConfig.from_env().with_overrides(max_steps=args.max_steps, seed=args.seed)
    rng = random.Random(config.seed)

    if args.givens is None:
        grid = Grid.new_random(rng=rng, config=config)
        print("\nRANDOM GRID:\n")
        print(grid.pretty())
        print()
        if args.check:
            print_check(grid, *args.check)
        return EXIT_SOLVED

    grid = Grid.from_string(args.givens)

    print("\nGIVENS:\n")
    print(grid.pretty())
    print()

    if args.check:
        print_check(grid, *args.check)

    print("RUN REPORT")
    print("=" * 60)

    # 1) VALIDATION
    violation = find_violation(grid)
    print("VALIDATION REPORT")
    print("-" * 60)
    if not violation.is_valid:
        print("Status: FAIL")
        print(violation.explanation)
        print("=" * 60)
        return EXIT_NOT_SOLVED
    print("Status: PASS")
    print("No Sudoku rule violations detected (no row/col/box duplicates).")
    print("-" * 60)

    # 2) SOLVE
    result = solve(grid, rng=rng, config=config)
    print("SOLVER REPORT")
    print("-" * 60)
    if result.status is not SolveStatus.SOLVED:
        print("Status: FAIL (No completion exists)")
        print(f"Search steps: {result.steps}")
        print("=" * 60)
        return EXIT_NOT_SOLVED
    print("Status: PASS")
    print(f"Search steps: {result.steps}")
    print(f"Cells filled by solver: {len(result.filled)}")
    print("\nSOLUTION:\n")
    print(grid.pretty())
    print("=" * 60)
    print()
    return EXIT_SOLVED


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except SearchError as e:
        print(f"Status: FAIL ({e})")
        return EXIT_ERROR
    except (GridError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
