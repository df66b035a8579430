from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional

from sudoku_grid.config import SolverConfig
from sudoku_grid.errors import SearchBudgetExceeded, SearchCancelled
from sudoku_grid.grid import Grid
from sudoku_grid.models import EMPTY, CellState, Coordinate, SolveResult, SolveStatus
from sudoku_grid.reports import find_violation

log = logging.getLogger(__name__)

DIGITS = list(range(Grid.MIN_CELL_VALUE, Grid.MAX_CELL_VALUE + 1))
_FILLED = {d: CellState.filled(d) for d in DIGITS}


class _Search:
    """
    State carried through one backtracking run:
      - steps: number of fill-step calls so far
      - trail: cells currently holding a solver-placed value, in fill order
    """

    def __init__(self, grid: Grid, rng: random.Random, max_steps: int,
                 should_stop: Optional[Callable[[], bool]]):
        self.grid = grid
        self.rng = rng
        self.max_steps = max_steps
        self.should_stop = should_stop
        self.steps = 0
        self.trail: List[Coordinate] = []

    def next_target(self, start: int) -> int:
        """Index of the first empty cell at or after start; -1 if none."""
        for i in range(start, Grid.CELL_COUNT):
            if self.grid.cell_at_index_unchecked(i).state.is_empty:
                return i
        return -1

    def fill(self, start: int = 0) -> bool:
        self.steps += 1
        if self.steps >= self.max_steps:
            raise SearchBudgetExceeded(self.steps, self.max_steps)
        if self.should_stop is not None and self.should_stop():
            raise SearchCancelled(self.steps)

        idx = self.next_target(start)
        if idx < 0:
            return True
        coord = Coordinate(idx // Grid.COL_COUNT, idx % Grid.COL_COUNT)

        shuffled = DIGITS[:]
        self.rng.shuffle(shuffled)

        for d in shuffled:
            if not self.grid.can_place_at_unchecked(coord, d):
                continue
            self.grid.set_cell_unchecked(coord, _FILLED[d])
            self.trail.append(coord)
            # every cell before idx is filled or off-limits, so resume from idx + 1
            if self.fill(idx + 1):
                return True
            self.trail.pop()
            self.grid.set_cell_unchecked(coord, EMPTY)

        return False

    def undo_all(self) -> None:
        for coord in reversed(self.trail):
            self.grid.set_cell_unchecked(coord, EMPTY)
        self.trail.clear()


def solve(
    grid: Grid,
    rng: Optional[random.Random] = None,
    config: Optional[SolverConfig] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> SolveResult:
    """
    Complete grid in place with randomized depth-first backtracking.

    Only empty cells are written. A grid that already holds a row/col/box
    duplicate is left untouched and reported as INVALID; one with an empty cell
    whose solver_modifiable is False cannot be completed and is reported as BLOCKED.

    Raises SearchBudgetExceeded when config.max_steps fill steps are used up and
    SearchCancelled when should_stop() returns True. In both cases every cell the
    search filled is emptied again before the exception propagates.
    """
    config = config or SolverConfig()
    if rng is None:
        rng = random.Random(config.seed)

    validation = find_violation(grid)
    if not validation.is_valid:
        log.debug("Refusing to solve inconsistent grid: %s", validation.explanation)
        return SolveResult(SolveStatus.INVALID, validation=validation)

    blocked = [cell.coordinate for cell in grid if cell.state.is_empty and not cell.solver_modifiable]
    if blocked:
        log.debug("Refusing to solve: %d empty cells are not solver-modifiable", len(blocked))
        return SolveResult(SolveStatus.BLOCKED, validation=validation, blocked=blocked)

    search = _Search(grid, rng, config.max_steps, should_stop)
    log.debug("Starting search (max_steps=%d, empty cells=%d)",
              config.max_steps, len(grid.empty_coordinates()))
    try:
        found = search.fill()
    except SearchBudgetExceeded:
        log.warning("Search budget of %d steps exhausted", config.max_steps)
        search.undo_all()
        raise
    except SearchCancelled:
        log.debug("Search cancelled after %d steps", search.steps)
        search.undo_all()
        raise

    if not found:
        log.debug("No completion exists (%d steps)", search.steps)
        return SolveResult(SolveStatus.UNSOLVABLE, steps=search.steps, validation=validation)

    log.debug("Solved in %d steps, filled %d cells", search.steps, len(search.trail))
    return SolveResult(SolveStatus.SOLVED, steps=search.steps, filled=list(search.trail),
                       validation=validation)
