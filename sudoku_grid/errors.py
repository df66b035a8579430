from __future__ import annotations

from sudoku_grid.models import Coordinate


class GridError(Exception):
    """Base for invalid arguments passed to the grid model."""


class CellIndexOutOfRange(GridError):
    def __init__(self, coordinate: Coordinate):
        self.coordinate = coordinate
        super().__init__(f"Cell index out of range: {coordinate}")


class ValueOutOfRange(GridError):
    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Cell value out of range (expected 1-9): {value}")


class SearchError(Exception):
    """Base for searches that stopped before reaching an answer."""

    def __init__(self, message: str, steps: int):
        self.steps = steps
        super().__init__(message)


class SearchBudgetExceeded(SearchError):
    def __init__(self, steps: int, max_steps: int):
        self.max_steps = max_steps
        super().__init__(f"No solution found within {max_steps} search steps", steps)


class SearchCancelled(SearchError):
    def __init__(self, steps: int):
        super().__init__(f"Search cancelled after {steps} steps", steps)
