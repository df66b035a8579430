from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

RC = Tuple[int, int]  # (row, col)


@dataclass(frozen=True, order=True)
class Coordinate:
    row: int
    col: int

    def as_tuple(self) -> RC:
        return (self.row, self.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True)
class CellState:
    """Empty when value is None, otherwise Filled(value)."""
    value: Optional[int] = None

    @staticmethod
    def filled(value: int) -> "CellState":
        return CellState(value)

    @property
    def is_empty(self) -> bool:
        return self.value is None

    @property
    def is_filled(self) -> bool:
        return self.value is not None

    def __repr__(self) -> str:
        return "Empty" if self.value is None else f"Filled({self.value})"


EMPTY = CellState()


@dataclass
class Cell:
    coordinate: Coordinate
    state: CellState = EMPTY
    solver_modifiable: bool = True


class ConflictType(str, Enum):
    ROW = "ROW"
    COL = "COL"
    BOX = "BOX"
    NONE = "NONE"


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    conflict_type: ConflictType = ConflictType.NONE
    conflict_cells: List[Coordinate] = field(default_factory=list)
    digit: int = -1
    explanation: str = ""


class SolveStatus(str, Enum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"
    INVALID = "invalid"
    BLOCKED = "blocked"  # an empty cell is closed to the solver


@dataclass(frozen=True)
class SolveResult:
    status: SolveStatus
    steps: int = 0
    filled: List[Coordinate] = field(default_factory=list)  # solver-written cells, in fill order
    validation: Optional[ValidationResult] = None
    blocked: List[Coordinate] = field(default_factory=list)  # empty cells the solver may not write

    @property
    def is_solvable(self) -> bool:
        return self.status is SolveStatus.SOLVED
