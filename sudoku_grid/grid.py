from __future__ import annotations
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from sudoku_grid.errors import CellIndexOutOfRange, ValueOutOfRange
from sudoku_grid.models import EMPTY, Cell, CellState, Coordinate

CoordLike = Union[Coordinate, Tuple[int, int]]


def parse_81(s: str) -> List[List[int]]:
    s = "".join(ch for ch in s if not ch.isspace())
    if len(s) != 81:
        raise ValueError(f"Expected 81 characters after removing whitespace, got {len(s)}")
    grid: List[List[int]] = []
    for r in range(9):
        row: List[int] = []
        for c in range(9):
            ch = s[r * 9 + c]
            if ch in ".0":
                row.append(0)
            elif ch in "123456789":
                row.append(int(ch))
            else:
                raise ValueError(f"Invalid char '{ch}' in grid.")
        grid.append(row)
    return grid


# cell indices of each 3x3 box, keyed by the index of its top-left cell
_BOX_INDICES = {
    br * 9 + bc: [r * 9 + c for r in range(br, br + 3) for c in range(bc, bc + 3)]
    for br in range(0, 9, 3)
    for bc in range(0, 9, 3)
}


def _as_coordinate(c: CoordLike) -> Coordinate:
    if isinstance(c, Coordinate):
        return c
    row, col = c
    return Coordinate(row, col)


class Grid:
    """
    9x9 grid of cells stored row-major (index = row * 9 + col).

    Every public accessor validates its coordinate and value arguments before
    touching state. Row/column/box uniqueness is not enforced on writes; use the
    can_place_* queries or set values through the solver to keep a valid state.
    """

    SUBGRID_ROWS = 3
    SUBGRID_COLS = 3
    SUBGRID_COUNT = 3
    ROW_COUNT = SUBGRID_ROWS * SUBGRID_COUNT
    COL_COUNT = SUBGRID_COLS * SUBGRID_COUNT
    CELL_COUNT = ROW_COUNT * COL_COUNT
    MIN_CELL_VALUE = 1
    MAX_CELL_VALUE = 9

    def __init__(self, cells: Optional[List[Cell]] = None):
        if cells is None:
            cells = [Cell(Coordinate(r, c)) for r in range(self.ROW_COUNT) for c in range(self.COL_COUNT)]
        if len(cells) != self.CELL_COUNT:
            raise ValueError(f"Expected {self.CELL_COUNT} cells, got {len(cells)}")
        self._cells = cells

    # ---------- construction ----------
    @staticmethod
    def new_empty() -> "Grid":
        return Grid()

    @staticmethod
    def from_matrix(matrix: Sequence[Sequence[int]]) -> "Grid":
        """
        Build a grid from a 9x9 matrix (0 = empty, 1..9 = given).
        Non-zero entries become givens (solver_modifiable = False).
        Raises ValueOutOfRange for any entry outside 0..9, ValueError for a bad shape.
        """
        if len(matrix) != Grid.ROW_COUNT or any(len(row) != Grid.COL_COUNT for row in matrix):
            raise ValueError("Grid must be 9 rows of 9 columns.")

        grid = Grid.new_empty()
        for r, row in enumerate(matrix):
            for c, value in enumerate(row):
                if isinstance(value, int) and not isinstance(value, bool) and value == 0:
                    continue
                coord = Coordinate(r, c)
                grid._check_value(value)
                grid.set_cell(coord, CellState.filled(value))
                grid.set_cell_solver_modifiable(coord, False)
        return grid

    @staticmethod
    def from_string(givens_81: str) -> "Grid":
        return Grid.from_matrix(parse_81(givens_81))

    @staticmethod
    def new_random(rng=None, config=None) -> "Grid":
        """A random complete grid, produced by solving an empty one."""
        grid = Grid.new_empty()
        grid.solve(rng=rng, config=config)
        return grid

    def copy(self) -> "Grid":
        return Grid([Cell(c.coordinate, c.state, c.solver_modifiable) for c in self._cells])

    # ---------- validation ----------
    @classmethod
    def _check_coordinate(cls, c: Coordinate) -> None:
        if not (0 <= c.row < cls.ROW_COUNT and 0 <= c.col < cls.COL_COUNT):
            raise CellIndexOutOfRange(c)

    @classmethod
    def _check_value(cls, value: int) -> None:
        if (isinstance(value, bool) or not isinstance(value, int)
                or not (cls.MIN_CELL_VALUE <= value <= cls.MAX_CELL_VALUE)):
            raise ValueOutOfRange(value)

    # ---------- queries ----------
    @property
    def cells(self) -> Tuple[Cell, ...]:
        return tuple(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def cell_at(self, c: CoordLike) -> Cell:
        c = _as_coordinate(c)
        self._check_coordinate(c)
        return self.cell_at_unchecked(c)

    def cell_at_unchecked(self, c: Coordinate) -> Cell:
        return self._cells[c.row * self.COL_COUNT + c.col]

    def cell_at_index_unchecked(self, index: int) -> Cell:
        """Solver fast path: row-major index, no bounds check."""
        return self._cells[index]

    @classmethod
    def get_subgrid_start(cls, c: CoordLike) -> Coordinate:
        c = _as_coordinate(c)
        cls._check_coordinate(c)
        return cls._subgrid_start_unchecked(c)

    @classmethod
    def _subgrid_start_unchecked(cls, c: Coordinate) -> Coordinate:
        return Coordinate(c.row - c.row % cls.SUBGRID_ROWS, c.col - c.col % cls.SUBGRID_COLS)

    def can_place_in_row(self, row: int, value: int) -> bool:
        self._check_coordinate(Coordinate(row, 0))
        self._check_value(value)
        return self._row_free(row, value)

    def can_place_in_column(self, col: int, value: int) -> bool:
        self._check_coordinate(Coordinate(0, col))
        self._check_value(value)
        return self._column_free(col, value)

    def can_place_in_subgrid(self, c: CoordLike, value: int) -> bool:
        c = _as_coordinate(c)
        self._check_coordinate(c)
        self._check_value(value)
        return self._subgrid_free(c, value)

    def can_place_at(self, c: CoordLike, value: int) -> bool:
        """True iff value is absent from the cell's column, row and box."""
        c = _as_coordinate(c)
        self._check_coordinate(c)
        self._check_value(value)
        return self.can_place_at_unchecked(c, value)

    def can_place_at_unchecked(self, c: Coordinate, value: int) -> bool:
        # box last: it is the most expensive of the three
        return (self._column_free(c.col, value)
                and self._row_free(c.row, value)
                and self._subgrid_free(c, value))

    def _row_free(self, row: int, value: int) -> bool:
        start = row * self.COL_COUNT
        return all(cell.state.value != value for cell in self._cells[start:start + self.COL_COUNT])

    def _column_free(self, col: int, value: int) -> bool:
        return all(cell.state.value != value for cell in self._cells[col::self.COL_COUNT])

    def _subgrid_free(self, c: Coordinate, value: int) -> bool:
        start = self._subgrid_start_unchecked(c)
        box = _BOX_INDICES[start.row * self.COL_COUNT + start.col]
        return all(self._cells[i].state.value != value for i in box)

    def empty_coordinates(self) -> List[Coordinate]:
        return [cell.coordinate for cell in self._cells if cell.state.is_empty]

    def is_complete(self) -> bool:
        return all(cell.state.is_filled for cell in self._cells)

    # ---------- mutation ----------
    def set_cell(self, c: CoordLike, state: CellState) -> None:
        c = _as_coordinate(c)
        self._check_coordinate(c)
        if state.is_filled:
            self._check_value(state.value)
        self.set_cell_unchecked(c, state)

    def set_cell_unchecked(self, c: Coordinate, state: CellState) -> None:
        """Solver fast path: caller has already validated c and state."""
        self._cells[c.row * self.COL_COUNT + c.col].state = state

    def set_cell_solver_modifiable(self, c: CoordLike, solver_modifiable: bool) -> None:
        self.cell_at(c).solver_modifiable = solver_modifiable

    def clear_cell(self, c: CoordLike) -> None:
        """Empty a cell and hand it back to the solver."""
        self.set_cell(c, EMPTY)
        self.set_cell_solver_modifiable(c, True)

    # ---------- solving ----------
    def solve(self, rng=None, config=None, should_stop=None):
        from sudoku_grid.solver import solve

        return solve(self, rng=rng, config=config, should_stop=should_stop)

    # ---------- conversion ----------
    def to_matrix(self) -> List[List[int]]:
        return [
            [self._cells[r * self.COL_COUNT + c].state.value or 0 for c in range(self.COL_COUNT)]
            for r in range(self.ROW_COUNT)
        ]

    def to_string(self) -> str:
        return "".join(str(cell.state.value or 0) for cell in self._cells)

    def pretty(self) -> str:
        width = 2 * (self.COL_COUNT + self.SUBGRID_COUNT - 1) - 1
        lines = []
        for r in range(self.ROW_COUNT):
            if r and r % self.SUBGRID_ROWS == 0:
                lines.append("-" * width)
            row = []
            for c in range(self.COL_COUNT):
                if c and c % self.SUBGRID_COLS == 0:
                    row.append("|")
                v = self._cells[r * self.COL_COUNT + c].state.value
                row.append(str(v) if v is not None else ".")
            lines.append(" ".join(row))
        return "\n".join(lines)

    def __str__(self) -> str:
        out = ["\n "]
        out.extend(f"{i:4}" for i in range(1, self.COL_COUNT + 1))
        for i, cell in enumerate(self._cells):
            if i % self.COL_COUNT == 0:
                out.append(f"\n\n{i // self.COL_COUNT + 1}  ")
            v = cell.state.value
            out.append(f"[{v}] " if v is not None else "[ ] ")
        return "".join(out)

    def __repr__(self) -> str:
        return f"Grid({self.to_string()!r})"
