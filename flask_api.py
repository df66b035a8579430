from __future__ import annotations

import logging
import random

from flask import Flask, request, jsonify
from flask_cors import CORS

from sudoku_grid.config import SolverConfig
from sudoku_grid.errors import GridError, SearchBudgetExceeded, SearchError
from sudoku_grid.grid import Grid
from sudoku_grid.models import Coordinate, SolveResult
from sudoku_grid.reports import validation_to_dict

log = logging.getLogger(__name__)

app = Flask(__name__)
CORS(app)


def _norm81(s: str) -> str:
    s = (s or "").replace(".", "0")
    s = "".join(s.split())
    if len(s) != 81:
        raise ValueError(f"Expected 81 characters, got {len(s)}")
    if any(ch not in "0123456789" for ch in s):
        raise ValueError("Only digits, 0, '.' and whitespace are allowed")
    return s


def _optional_int(data: dict, key: str):
    raw = data.get(key)
    if raw is None or str(raw).strip() == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' must be an integer") from None


def _required_int(data: dict, key: str) -> int:
    value = _optional_int(data, key)
    if value is None:
        raise ValueError(f"'{key}' is required")
    return value


def _solver_config(data: dict) -> SolverConfig:
    return SolverConfig.from_env().with_overrides(
        max_steps=_optional_int(data, "max_steps"),
        seed=_optional_int(data, "seed"),
    )


def _result_payload(grid: Grid, result: SolveResult) -> dict:
    return {
        "status": result.status.value,
        "solution81": grid.to_string() if result.is_solvable else None,
        "steps": result.steps,
        "filled": [[c.row, c.col] for c in result.filled],
        "blocked": [[c.row, c.col] for c in result.blocked],
        "validation": validation_to_dict(result.validation) if result.validation else None,
    }


@app.errorhandler(GridError)
@app.errorhandler(ValueError)
def bad_request(e):
    return jsonify({"error": str(e)}), 400


@app.errorhandler(SearchBudgetExceeded)
def budget_exceeded(e):
    return jsonify({"error": str(e), "steps": e.steps, "max_steps": e.max_steps}), 422


@app.errorhandler(SearchError)
def search_failed(e):
    return jsonify({"error": str(e), "steps": e.steps}), 422


@app.get("/health")
def health():
    return jsonify({"ok": True})


@app.get("/random")
def random_grid():
    config = _solver_config(request.args)
    grid = Grid.new_random(rng=random.Random(config.seed), config=config)
    return jsonify({"grid81": grid.to_string()})


@app.post("/solve")
def solve():
    data = request.get_json(force=True) or {}
    config = _solver_config(data)
    grid = Grid.from_string(_norm81(data.get("givens", "")))

    result = grid.solve(rng=random.Random(config.seed), config=config)
    log.debug("Solve request finished: %s in %d steps", result.status.value, result.steps)
    return jsonify(_result_payload(grid, result))


@app.post("/check")
def check():
    data = request.get_json(force=True) or {}
    grid = Grid.from_string(_norm81(data.get("givens", "")))
    coord = Coordinate(_required_int(data, "row"), _required_int(data, "col"))
    value = _required_int(data, "value")

    start = Grid.get_subgrid_start(coord)
    return jsonify({
        "row_ok": grid.can_place_in_row(coord.row, value),
        "col_ok": grid.can_place_in_column(coord.col, value),
        "box_ok": grid.can_place_in_subgrid(coord, value),
        "can_place": grid.can_place_at(coord, value),
        "subgrid_start": [start.row, start.col],
    })


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8000, debug=True)
