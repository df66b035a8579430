# tests/test_flask_api.py
import pytest

from flask_api import app

from conftest import PUZZLE, SOLUTION


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("SUDOKU_MAX_STEPS", raising=False)
    monkeypatch.delenv("SUDOKU_SEED", raising=False)
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def test_health(client):
    assert client.get("/health").get_json() == {"ok": True}


def test_random_is_seeded(client):
    a = client.get("/random?seed=8").get_json()["grid81"]
    b = client.get("/random?seed=8").get_json()["grid81"]
    assert a == b
    assert len(a) == 81 and "0" not in a


def test_solve(client):
    resp = client.post("/solve", json={"givens": PUZZLE.replace("0", "."), "seed": 2})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "solved"
    assert body["solution81"] == SOLUTION
    assert len(body["filled"]) == PUZZLE.count("0")
    assert body["validation"]["ok"] is True


def test_solve_invalid_grid(client):
    body = client.post("/solve", json={"givens": "77" + "0" * 79}).get_json()
    assert body["status"] == "invalid"
    assert body["solution81"] is None
    assert body["validation"]["conflict_type"] == "ROW"


def test_solve_budget_exceeded(client):
    resp = client.post("/solve", json={"givens": PUZZLE, "max_steps": 3})
    assert resp.status_code == 422
    assert resp.get_json()["max_steps"] == 3


def test_solve_bad_input(client):
    resp = client.post("/solve", json={"givens": "123"})
    assert resp.status_code == 400
    assert "Expected 81 characters" in resp.get_json()["error"]

    resp = client.post("/solve", json={"givens": PUZZLE, "max_steps": "many"})
    assert resp.status_code == 400


def test_check(client):
    body = client.post("/check", json={"givens": PUZZLE, "row": 0, "col": 2, "value": 5}).get_json()
    assert body["row_ok"] is False
    assert body["can_place"] is False
    assert body["subgrid_start"] == [0, 0]

    body = client.post("/check", json={"givens": PUZZLE, "row": 0, "col": 2, "value": 4}).get_json()
    assert body["can_place"] is True


def test_check_errors(client):
    resp = client.post("/check", json={"givens": PUZZLE, "row": 9, "col": 0, "value": 1})
    assert resp.status_code == 400
    assert "out of range" in resp.get_json()["error"]

    resp = client.post("/check", json={"givens": PUZZLE, "row": 0, "col": 0, "value": 0})
    assert resp.status_code == 400

    resp = client.post("/check", json={"givens": PUZZLE, "col": 0, "value": 1})
    assert resp.status_code == 400
