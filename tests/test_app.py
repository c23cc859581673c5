import logging

import pytest
from fastapi.testclient import TestClient

from envs.sokoban_puzzle.models import Cell
from envs.sokoban_puzzle.server.app import create_app


@pytest.fixture
def client(env):
    with TestClient(create_app(env)) as client:
        yield client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_observation(client):
    body = client.get("/observation").json()
    assert body["rows"] == ["#####", "#@BT#", "#####"]
    assert body["level_name"] == "Push Once"
    assert body["moves_count"] == 0


def test_step_direction_completes_level(client):
    response = client.post("/step", json={"direction": "right"})
    assert response.status_code == 200
    body = response.json()
    assert body["moved"] is True
    assert body["done"] is True
    assert body["observation"]["completed"] is True
    assert body["observation"]["boxes_on_goals"] == 1


def test_step_rejected_move(client):
    body = client.post("/step", json={"direction": "up"}).json()
    assert body["moved"] is False
    assert body["observation"]["moves_count"] == 0


def test_step_click(client):
    client.post("/levels/1")
    body = client.post("/step", json={"row": 1, "col": 4}).json()
    assert body["moved"] is True
    assert body["observation"]["moves_count"] == 3
    assert body["observation"]["player_position"] == [1, 4]


def test_step_validation(client):
    assert client.post("/step", json={"direction": "sideways"}).status_code == 422
    assert client.post("/step", json={"row": 1}).status_code == 422
    assert client.post("/step", json={}).status_code == 422


def test_state_counts_steps(client):
    client.post("/step", json={"direction": "up"})
    client.post("/step", json={"direction": "down"})
    state = client.get("/state").json()
    assert state["step_count"] == 2
    assert state["episode_id"]


def test_reset(client):
    client.post("/step", json={"direction": "right"})
    body = client.post("/reset").json()
    assert body["completed"] is False
    assert body["rows"] == ["#####", "#@BT#", "#####"]


def test_levels(client):
    levels = client.get("/levels").json()
    assert [level["name"] for level in levels] == ["Push Once", "Long Walk", "Last One"]
    assert levels[2]["index"] == 2


def test_load_level(client):
    body = client.post("/levels/2").json()
    assert body["level_name"] == "Last One"
    assert client.post("/levels/7").status_code == 404


def test_next_level(client):
    body = client.post("/levels/next").json()
    assert body["advanced"] is True
    assert body["observation"]["level_index"] == 1
    client.post("/levels/next")
    body = client.post("/levels/next").json()
    assert body["advanced"] is False
    assert body["observation"]["level_index"] == 2


def test_step_on_corrupted_board_is_logged(env, client, caplog):
    env._grid = [[Cell.FLOOR, Cell.GOAL]]
    with caplog.at_level(logging.ERROR):
        response = client.post("/step", json={"direction": "right"})
    assert response.status_code == 500
    assert "no player" in response.json()["detail"]
    assert any("Corrupted board in level 0" in record.getMessage() for record in caplog.records)
