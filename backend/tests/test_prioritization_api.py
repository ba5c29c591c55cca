from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from study_planner.main import app

NOW = "2024-10-14T08:00:00Z"


@pytest.fixture()
def client():
    with TestClient(app) as test_client:
        yield test_client


def _task(task_id, deadline, hours, difficulty, **extra):
    payload = {
        "id": task_id,
        "deadline": deadline,
        "estimated_hours": hours,
        "difficulty_score": difficulty,
    }
    payload.update(extra)
    return payload


def test_prioritization_orders_tasks_by_score(client):
    resp = client.post(
        "/prioritization",
        json={
            "now": NOW,
            "tasks": [
                _task("easy-short-task", "2024-10-28T08:00:00Z", 4, 3),
                _task("urgent-hard-long", "2024-10-15T08:00:00Z", 25, 9, title="Capstone"),
                _task("medium-task", "2024-10-21T08:00:00Z", 8, 6),
            ],
        },
    )

    assert resp.status_code == 200
    data = resp.json()
    ranked = data["prioritized_tasks"]
    assert [item["id"] for item in ranked] == ["urgent-hard-long", "medium-task", "easy-short-task"]
    assert [item["rank"] for item in ranked] == [1, 2, 3]

    top = ranked[0]
    assert top["title"] == "Capstone"
    assert top["urgency_weight"] == 90.0
    assert top["difficulty_weight"] == 90.0
    assert top["hours_weight"] == 50.0
    assert top["priority_score"] == 230.0
    assert top["days_until_deadline"] == 1
    assert top["urgency"] == "high"

    assert ranked[1]["priority_score"] == 106.0
    assert ranked[2]["priority_score"] == 38.0
    assert ranked[2]["title"] == "easy-short-task"

    summary = data["summary"]
    assert summary["total_tasks"] == 3
    assert summary["highest_priority"] == "Capstone"
    assert summary["lowest_priority"] == "easy-short-task"
    assert summary["high_count"] == 1
    assert summary["low_count"] == 2


def test_prioritization_with_no_tasks(client):
    resp = client.post("/prioritization", json={"tasks": []})

    assert resp.status_code == 200
    data = resp.json()
    assert data["prioritized_tasks"] == []
    assert data["summary"]["total_tasks"] == 0
    assert data["summary"]["highest_priority"] is None


def test_duplicate_task_ids_are_rejected(client):
    resp = client.post(
        "/prioritization",
        json={
            "now": NOW,
            "tasks": [
                _task("hw1", "2024-10-15T08:00:00Z", 2, 4),
                _task("hw1", "2024-10-16T08:00:00Z", 3, 5),
            ],
        },
    )

    assert resp.status_code == 422
    [error] = resp.json()["detail"]
    assert error["loc"] == ["body", "tasks", 1, "id"]
    assert error["type"] == "value_error"


def test_out_of_range_difficulty_is_rejected(client):
    resp = client.post(
        "/prioritization",
        json={"tasks": [_task("hw1", "2024-10-15T08:00:00Z", 2, 11)]},
    )

    assert resp.status_code == 422
    locs = [error["loc"] for error in resp.json()["detail"]]
    assert ["body", "tasks", 0, "difficulty_score"] in locs


def test_malformed_deadline_is_rejected(client):
    resp = client.post(
        "/prioritization",
        json={"tasks": [_task("hw1", "next friday", 2, 4)]},
    )

    assert resp.status_code == 422


def test_request_id_is_echoed_in_body(client):
    resp = client.post(
        "/prioritization",
        json={"tasks": []},
        headers={"X-Request-Id": "rank-42"},
    )

    assert resp.status_code == 200
    assert resp.json()["request_id"] == "rank-42"
    assert resp.headers["X-Request-Id"] == "rank-42"
