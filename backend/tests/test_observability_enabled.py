from __future__ import annotations

import importlib

import pytest
from fastapi.testclient import TestClient

from study_planner.observability import client as client_module


class _DummyTrace:
    def __init__(self, name=None, metadata=None, **kwargs):
        self.name = name
        self.metadata = dict(metadata or {})
        self.ended = False

    def update(self, metadata=None, **kwargs):
        if metadata:
            self.metadata.update(metadata)

    def end(self):
        self.ended = True


class _DummyOpik:
    instances = []

    def __init__(self, *args, **kwargs):
        self.kwargs = kwargs
        self.traces = []
        _DummyOpik.instances.append(self)

    def trace(self, **kwargs):
        trace = _DummyTrace(name=kwargs.get("name"), metadata=kwargs.get("metadata"))
        self.traces.append(trace)
        return trace


@pytest.fixture()
def opik_enabled(monkeypatch):
    monkeypatch.setenv("OPIK_ENABLED", "true")
    monkeypatch.setenv("OPIK_PROJECT", "study-planner-test")
    monkeypatch.setenv("OPIK_API_KEY", "test-key")

    import study_planner.core.config as config_module

    importlib.reload(config_module)
    importlib.reload(client_module)
    monkeypatch.setattr(client_module, "Opik", _DummyOpik)
    _DummyOpik.instances.clear()
    client_module.reset_opik_client()

    yield

    monkeypatch.setenv("OPIK_ENABLED", "false")
    importlib.reload(config_module)
    importlib.reload(client_module)
    client_module.reset_opik_client()


def test_study_plan_is_traced_when_opik_enabled(opik_enabled):
    from study_planner.main import app

    with TestClient(app) as test_client:
        resp = test_client.post(
            "/study-plan",
            json={
                "now": "2024-10-14T08:00:00Z",
                "start_date": "2024-10-14",
                "tasks": [
                    {
                        "id": "essay",
                        "deadline": "2024-10-16T08:00:00Z",
                        "estimated_hours": 3,
                        "difficulty_score": 6,
                    }
                ],
            },
            headers={"X-Request-Id": "traced-1"},
        )
        assert resp.status_code == 200

    [opik] = _DummyOpik.instances
    assert opik.kwargs["project_name"] == "study-planner-test"

    [plan_trace] = [trace for trace in opik.traces if trace.name == "study_plan.create"]
    assert plan_trace.metadata["request_id"] == "traced-1"
    assert plan_trace.metadata["task_count"] == 1
    assert plan_trace.metadata["total_hours"] == 3.0
    assert plan_trace.ended is True

    metric_names = {trace.name for trace in opik.traces if trace.name.startswith("metric:")}
    assert "metric:study_plan.create.success" in metric_names
    assert "metric:study_plan.create.latency_ms" in metric_names


def test_missing_api_key_keeps_tracing_disabled(monkeypatch):
    monkeypatch.setenv("OPIK_ENABLED", "true")
    monkeypatch.delenv("OPIK_API_KEY", raising=False)

    import study_planner.core.config as config_module

    importlib.reload(config_module)
    importlib.reload(client_module)
    client_module.reset_opik_client()
    try:
        assert client_module.get_opik_client() is None
    finally:
        monkeypatch.setenv("OPIK_ENABLED", "false")
        importlib.reload(config_module)
        importlib.reload(client_module)
        client_module.reset_opik_client()
