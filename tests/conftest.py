import json
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from games2play.main import app


class FakeTrendsProvider:
    """Stands in for GoogleTrendsProvider; records every call."""

    def __init__(self, body: str | None = None, exc: Exception | None = None):
        self.body = body
        self.exc = exc
        self.calls: list[dict] = []

    def interest_over_time(self, keyword, start_time, end_time=None, geo="", timeout=None):
        self.calls.append(
            {"keyword": keyword, "start_time": start_time, "end_time": end_time, "geo": geo, "timeout": timeout}
        )
        if self.exc is not None:
            raise self.exc
        return self.body


def make_timeline_body(values) -> str:
    entries = [
        {
            "time": str(1072915200 + i * 2678400),
            "formattedTime": f"point {i}",
            "formattedAxisTime": f"p{i}",
            "value": [v],
            "hasData": [True],
        }
        for i, v in enumerate(values)
    ]
    return json.dumps({"default": {"timelineData": entries, "averages": []}})


@pytest.fixture
def timeline_body():
    return make_timeline_body


@pytest.fixture
def fake_provider():
    def _make(body: str | None = None, exc: Exception | None = None) -> FakeTrendsProvider:
        return FakeTrendsProvider(body=body, exc=exc)

    return _make


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()
