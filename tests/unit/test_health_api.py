"""헬스 체크 API 테스트."""

from __future__ import annotations

from sqlalchemy.exc import OperationalError

from src.core import database
from src.core.config import settings


def test_health_ok(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["version"] == settings.api_version


def test_health_reports_database_error(client, monkeypatch):
    class _DownEngine:
        def connect(self):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(database, "engine", _DownEngine())

    body = client.get("/health").json()

    assert body["status"] == "error"


def test_root(client):
    body = client.get("/").json()

    assert body["service"] == settings.api_title
    assert body["docs"] == "/docs"
