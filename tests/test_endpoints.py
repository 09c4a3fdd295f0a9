"""Endpoint tests: FastAPI app via httpx."""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest

from app.config import settings
from app.goals.week_key import week_key


class TestWeekEndpoints:
    @pytest.mark.asyncio
    async def test_get_missing_week(self, client):
        resp = await client.get("/goals/weeks/2025-W05")
        assert resp.status_code == 200
        assert resp.json() == {"period": "2025-W05", "goals": []}

    @pytest.mark.asyncio
    async def test_put_then_get(self, client, store):
        body = {"goals": [{"text": "a", "checked": False}, {"text": "b", "checked": True}]}
        resp = await client.put("/goals/weeks/2025-W05", json=body)
        assert resp.status_code == 200
        assert resp.json() == {"period": "2025-W05", **body}
        assert "- [x] b" in store.documents["Goals/2025-W05.md"]

        resp = await client.get("/goals/weeks/2025-W05")
        assert resp.json()["goals"] == body["goals"]

    @pytest.mark.asyncio
    async def test_put_is_bounded(self, client):
        body = {"goals": [{"text": str(i)} for i in range(5)]}
        resp = await client.put("/goals/weeks/2025-W05", json=body)
        assert [g["text"] for g in resp.json()["goals"]] == ["0", "1", "2"]

    @pytest.mark.asyncio
    async def test_put_empty_carries_forward(self, client):
        await client.put("/goals/weeks/2025-W04", json={"goals": [{"text": "open"}, {"text": "done", "checked": True}]})
        resp = await client.put("/goals/weeks/2025-W05", json={"goals": []})
        assert resp.json()["goals"] == [{"text": "open", "checked": False}]

    @pytest.mark.asyncio
    async def test_invalid_period_422(self, client):
        resp = await client.get("/goals/weeks/2025-05")
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_nonexistent_week_422(self, client):
        resp = await client.put("/goals/weeks/2021-W53", json={"goals": []})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_invalid_body_422(self, client):
        resp = await client.put("/goals/weeks/2025-W05", json={"goals": [{"checked": "maybe"}]})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_storage_failure_503(self, client, store):
        store.fail_writes = True
        resp = await client.put("/goals/weeks/2025-W05", json={"goals": [{"text": "a"}]})
        assert resp.status_code == 503
        assert "Storage failure" in resp.json()["detail"]


class TestCurrentWeekEndpoints:
    @pytest.mark.asyncio
    async def test_put_and_get_current(self, client, store):
        resp = await client.put("/goals/current", json={"goals": [{"text": "now"}]})
        assert resp.status_code == 200
        period = resp.json()["period"]
        assert f"Goals/{period}.md" in store.documents

        resp = await client.get("/goals/current")
        assert resp.json() == {"period": period, "goals": [{"text": "now", "checked": False}]}

    @pytest.mark.asyncio
    async def test_current_uses_configured_timezone(self, client):
        with patch("app.goals.router.current_week_date") as current:
            current.return_value = date(2025, 1, 29)
            resp = await client.get("/goals/current")
        current.assert_called_once_with(settings.default_tz)
        assert resp.json()["period"] == week_key(date(2025, 1, 29))


class TestInboxEndpoint:
    @pytest.mark.asyncio
    async def test_create_todo(self, client, store):
        resp = await client.post("/inbox/todos", json={"text": "buy milk", "due": "2025-01-31"})
        assert resp.status_code == 201
        assert resp.json() == {"path": "To-Dos/Inbox.md", "line": "- [ ] buy milk @due(2025-01-31)"}
        assert store.documents["To-Dos/Inbox.md"].endswith("- [ ] buy milk @due(2025-01-31)\n")

    @pytest.mark.asyncio
    async def test_blank_text_422(self, client):
        resp = await client.post("/inbox/todos", json={"text": "  "})
        assert resp.status_code == 422


class TestAuth:
    @pytest.mark.asyncio
    async def test_key_required_when_configured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "goals_api_key", "secret")
        resp = await client.get("/goals/weeks/2025-W05")
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_header_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, "goals_api_key", "secret")
        resp = await client.get("/goals/weeks/2025-W05", headers={"X-API-Key": "secret"})
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_bearer_key(self, client, monkeypatch):
        monkeypatch.setattr(settings, "goals_api_key", "secret")
        resp = await client.get("/goals/weeks/2025-W05", headers={"Authorization": "Bearer secret"})
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_bearer_scheme_case_insensitive(self, client, monkeypatch):
        monkeypatch.setattr(settings, "goals_api_key", "secret")
        resp = await client.get("/goals/weeks/2025-W05", headers={"Authorization": "bearer secret"})
        assert resp.status_code == 200

    @pytest.mark.asyncio
    async def test_wrong_key_challenges(self, client, monkeypatch):
        monkeypatch.setattr(settings, "goals_api_key", "secret")
        resp = await client.get("/goals/weeks/2025-W05", headers={"X-API-Key": "nope"})
        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_other_scheme_rejected(self, client, monkeypatch):
        monkeypatch.setattr(settings, "goals_api_key", "secret")
        resp = await client.get("/goals/weeks/2025-W05", headers={"Authorization": "Basic secret"})
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_no_key_configured_passes(self, client, monkeypatch):
        monkeypatch.setattr(settings, "goals_api_key", None)
        resp = await client.get("/goals/weeks/2025-W05")
        assert resp.status_code == 200


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_root_lists_routes(self, client):
        resp = await client.get("/")
        assert resp.json()["goals"]["week"] == "/goals/weeks/{period}"
