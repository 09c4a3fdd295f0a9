"""Shared fixtures for the test suite."""

from __future__ import annotations

from datetime import date
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.goals.cache import GoalCache, InMemoryCacheStore
from app.goals.dependencies import get_goals_service, get_inbox_service
from app.goals.exceptions import StorageError
from app.goals.inbox import InboxService
from app.goals.models import GoalRecord
from app.goals.service import WeeklyGoalsService
from app.main import app


# ---------------------------------------------------------------------------
# Fake document store (no filesystem needed)
# ---------------------------------------------------------------------------

class InMemoryDocumentStore:
    """Dict-backed DocumentStore. Records every call in `calls`."""

    def __init__(self, documents: dict[str, str] | None = None):
        self.documents: dict[str, str] = dict(documents or {})
        self.folders: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self.fail_writes = False

    async def exists(self, path: str) -> bool:
        return path in self.documents or path in self.folders

    async def create_folder(self, path: str) -> None:
        self.calls.append(("create_folder", path))
        self.folders.add(path)

    async def read(self, path: str) -> str | None:
        return self.documents.get(path)

    async def create(self, path: str, content: str) -> None:
        self.calls.append(("create", path))
        if self.fail_writes:
            raise StorageError(f"Failed to create {path}", path=path)
        self.documents[path] = content

    async def modify(self, path: str, content: str) -> None:
        self.calls.append(("modify", path))
        if self.fail_writes:
            raise StorageError(f"Failed to write {path}", path=path)
        self.documents[path] = content


# ---------------------------------------------------------------------------
# Fake SQLAlchemy session for the SQL cache store
# ---------------------------------------------------------------------------

class FakeSession:
    """Minimal stand-in for AsyncSession used by SqlCacheStore tests."""

    def __init__(self, rows: list[tuple[Any, ...]] | None = None):
        self._rows = rows or []
        self.statements: list[tuple[str, dict[str, Any] | None]] = []
        self.commits = 0

    async def execute(self, stmt, params=None):
        self.statements.append((str(stmt), params))
        return FakeResult(self._rows)

    async def commit(self):
        self.commits += 1

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        pass


class FakeResult:
    def __init__(self, rows: list[tuple[Any, ...]]):
        self._rows = rows

    def fetchone(self):
        return self._rows[0] if self._rows else None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def store():
    return InMemoryDocumentStore()


@pytest.fixture()
def cache_store():
    return InMemoryCacheStore()


@pytest.fixture()
def service(store, cache_store):
    return WeeklyGoalsService(store=store, cache=GoalCache(cache_store), goals_folder="Goals", max_goals=3)


@pytest.fixture()
def inbox(store):
    return InboxService(store=store)


@pytest.fixture()
def override_services(service, inbox):
    """Override the FastAPI dependencies so no real vault is needed."""
    app.dependency_overrides[get_goals_service] = lambda: service
    app.dependency_overrides[get_inbox_service] = lambda: inbox
    yield service
    app.dependency_overrides.clear()


@pytest.fixture()
async def client(override_services):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def goals(*items: str) -> list[GoalRecord]:
    """Build goals from "text" / "x:text" shorthands ("x:" means checked)."""
    out = []
    for item in items:
        if item.startswith("x:"):
            out.append(GoalRecord(text=item[2:], checked=True))
        else:
            out.append(GoalRecord(text=item, checked=False))
    return out


# Wednesday of 2025-W05, and a day in the previous week
WEEK_05 = date(2025, 1, 29)
WEEK_04 = date(2025, 1, 22)
