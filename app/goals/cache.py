"""Per-week goals cache: a best-effort copy of the last known goal list.

The cache is never authoritative. Entries are written on every read miss
and every write, and are never invalidated when a note is edited outside
the service, so a read can return a stale list until the next write.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, Sequence

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import text

from app.goals.models import GoalRecord

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "WeeklyGoals"

_GOAL_LIST = TypeAdapter(list[GoalRecord])


class CacheStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class InMemoryCacheStore:
    """Process-local key/value store. Lives as long as its owner."""

    def __init__(self) -> None:
        self.entries: dict[str, str] = {}

    async def get(self, key: str) -> str | None:
        return self.entries.get(key)

    async def set(self, key: str, value: str) -> None:
        self.entries[key] = value


class SqlCacheStore:
    """Key/value table behind a SQLAlchemy async session factory.

    The table is created on first use. The upsert uses ``ON CONFLICT``,
    which PostgreSQL and SQLite both accept.
    """

    TABLE = "weekly_goals_cache"

    def __init__(self, session_factory: Callable[[], Any]):
        self._session_factory = session_factory
        self._table_ready = False

    async def _ensure_table(self, session: Any) -> None:
        if self._table_ready:
            return
        await session.execute(
            text(
                f"CREATE TABLE IF NOT EXISTS {self.TABLE} ("
                "cache_key TEXT PRIMARY KEY, "
                "payload TEXT NOT NULL)"
            )
        )
        await session.commit()
        self._table_ready = True

    async def get(self, key: str) -> str | None:
        async with self._session_factory() as session:
            await self._ensure_table(session)
            result = await session.execute(
                text(f"SELECT payload FROM {self.TABLE} WHERE cache_key = :key"),
                {"key": key},
            )
            row = result.fetchone()
        return None if row is None else row[0]

    async def set(self, key: str, value: str) -> None:
        async with self._session_factory() as session:
            await self._ensure_table(session)
            await session.execute(
                text(
                    f"INSERT INTO {self.TABLE} (cache_key, payload) VALUES (:key, :payload) "
                    "ON CONFLICT (cache_key) DO UPDATE SET payload = excluded.payload"
                ),
                {"key": key, "payload": value},
            )
            await session.commit()


class GoalCache:
    """Serializes goal lists under ``<namespace>.<PeriodKey>`` keys."""

    def __init__(self, store: CacheStore, namespace: str = DEFAULT_NAMESPACE):
        self.store = store
        self.namespace = namespace

    def key(self, period: str) -> str:
        return f"{self.namespace}.{period}"

    async def get(self, period: str) -> list[GoalRecord] | None:
        """Cached goals for `period`; None on a miss or an unreadable entry."""
        raw = await self.store.get(self.key(period))
        if not raw:
            return None
        try:
            return _GOAL_LIST.validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring corrupt cache entry %s", self.key(period))
            return None

    async def set(self, period: str, goals: Sequence[GoalRecord]) -> None:
        await self.store.set(self.key(period), _GOAL_LIST.dump_json(list(goals)).decode())
