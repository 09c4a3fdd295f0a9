"""FastAPI dependencies: one store, cache and service per process."""

from __future__ import annotations

from functools import lru_cache

from app.config import settings
from app.db import get_sessionmaker
from app.goals.cache import CacheStore, GoalCache, InMemoryCacheStore, SqlCacheStore
from app.goals.documents import DocumentStore, FileSystemDocumentStore
from app.goals.inbox import InboxService
from app.goals.service import WeeklyGoalsService


def build_cache_store(backend: str) -> CacheStore:
    if backend == "memory":
        return InMemoryCacheStore()
    if backend == "sql":
        return SqlCacheStore(get_sessionmaker())
    raise ValueError(f"Unknown cache backend: {backend}")


@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    return FileSystemDocumentStore(settings.vault_root)


@lru_cache(maxsize=1)
def get_goals_service() -> WeeklyGoalsService:
    return WeeklyGoalsService(
        store=get_document_store(),
        cache=GoalCache(build_cache_store(settings.cache_backend), settings.cache_namespace),
        goals_folder=settings.goals_folder,
        max_goals=settings.max_weekly_goals,
    )


@lru_cache(maxsize=1)
def get_inbox_service() -> InboxService:
    return InboxService(
        store=get_document_store(),
        folder=settings.new_tasks_folder or "To-Dos",
        file_name=settings.new_tasks_file_name or "Inbox.md",
        due_attribute=settings.due_date_attribute or "due",
        use_dataview=settings.use_dataview_syntax,
    )
