"""Weekly goals service: reads and writes one note per ISO week.

read_goals:  cache -> note -> parse section -> cache
write_goals: note (or template) -> carry-forward? -> bound -> splice
             -> persist -> cache
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date
from typing import Sequence

from app.goals.cache import GoalCache
from app.goals.documents import DocumentStore, join_path, write_document
from app.goals.models import GoalRecord
from app.goals.policy import DEFAULT_MAX_GOALS, bound_goals, should_carry_forward, unfinished
from app.goals.section import Document, apply, extract_goals, locate
from app.goals.week_key import previous_week, week_key

logger = logging.getLogger(__name__)


def default_template(period: str) -> str:
    return f"# {period}\n\n"


class WeeklyGoalsService:
    """Keeps the ``## Weekly Goals`` section of each weekly note in sync.

    Writes to the same week are serialized with a per-week asyncio.Lock, so
    two writers in one process cannot lose each other's update. Writers in
    other processes, and edits made directly to the note, are not detected:
    the last write wins.
    """

    def __init__(
        self,
        store: DocumentStore,
        cache: GoalCache,
        goals_folder: str = "Goals",
        max_goals: int | None = DEFAULT_MAX_GOALS,
    ):
        self.store = store
        self.cache = cache
        self.goals_folder = goals_folder
        self.max_goals = max_goals
        # period -> lock, and how many writers hold or await it
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiting: dict[str, int] = {}

    def note_path(self, when: date) -> str:
        return join_path(self.goals_folder, f"{week_key(when)}.md")

    async def read_goals(self, when: date) -> list[GoalRecord]:
        """Goals for the week containing `when`; [] when the note does not exist."""
        period = week_key(when)
        cached = await self.cache.get(period)
        if cached is not None:
            logger.debug("Cache hit for %s", period)
            return cached

        path = self.note_path(when)
        content = await self.store.read(path)
        if not content:
            logger.debug("No note at %s", path)
            return []

        goals = extract_goals(Document.from_text(content).lines)
        await self.cache.set(period, goals)
        return goals

    async def write_goals(self, when: date, goals: Sequence[GoalRecord]) -> list[GoalRecord]:
        """Persist `goals` for the week containing `when`.

        Returns the list that was actually written (after carry-forward and
        bounding), which is also what the cache now holds.
        """
        period = week_key(when)
        lock = self._locks.setdefault(period, asyncio.Lock())
        self._waiting[period] = self._waiting.get(period, 0) + 1
        try:
            async with lock:
                return await self._write(when, period, list(goals))
        finally:
            self._waiting[period] -= 1
            if not self._waiting[period]:
                del self._waiting[period]
                del self._locks[period]

    async def _write(self, when: date, period: str, goals: list[GoalRecord]) -> list[GoalRecord]:
        path = self.note_path(when)
        content = await self.store.read(path)
        if content is None:
            content = default_template(period)
        document = Document.from_text(content)

        had_section = locate(document.lines) is not None
        if should_carry_forward(had_section, goals):
            goals = unfinished(await self.read_goals(previous_week(when)))
            logger.debug("Carrying %d unfinished goal(s) into %s", len(goals), period)

        bounded = bound_goals(goals, self.max_goals)
        updated = apply(document, bounded, period)
        await write_document(self.store, path, updated.to_text())
        await self.cache.set(period, bounded)
        logger.info("Wrote %d goal(s) to %s", len(bounded), path)
        return bounded
