"""Bounding and carry-forward rules: pure helpers, no I/O."""

from __future__ import annotations

from typing import Sequence

from app.goals.models import GoalRecord

DEFAULT_MAX_GOALS = 3


def effective_max(configured_max: int | None, count: int) -> int:
    """max(1, min(configured_max, count)).

    Slicing an empty list to 1 is still empty, so the floor only matters
    when there is at least one goal and `configured_max` is 0 or negative.
    A missing configuration falls back to the default of 3.
    """
    if configured_max is None:
        configured_max = DEFAULT_MAX_GOALS
    return max(1, min(configured_max, count))


def bound_goals(goals: Sequence[GoalRecord], configured_max: int | None) -> list[GoalRecord]:
    """Keep the first `effective_max` goals, order preserved."""
    return list(goals[: effective_max(configured_max, len(goals))])


def should_carry_forward(had_section: bool, goals: Sequence[GoalRecord]) -> bool:
    """Carry forward only into a section-less document on an empty write."""
    return not had_section and len(goals) == 0


def unfinished(goals: Sequence[GoalRecord]) -> list[GoalRecord]:
    return [g for g in goals if not g.checked]
