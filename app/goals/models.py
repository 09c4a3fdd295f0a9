"""Weekly goals contract: Pydantic v2 models."""

from __future__ import annotations

import re
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

_LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")


def single_line(value: str) -> str:
    """Collapse line breaks to spaces and trim, so the value fits one list item."""
    return _LINE_BREAK_RE.sub(" ", value).strip()


class GoalRecord(BaseModel):
    """One checklist item. Immutable; identity is its position in the list."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    checked: bool = False

    @field_validator("text")
    @classmethod
    def _single_line(cls, value: str) -> str:
        return single_line(value)


class WeekGoals(BaseModel):
    period: str  # e.g. "2025-W05"
    goals: list[GoalRecord] = Field(default_factory=list)


class GoalsUpdate(BaseModel):
    goals: list[GoalRecord] = Field(default_factory=list)


class TodoCreate(BaseModel):
    text: str = Field(min_length=1)
    due: date | None = None

    @field_validator("text")
    @classmethod
    def _single_line(cls, value: str) -> str:
        value = single_line(value)
        if not value:
            raise ValueError("text must not be blank")
        return value


class TodoCreated(BaseModel):
    path: str
    line: str
