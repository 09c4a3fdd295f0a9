"""Goals HTTP router: weekly goals & inbox capture."""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from app.auth import verify_api_key
from app.config import settings
from app.goals.dependencies import get_goals_service, get_inbox_service
from app.goals.exceptions import StorageError
from app.goals.inbox import InboxService
from app.goals.models import GoalsUpdate, TodoCreate, TodoCreated, WeekGoals
from app.goals.service import WeeklyGoalsService
from app.goals.week_key import current_week_date, parse_week_key, week_key

logger = logging.getLogger(__name__)

router = APIRouter(tags=["goals"], dependencies=[Depends(verify_api_key)])


def _parse_period(value: str) -> date:
    try:
        return parse_week_key(value)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


def _storage_failure(exc: StorageError) -> HTTPException:
    logger.error("Storage failure: %s", exc)
    return HTTPException(status_code=503, detail=f"Storage failure: {exc}")


async def _read(service: WeeklyGoalsService, when: date) -> WeekGoals:
    try:
        goals = await service.read_goals(when)
    except StorageError as exc:
        raise _storage_failure(exc)
    return WeekGoals(period=week_key(when), goals=goals)


async def _write(service: WeeklyGoalsService, when: date, body: GoalsUpdate) -> WeekGoals:
    try:
        goals = await service.write_goals(when, body.goals)
    except StorageError as exc:
        raise _storage_failure(exc)
    return WeekGoals(period=week_key(when), goals=goals)


# ---------------------------------------------------------------------------
# /goals/current
# ---------------------------------------------------------------------------


@router.get("/goals/current", response_model=WeekGoals)
async def get_current_goals(
    service: WeeklyGoalsService = Depends(get_goals_service),
) -> WeekGoals:
    return await _read(service, current_week_date(settings.default_tz))


@router.put("/goals/current", response_model=WeekGoals)
async def put_current_goals(
    body: GoalsUpdate,
    service: WeeklyGoalsService = Depends(get_goals_service),
) -> WeekGoals:
    return await _write(service, current_week_date(settings.default_tz), body)


# ---------------------------------------------------------------------------
# /goals/weeks/{period}
# ---------------------------------------------------------------------------


@router.get("/goals/weeks/{period}", response_model=WeekGoals)
async def get_week_goals(
    period: str,
    service: WeeklyGoalsService = Depends(get_goals_service),
) -> WeekGoals:
    return await _read(service, _parse_period(period))


@router.put("/goals/weeks/{period}", response_model=WeekGoals)
async def put_week_goals(
    period: str,
    body: GoalsUpdate,
    service: WeeklyGoalsService = Depends(get_goals_service),
) -> WeekGoals:
    return await _write(service, _parse_period(period), body)


# ---------------------------------------------------------------------------
# /inbox/todos
# ---------------------------------------------------------------------------


@router.post("/inbox/todos", response_model=TodoCreated, status_code=201)
async def create_todo(
    body: TodoCreate,
    inbox: InboxService = Depends(get_inbox_service),
) -> TodoCreated:
    try:
        line = await inbox.append_todo(body.text, body.due)
    except StorageError as exc:
        raise _storage_failure(exc)
    return TodoCreated(path=inbox.path, line=line)
