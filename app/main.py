import logging

from fastapi import FastAPI

from app.config import settings
from app.goals.router import router as goals_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="WeeklyGoals", version="0.1.0")
app.include_router(goals_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "goals": {
            "current": "/goals/current",
            "week": "/goals/weeks/{period}",
            "inbox": "/inbox/todos",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
