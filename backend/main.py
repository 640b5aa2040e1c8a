from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backend import repositories
from backend.db import dispose_engine
from backend.db_init import init_db
from backend.routes import (
    calendar,
    export,
    goals,
    habits,
    health,
    nutrition,
    plans,
    screen_time,
    todos,
    watchlist,
    workouts,
)
from backend.settings import get_settings


def create_app() -> FastAPI:
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    app = FastAPI(title="LifeTrack API", version="0.1.0")

    app.include_router(todos.router)
    app.include_router(habits.router)
    app.include_router(goals.router)
    app.include_router(health.router)
    app.include_router(calendar.router)
    app.include_router(nutrition.router)
    app.include_router(workouts.router)
    app.include_router(screen_time.router)
    app.include_router(watchlist.router)
    app.include_router(plans.router)
    app.include_router(export.router)

    @app.on_event("startup")
    async def _startup():
        await init_db()
        seeded = await repositories.seed_food_items()
        if seeded:
            logging.getLogger("backend").info("Seeded %s foods", seeded)

    @app.on_event("shutdown")
    async def _shutdown():
        await dispose_engine()

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logging.getLogger("backend").exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health_check():
        return {"ok": True}

    return app


app = create_app()
