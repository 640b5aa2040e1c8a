from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend import repositories
from backend.repositories import SCREEN_TIME_APPS, SCREEN_TIME_ENTRIES, SCREEN_TIME_LIMITS
from backend.routes.common import csv_response, date_range, require_found
from backend.schemas import (
    ScreenTimeAppCreate,
    ScreenTimeAppPatch,
    ScreenTimeEntryCreate,
    ScreenTimeLimitCreate,
    ScreenTimeLimitPatch,
)

router = APIRouter()

EXPORT_COLUMNS = ["date", "app", "category", "minutes", "is_excluded"]


@router.get("/v1/screen-time/apps")
async def list_apps():
    return {"items": await repositories.list_records(SCREEN_TIME_APPS)}


@router.post("/v1/screen-time/apps")
async def create_app(payload: ScreenTimeAppCreate):
    return await repositories.create_record(SCREEN_TIME_APPS, payload.model_dump())


@router.patch("/v1/screen-time/apps/{app_id}")
async def patch_app(app_id: str, payload: ScreenTimeAppPatch):
    require_found(await repositories.get_record(SCREEN_TIME_APPS, app_id), "App")
    return await repositories.update_record(SCREEN_TIME_APPS, app_id, payload.model_dump(exclude_unset=True))


@router.delete("/v1/screen-time/apps/{app_id}")
async def delete_app(app_id: str):
    if not await repositories.delete_screen_time_app(app_id):
        raise HTTPException(status_code=404, detail="App not found")
    return {"ok": True}


@router.get("/v1/screen-time/entries")
async def list_entries(window: dict = Depends(date_range)):
    return {"items": await repositories.list_records(SCREEN_TIME_ENTRIES, **window)}


@router.post("/v1/screen-time/entries")
async def create_entry(payload: ScreenTimeEntryCreate):
    require_found(await repositories.get_record(SCREEN_TIME_APPS, payload.app_id), "App")
    return await repositories.create_record(SCREEN_TIME_ENTRIES, payload.model_dump())


@router.delete("/v1/screen-time/entries/{entry_id}")
async def delete_entry(entry_id: str):
    if not await repositories.delete_record(SCREEN_TIME_ENTRIES, entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")
    return {"ok": True}


@router.get("/v1/screen-time/limits")
async def list_limits():
    return {"items": await repositories.list_records(SCREEN_TIME_LIMITS)}


@router.post("/v1/screen-time/limits")
async def create_limit(payload: ScreenTimeLimitCreate):
    if payload.app_id is not None:
        require_found(await repositories.get_record(SCREEN_TIME_APPS, payload.app_id), "App")
    return await repositories.create_record(SCREEN_TIME_LIMITS, payload.model_dump())


@router.patch("/v1/screen-time/limits/{limit_id}")
async def patch_limit(limit_id: str, payload: ScreenTimeLimitPatch):
    require_found(await repositories.get_record(SCREEN_TIME_LIMITS, limit_id), "Limit")
    return await repositories.update_record(SCREEN_TIME_LIMITS, limit_id, payload.model_dump(exclude_unset=True))


@router.delete("/v1/screen-time/limits/{limit_id}")
async def delete_limit(limit_id: str):
    if not await repositories.delete_record(SCREEN_TIME_LIMITS, limit_id):
        raise HTTPException(status_code=404, detail="Limit not found")
    return {"ok": True}


@router.get("/v1/screen-time/export")
async def export_screen_time(window: dict = Depends(date_range)):
    apps = {app["id"]: app for app in await repositories.list_records(SCREEN_TIME_APPS)}
    rows = []
    for entry in await repositories.list_records(SCREEN_TIME_ENTRIES, **window):
        app = apps.get(entry["app_id"], {})
        rows.append(
            {
                "date": entry["date"],
                "app": app.get("name", entry["app_id"]),
                "category": app.get("category"),
                "minutes": entry["minutes"],
                "is_excluded": bool(app.get("is_excluded")),
            }
        )
    return csv_response(rows, EXPORT_COLUMNS, "screen-time.csv")
