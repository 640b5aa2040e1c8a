from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend import repositories
from backend.repositories import CALENDAR_EVENTS
from backend.routes.common import date_range, require_found
from backend.schemas import CalendarEventCreate, CalendarEventPatch

router = APIRouter()


def _check_order(record: dict) -> None:
    start, end = record.get("start_date"), record.get("end_date")
    if start and end and str(end) < str(start):
        raise HTTPException(status_code=400, detail="end_date must be on or after start_date")


@router.get("/v1/events")
async def list_events(window: dict = Depends(date_range)):
    return {"items": await repositories.list_records(CALENDAR_EVENTS, **window)}


@router.post("/v1/events")
async def create_event(payload: CalendarEventCreate):
    data = payload.model_dump()
    _check_order(data)
    return await repositories.create_record(CALENDAR_EVENTS, data)


@router.patch("/v1/events/{event_id}")
async def patch_event(event_id: str, payload: CalendarEventPatch):
    current = require_found(await repositories.get_record(CALENDAR_EVENTS, event_id), "Event")
    patch = payload.model_dump(exclude_unset=True)
    merged = dict(current)
    for key, value in patch.items():
        merged[key] = value.isoformat() if hasattr(value, "isoformat") else value
    _check_order(merged)
    return await repositories.update_record(CALENDAR_EVENTS, event_id, patch)


@router.delete("/v1/events/{event_id}")
async def delete_event(event_id: str):
    if not await repositories.delete_record(CALENDAR_EVENTS, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return {"ok": True}
