from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from backend import repositories
from backend.repositories import HEALTH_ENTRIES, TIMER_SESSIONS
from backend.routes.common import date_range, require_found
from backend.schemas import HealthEntryUpsert, TimerSessionCreate, TimerSessionPatch

router = APIRouter()


@router.get("/v1/health")
async def list_health_entries(window: dict = Depends(date_range)):
    return {"items": await repositories.list_records(HEALTH_ENTRIES, **window)}


@router.post("/v1/health")
async def upsert_health_entry(payload: HealthEntryUpsert):
    return await repositories.upsert_health_entry(payload.model_dump())


@router.delete("/v1/health/{entry_id}")
async def delete_health_entry(entry_id: str):
    if not await repositories.delete_record(HEALTH_ENTRIES, entry_id):
        raise HTTPException(status_code=404, detail="Health entry not found")
    return {"ok": True}


@router.get("/v1/timer-sessions")
async def list_timer_sessions(window: dict = Depends(date_range)):
    return {"items": await repositories.list_records(TIMER_SESSIONS, **window)}


@router.post("/v1/timer-sessions")
async def create_timer_session(payload: TimerSessionCreate):
    return await repositories.create_record(TIMER_SESSIONS, payload.model_dump())


@router.patch("/v1/timer-sessions/{session_id}")
async def patch_timer_session(session_id: str, payload: TimerSessionPatch):
    require_found(await repositories.get_record(TIMER_SESSIONS, session_id), "Timer session")
    return await repositories.update_record(
        TIMER_SESSIONS, session_id, payload.model_dump(exclude_unset=True)
    )


@router.delete("/v1/timer-sessions/{session_id}")
async def delete_timer_session(session_id: str):
    if not await repositories.delete_record(TIMER_SESSIONS, session_id):
        raise HTTPException(status_code=404, detail="Timer session not found")
    return {"ok": True}
