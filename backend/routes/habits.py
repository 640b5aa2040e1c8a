from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from backend import repositories
from backend.repositories import HABIT_ENTRIES, HABITS
from backend.routes.common import date_range, require_found
from backend.schemas import HabitCreate, HabitEntryUpsert, HabitPatch

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/habits")
async def list_habits(include_archived: bool = Query(True)):
    filters = None if include_archived else {"is_archived": False}
    return {"items": await repositories.list_records(HABITS, filters=filters)}


@router.post("/v1/habits")
async def create_habit(payload: HabitCreate):
    return await repositories.create_record(HABITS, payload.model_dump())


@router.patch("/v1/habits/{habit_id}")
async def patch_habit(habit_id: str, payload: HabitPatch):
    require_found(await repositories.get_record(HABITS, habit_id), "Habit")
    return await repositories.update_habit(habit_id, payload.model_dump(exclude_unset=True))


@router.delete("/v1/habits/{habit_id}")
async def delete_habit(habit_id: str):
    if not await repositories.delete_habit(habit_id):
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"ok": True}


@router.get("/v1/habit-entries")
async def list_habit_entries(window: dict = Depends(date_range), habit_id: Optional[str] = Query(None)):
    items = await repositories.list_records(HABIT_ENTRIES, filters={"habit_id": habit_id}, **window)
    return {"items": items}


@router.post("/v1/habit-entries")
async def upsert_habit_entry(payload: HabitEntryUpsert):
    habit = require_found(await repositories.get_record(HABITS, payload.habit_id), "Habit")
    record = await repositories.upsert_habit_entry(habit, payload.model_dump())
    logger.info("Habit %s logged %s for %s", habit["id"], record.get("value"), record.get("date"))
    return record


@router.delete("/v1/habit-entries/{entry_id}")
async def delete_habit_entry(entry_id: str):
    if not await repositories.delete_habit_entry(entry_id):
        raise HTTPException(status_code=404, detail="Habit entry not found")
    return {"ok": True}
