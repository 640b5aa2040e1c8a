from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException

from backend import repositories
from backend.repositories import CARDIO_ENTRIES, WORKOUT_SETS, WORKOUTS
from backend.routes.common import date_range, require_found
from backend.schemas import CardioEntryCreate, WorkoutCreate, WorkoutPatch, WorkoutSetCreate

router = APIRouter()


@router.get("/v1/workouts")
async def list_workouts(window: dict = Depends(date_range)):
    start = window["day"] or window["start"]
    end = window["day"] or window["end"]
    return {"items": await repositories.list_workouts_with_sets(start=start, end=end)}


@router.post("/v1/workouts")
async def start_workout(payload: WorkoutCreate):
    data = payload.model_dump()
    if data.get("started_at") is None:
        data["started_at"] = datetime.now(timezone.utc)
    record = await repositories.create_record(WORKOUTS, data)
    record["sets"] = []
    return record


@router.patch("/v1/workouts/{workout_id}")
async def patch_workout(workout_id: str, payload: WorkoutPatch):
    current = require_found(await repositories.get_record(WORKOUTS, workout_id), "Workout")
    patch = payload.model_dump(exclude_unset=True)
    ended_at = patch.get("ended_at")
    if ended_at is not None:
        started = datetime.fromisoformat(current["started_at"])
        if (ended_at.tzinfo is None) != (started.tzinfo is None):
            ended_at = ended_at.replace(tzinfo=started.tzinfo)
        if ended_at < started:
            raise HTTPException(status_code=400, detail="ended_at must be after started_at")
    return await repositories.update_record(WORKOUTS, workout_id, patch)


@router.delete("/v1/workouts/{workout_id}")
async def delete_workout(workout_id: str):
    if not await repositories.delete_workout(workout_id):
        raise HTTPException(status_code=404, detail="Workout not found")
    return {"ok": True}


@router.post("/v1/workouts/{workout_id}/sets")
async def add_set(workout_id: str, payload: WorkoutSetCreate):
    require_found(await repositories.get_record(WORKOUTS, workout_id), "Workout")
    return await repositories.add_workout_set(workout_id, payload.model_dump())


@router.delete("/v1/workout-sets/{set_id}")
async def delete_set(set_id: str):
    if not await repositories.delete_record(WORKOUT_SETS, set_id):
        raise HTTPException(status_code=404, detail="Workout set not found")
    return {"ok": True}


@router.get("/v1/cardio")
async def list_cardio(window: dict = Depends(date_range)):
    return {"items": await repositories.list_records(CARDIO_ENTRIES, **window)}


@router.post("/v1/cardio")
async def log_cardio(payload: CardioEntryCreate):
    return await repositories.create_record(CARDIO_ENTRIES, payload.model_dump())


@router.delete("/v1/cardio/{entry_id}")
async def delete_cardio(entry_id: str):
    if not await repositories.delete_record(CARDIO_ENTRIES, entry_id):
        raise HTTPException(status_code=404, detail="Cardio entry not found")
    return {"ok": True}
