from __future__ import annotations

from fastapi import APIRouter, HTTPException

from backend import repositories
from backend.repositories import GOALS
from backend.routes.common import require_found
from backend.schemas import GoalCreate, GoalPatch

router = APIRouter()


@router.get("/v1/goals")
async def list_goals():
    return {"items": await repositories.list_records(GOALS)}


@router.post("/v1/goals")
async def create_goal(payload: GoalCreate):
    return await repositories.create_record(GOALS, payload.model_dump())


@router.patch("/v1/goals/{goal_id}")
async def patch_goal(goal_id: str, payload: GoalPatch):
    require_found(await repositories.get_record(GOALS, goal_id), "Goal")
    return await repositories.update_record(GOALS, goal_id, payload.model_dump(exclude_unset=True))


@router.delete("/v1/goals/{goal_id}")
async def delete_goal(goal_id: str):
    if not await repositories.delete_record(GOALS, goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"ok": True}
