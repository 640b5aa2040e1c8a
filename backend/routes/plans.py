from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from backend import repositories
from backend.repositories import DAILY_PLANS, WEEKLY_PLANS
from backend.routes.common import date_range, require_found
from backend.schemas import DailyPlanCreate, DailyPlanPatch, WeeklyPlanCreate, WeeklyPlanPatch

logger = logging.getLogger(__name__)

router = APIRouter()

WEEKLY_LISTS = ("goals", "priorities")
DAILY_LISTS = ("time_blocks", "priorities")


def _check_time_blocks(blocks) -> None:
    for block in blocks or []:
        if block["end_time"] <= block["start_time"]:
            raise HTTPException(
                status_code=400,
                detail=f"Time block '{block['title']}' must end after it starts",
            )


async def _reject_duplicate(collection, day: str, label: str) -> None:
    if await repositories.list_records(collection, day=day):
        raise HTTPException(status_code=409, detail=f"A {label} already exists for {day}")


@router.get("/v1/weekly-plans")
async def list_weekly_plans(window: dict = Depends(date_range)):
    return {"items": await repositories.list_records(WEEKLY_PLANS, **window)}


@router.post("/v1/weekly-plans")
async def create_weekly_plan(payload: WeeklyPlanCreate):
    if payload.week_start_date.weekday() != 0:
        raise HTTPException(status_code=400, detail="week_start_date must be a Monday")
    data = payload.model_dump()
    await _reject_duplicate(WEEKLY_PLANS, data["week_start_date"].isoformat(), "weekly plan")
    return await repositories.create_record(WEEKLY_PLANS, repositories.prepare_plan(data, WEEKLY_LISTS))


@router.patch("/v1/weekly-plans/{plan_id}")
async def patch_weekly_plan(plan_id: str, payload: WeeklyPlanPatch):
    require_found(await repositories.get_record(WEEKLY_PLANS, plan_id), "Weekly plan")
    patch = repositories.prepare_plan(payload.model_dump(exclude_unset=True), WEEKLY_LISTS)
    return await repositories.update_record(WEEKLY_PLANS, plan_id, patch)


@router.delete("/v1/weekly-plans/{plan_id}")
async def delete_weekly_plan(plan_id: str):
    if not await repositories.delete_weekly_plan(plan_id):
        raise HTTPException(status_code=404, detail="Weekly plan not found")
    return {"ok": True}


@router.get("/v1/daily-plans")
async def list_daily_plans(window: dict = Depends(date_range)):
    return {"items": await repositories.list_records(DAILY_PLANS, **window)}


@router.post("/v1/daily-plans")
async def create_daily_plan(payload: DailyPlanCreate):
    data = payload.model_dump()
    _check_time_blocks(data["time_blocks"])
    await _reject_duplicate(DAILY_PLANS, data["date"].isoformat(), "daily plan")
    if data.get("weekly_plan_id"):
        require_found(await repositories.get_record(WEEKLY_PLANS, data["weekly_plan_id"]), "Weekly plan")
    record = await repositories.create_record(DAILY_PLANS, repositories.prepare_plan(data, DAILY_LISTS))
    logger.info("Daily plan created for %s", record.get("date"))
    return record


@router.patch("/v1/daily-plans/{plan_id}")
async def patch_daily_plan(plan_id: str, payload: DailyPlanPatch):
    require_found(await repositories.get_record(DAILY_PLANS, plan_id), "Daily plan")
    patch = payload.model_dump(exclude_unset=True)
    _check_time_blocks(patch.get("time_blocks"))
    return await repositories.update_record(DAILY_PLANS, plan_id, repositories.prepare_plan(patch, DAILY_LISTS))


@router.delete("/v1/daily-plans/{plan_id}")
async def delete_daily_plan(plan_id: str):
    if not await repositories.delete_record(DAILY_PLANS, plan_id):
        raise HTTPException(status_code=404, detail="Daily plan not found")
    return {"ok": True}
