from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from backend import repositories
from backend.repositories import FOOD_ITEMS, MEALS
from backend.routes.common import date_range
from backend.schemas import FoodItemCreate, MealCreate, NutritionGoalCreate

router = APIRouter()


@router.get("/v1/meals")
async def list_meals(window: dict = Depends(date_range)):
    return {"items": await repositories.list_records(MEALS, **window)}


@router.post("/v1/meals")
async def create_meal(payload: MealCreate):
    data = payload.model_dump()
    if data.get("logged_at") is None:
        data["logged_at"] = datetime.now(timezone.utc)
    return await repositories.create_record(MEALS, data)


@router.delete("/v1/meals/{meal_id}")
async def delete_meal(meal_id: str):
    if not await repositories.delete_record(MEALS, meal_id):
        raise HTTPException(status_code=404, detail="Meal not found")
    return {"ok": True}


@router.get("/v1/nutrition-goals/active")
async def get_active_goal():
    return {"item": await repositories.get_active_nutrition_goal() or None}


@router.put("/v1/nutrition-goals/active")
async def set_active_goal(payload: NutritionGoalCreate):
    return await repositories.set_active_nutrition_goal(payload.model_dump())


@router.get("/v1/foods/search")
async def search_foods(q: str = Query(..., min_length=2), limit: int = Query(10, ge=1, le=50)):
    return {"items": await repositories.search_food_items(q, limit)}


@router.post("/v1/foods")
async def create_food(payload: FoodItemCreate):
    return await repositories.create_record(FOOD_ITEMS, {**payload.model_dump(), "source": "user"})


@router.delete("/v1/foods/{food_id}")
async def delete_food(food_id: str):
    if not await repositories.delete_record(FOOD_ITEMS, food_id):
        raise HTTPException(status_code=404, detail="Food not found")
    return {"ok": True}
