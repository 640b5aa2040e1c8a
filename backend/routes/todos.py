from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from backend import repositories
from backend.repositories import TODO_CATEGORIES, TODOS
from backend.routes.common import date_range, require_found
from backend.schemas import TodoCategoryCreate, TodoCategoryPatch, TodoCreate, TodoPatch

router = APIRouter()


@router.get("/v1/todo-categories")
async def list_categories():
    return {"items": await repositories.list_records(TODO_CATEGORIES)}


@router.post("/v1/todo-categories")
async def create_category(payload: TodoCategoryCreate):
    return await repositories.create_record(TODO_CATEGORIES, payload.model_dump())


@router.patch("/v1/todo-categories/{category_id}")
async def patch_category(category_id: str, payload: TodoCategoryPatch):
    require_found(await repositories.get_record(TODO_CATEGORIES, category_id), "Category")
    return await repositories.update_record(
        TODO_CATEGORIES, category_id, payload.model_dump(exclude_unset=True)
    )


@router.delete("/v1/todo-categories/{category_id}")
async def delete_category(category_id: str):
    if not await repositories.delete_todo_category(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"ok": True}


@router.get("/v1/todos")
async def list_todos(
    window: dict = Depends(date_range),
    status: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None),
):
    filters = {"status": status, "category_id": category_id}
    return {"items": await repositories.list_records(TODOS, filters=filters, **window)}


@router.post("/v1/todos")
async def create_todo(payload: TodoCreate):
    return await repositories.create_todo(payload.model_dump())


@router.patch("/v1/todos/{todo_id}")
async def patch_todo(todo_id: str, payload: TodoPatch):
    record = await repositories.update_todo(todo_id, payload.model_dump(exclude_unset=True))
    return require_found(record, "Todo")


@router.delete("/v1/todos/{todo_id}")
async def delete_todo(todo_id: str):
    if not await repositories.delete_record(TODOS, todo_id):
        raise HTTPException(status_code=404, detail="Todo not found")
    return {"ok": True}
