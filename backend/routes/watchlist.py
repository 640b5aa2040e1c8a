from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from backend import repositories
from backend.repositories import WATCHLIST_ITEMS
from backend.routes.common import csv_response, require_found
from backend.schemas import WatchlistItemCreate, WatchlistItemPatch

router = APIRouter()

EXPORT_COLUMNS = ["title", "type", "source", "link", "length", "status", "finished_at", "notes", "created_at"]


@router.get("/v1/watchlist")
async def list_items(status: Optional[str] = Query(None), type: Optional[str] = Query(None)):
    filters = {"status": status, "type": type}
    return {"items": await repositories.list_records(WATCHLIST_ITEMS, filters=filters)}


@router.post("/v1/watchlist")
async def create_item(payload: WatchlistItemCreate):
    return await repositories.create_watchlist_item(payload.model_dump())


@router.patch("/v1/watchlist/{item_id}")
async def patch_item(item_id: str, payload: WatchlistItemPatch):
    record = await repositories.update_watchlist_item(item_id, payload.model_dump(exclude_unset=True))
    return require_found(record, "Watchlist item")


@router.delete("/v1/watchlist/{item_id}")
async def delete_item(item_id: str):
    if not await repositories.delete_record(WATCHLIST_ITEMS, item_id):
        raise HTTPException(status_code=404, detail="Watchlist item not found")
    return {"ok": True}


@router.get("/v1/watchlist/export")
async def export_items():
    items = await repositories.list_records(WATCHLIST_ITEMS)
    return csv_response(items, EXPORT_COLUMNS, "watchlist.csv")
