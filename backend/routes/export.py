from __future__ import annotations

import logging

from fastapi import APIRouter

from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/export")
async def export_everything():
    payload = await repositories.export_all()
    logger.info(
        "Exported %s records",
        sum(len(value) for value in payload.values() if isinstance(value, list)),
    )
    return payload
