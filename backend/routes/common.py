from __future__ import annotations

from datetime import date
from typing import Optional

import pandas as pd
from fastapi import HTTPException, Query
from fastapi.responses import Response


def date_range(
    day: Optional[date] = Query(None, alias="date"),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
) -> dict:
    if day and (start or end):
        raise HTTPException(status_code=400, detail="Use either date or start/end, not both")
    if start and end and start > end:
        raise HTTPException(status_code=400, detail="start must be on or before end")
    return {
        "day": day.isoformat() if day else None,
        "start": start.isoformat() if start else None,
        "end": end.isoformat() if end else None,
    }


def require_found(record: dict, label: str) -> dict:
    if not record:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return record


def csv_response(rows: list[dict], columns: list[str], filename: str) -> Response:
    frame = pd.DataFrame(rows, columns=columns)
    return Response(
        content=frame.to_csv(index=False),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
