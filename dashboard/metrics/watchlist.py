from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from dashboard.metrics.dates import local_day, parse_timestamp
from dashboard.metrics.streaks import calculate_streak


@dataclass(frozen=True)
class WatchlistStats:
    total: int
    to_watch: int
    in_progress: int
    done: int
    finished_this_week: int
    streak: int


def watchlist_stats(items, now: datetime | None = None, tz_name=None) -> WatchlistStats:
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    week_ago = current - timedelta(days=7)
    finished = [item.get("finished_at") for item in items if item.get("finished_at")]
    return WatchlistStats(
        total=len(items),
        to_watch=sum(1 for item in items if item.get("status") == "To Watch"),
        in_progress=sum(1 for item in items if item.get("status") == "In Progress"),
        done=sum(1 for item in items if item.get("status") == "Done"),
        finished_this_week=sum(1 for value in finished if parse_timestamp(value) >= week_ago),
        streak=calculate_streak(finished, local_day(current, tz_name), tz_name),
    )


def suggestion_count(items) -> int:
    return min(5, max(3, len(items) // 4))


def suggestions(items, rng: random.Random | None = None) -> list:
    """A shuffled sample of "To Watch" items."""
    rng = rng or random.Random()
    pool = [item for item in items if item.get("status") == "To Watch"]
    rng.shuffle(pool)
    return pool[: suggestion_count(items)]


def filter_items(items, status: str = "all", item_type: str = "all") -> list:
    return [
        item
        for item in items
        if (status == "all" or item.get("status") == status)
        and (item_type == "all" or item.get("type") == item_type)
    ]
