"""Screen-time usage rankings and limit warnings.

Apps marked ``is_excluded`` are left out of the top-apps ranking and of the
ranked total, but their limits are still evaluated: a limit someone set on a
private app keeps warning them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from dashboard.constants import SCREEN_TIME_WARNING_RATIO, TOP_APPS_LIMIT
from dashboard.metrics.completion import round_half_up
from dashboard.metrics.dates import end_of_week, parse_day, start_of_week

TOTAL_LIMIT_LABEL = "Total screen time"


@dataclass(frozen=True)
class AppUsage:
    app_id: str
    name: str
    minutes: int
    category: str | None = None


@dataclass(frozen=True)
class LimitWarning:
    app_id: str | None
    app_name: str
    usage: int
    limit: int
    percentage: int


def entries_for_day(entries, day: date) -> list:
    return [entry for entry in entries if parse_day(entry.get("date")) == day]


def entries_for_week(entries, day: date) -> list:
    start, end = start_of_week(day), end_of_week(day)
    return [entry for entry in entries if start <= parse_day(entry.get("date")) <= end]


def app_usage(entries) -> dict:
    usage = {}
    for entry in entries:
        app_id = entry.get("app_id")
        usage[app_id] = usage.get(app_id, 0) + (entry.get("minutes") or 0)
    return usage


def top_apps(usage: dict, apps, limit: int = TOP_APPS_LIMIT) -> list[AppUsage]:
    ranked = []
    for app in apps:
        if app.get("is_excluded"):
            continue
        minutes = usage.get(app.get("id"), 0)
        if minutes <= 0:
            continue
        ranked.append(AppUsage(app.get("id"), app.get("name") or "", minutes, app.get("category")))
    ranked.sort(key=lambda item: (-item.minutes, item.name.lower()))
    return ranked[:limit]


def total_minutes(usage: dict, apps) -> int:
    """Minutes across every known, non-excluded app (not just the top ones)."""
    visible = {app.get("id") for app in apps if not app.get("is_excluded")}
    return sum(minutes for app_id, minutes in usage.items() if app_id in visible)


def limit_warnings(usage: dict, apps, limits, ratio: float = SCREEN_TIME_WARNING_RATIO) -> list[LimitWarning]:
    names = {app.get("id"): app.get("name") or "" for app in apps}
    warnings = []
    for limit in limits:
        if not limit.get("is_active", True):
            continue
        limit_minutes = limit.get("limit_minutes") or 0
        if limit_minutes <= 0:
            continue
        app_id = limit.get("app_id")
        if app_id is None:
            used = sum(usage.values())
            label = TOTAL_LIMIT_LABEL
        else:
            used = usage.get(app_id, 0)
            label = names.get(app_id, app_id)
        if used / limit_minutes >= ratio:
            warnings.append(
                LimitWarning(
                    app_id=app_id,
                    app_name=label,
                    usage=used,
                    limit=limit_minutes,
                    percentage=round_half_up(100 * used / limit_minutes),
                )
            )
    warnings.sort(key=lambda warning: -warning.percentage)
    return warnings
