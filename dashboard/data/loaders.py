from __future__ import annotations

from datetime import date, timedelta

from dashboard.constants import FOOD_SEARCH_MIN_CHARS
from dashboard.data.query_cache import QueryCache
from dashboard.metrics.dates import end_of_week, format_day, start_of_week

TODOS_PATH = "/v1/todos"
TODO_CATEGORIES_PATH = "/v1/todo-categories"
HABITS_PATH = "/v1/habits"
HABIT_ENTRIES_PATH = "/v1/habit-entries"
GOALS_PATH = "/v1/goals"
HEALTH_PATH = "/v1/health"
TIMER_SESSIONS_PATH = "/v1/timer-sessions"
EVENTS_PATH = "/v1/events"
MEALS_PATH = "/v1/meals"
NUTRITION_GOAL_PATH = "/v1/nutrition-goals/active"
WORKOUTS_PATH = "/v1/workouts"
SCREEN_APPS_PATH = "/v1/screen-time/apps"
SCREEN_ENTRIES_PATH = "/v1/screen-time/entries"
SCREEN_LIMITS_PATH = "/v1/screen-time/limits"
WATCHLIST_PATH = "/v1/watchlist"
CARDIO_PATH = "/v1/cardio"
FOODS_PATH = "/v1/foods"
FOOD_SEARCH_PATH = "/v1/foods/search"
WEEKLY_PLANS_PATH = "/v1/weekly-plans"
DAILY_PLANS_PATH = "/v1/daily-plans"


def _range(start: date, end: date) -> dict:
    return {"start": format_day(start), "end": format_day(end)}


def _load(cache: QueryCache, requests: dict) -> dict:
    cache.prefetch(list(requests.values()))
    return {name: cache.items(path, params) for name, (path, params) in requests.items()}


def load_overview(cache: QueryCache, today: date) -> dict:
    return _load(
        cache,
        {
            "todos": (TODOS_PATH, None),
            "categories": (TODO_CATEGORIES_PATH, None),
            "habits": (HABITS_PATH, None),
            "habit_entries": (HABIT_ENTRIES_PATH, {"date": format_day(today)}),
            "goals": (GOALS_PATH, None),
            "events": (EVENTS_PATH, None),
            "health_entries": (HEALTH_PATH, _range(today - timedelta(days=30), today)),
            "timer_sessions": (TIMER_SESSIONS_PATH, {"date": format_day(today)}),
        },
    )


def load_todos(cache: QueryCache) -> dict:
    return _load(cache, {"todos": (TODOS_PATH, None), "categories": (TODO_CATEGORIES_PATH, None)})


def load_systems(cache: QueryCache, start: date, end: date) -> dict:
    return _load(
        cache,
        {
            "habits": (HABITS_PATH, None),
            "habit_entries": (HABIT_ENTRIES_PATH, _range(start, end)),
            "goals": (GOALS_PATH, None),
        },
    )


def load_analytics(cache: QueryCache, start: date, end: date) -> dict:
    return _load(
        cache,
        {
            "habits": (HABITS_PATH, None),
            "habit_entries": (HABIT_ENTRIES_PATH, _range(start, end)),
            "goals": (GOALS_PATH, None),
            "health_entries": (HEALTH_PATH, _range(start, end)),
            "timer_sessions": (TIMER_SESSIONS_PATH, _range(start, end)),
            "todos": (TODOS_PATH, None),
        },
    )


def load_health(cache: QueryCache, today: date) -> dict:
    start = today - timedelta(days=30)
    return _load(
        cache,
        {
            "health_entries": (HEALTH_PATH, _range(start, today)),
            "timer_sessions": (TIMER_SESSIONS_PATH, {"date": format_day(today)}),
            "workouts": (WORKOUTS_PATH, _range(start, today)),
            "cardio": (CARDIO_PATH, _range(start, today)),
        },
    )


def load_nutrition(cache: QueryCache, day: date) -> dict:
    data = _load(cache, {"meals": (MEALS_PATH, {"date": format_day(day)})})
    payload = cache.fetch(NUTRITION_GOAL_PATH) or {}
    data["goal"] = payload.get("item") if isinstance(payload, dict) else None
    return data


def search_foods(cache: QueryCache, query: str) -> list:
    query = (query or "").strip()
    if len(query) < FOOD_SEARCH_MIN_CHARS:
        return []
    return cache.items(FOOD_SEARCH_PATH, {"q": query, "limit": 10})


def load_planning(cache: QueryCache, day: date) -> dict:
    week_start = start_of_week(day)
    data = _load(
        cache,
        {
            "weekly_plans": (WEEKLY_PLANS_PATH, {"date": format_day(week_start)}),
            "daily_plans": (DAILY_PLANS_PATH, {"date": format_day(day)}),
            "week_days": (DAILY_PLANS_PATH, _range(week_start, end_of_week(day))),
            "todos": (TODOS_PATH, {"status": "pending"}),
        },
    )
    data["weekly_plan"] = data["weekly_plans"][0] if data["weekly_plans"] else None
    data["daily_plan"] = data["daily_plans"][0] if data["daily_plans"] else None
    return data


def load_calendar(cache: QueryCache, day: date) -> dict:
    return _load(
        cache,
        {"events": (EVENTS_PATH, _range(start_of_week(day), end_of_week(day)))},
    )


def load_content(cache: QueryCache, today: date) -> dict:
    return _load(
        cache,
        {
            "watchlist": (WATCHLIST_PATH, None),
            "apps": (SCREEN_APPS_PATH, None),
            "entries": (SCREEN_ENTRIES_PATH, _range(start_of_week(today), end_of_week(today))),
            "limits": (SCREEN_LIMITS_PATH, None),
        },
    )
