from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4
from zoneinfo import ZoneInfo

from sqlalchemy import text as sql_text

from backend.db import get_sessionmaker
from backend.db_init import (
    CALENDAR_EVENTS_TABLE,
    CARDIO_ENTRIES_TABLE,
    DAILY_PLANS_TABLE,
    FOOD_ITEMS_TABLE,
    GOALS_TABLE,
    HABIT_ENTRIES_TABLE,
    HABITS_TABLE,
    HEALTH_ENTRIES_TABLE,
    MEALS_TABLE,
    NUTRITION_GOALS_TABLE,
    SCREEN_TIME_APPS_TABLE,
    SCREEN_TIME_ENTRIES_TABLE,
    SCREEN_TIME_LIMITS_TABLE,
    TIMER_SESSIONS_TABLE,
    TODO_CATEGORIES_TABLE,
    TODOS_TABLE,
    WATCHLIST_TABLE,
    WEEKLY_PLANS_TABLE,
    WORKOUT_SETS_TABLE,
    WORKOUTS_TABLE,
)
from backend.food_seed import SEED_FOODS
from backend.settings import get_settings


@dataclass(frozen=True)
class Collection:
    table: str
    columns: tuple
    date_field: str | None = None
    order_by: str = "created_at DESC"
    bool_fields: frozenset = frozenset()
    json_fields: frozenset = frozenset()


TODO_CATEGORIES = Collection(
    TODO_CATEGORIES_TABLE,
    ("name", "color", "icon", "description", "order_index", "is_archived"),
    order_by="order_index ASC, created_at ASC",
    bool_fields=frozenset({"is_archived"}),
)
TODOS = Collection(
    TODOS_TABLE,
    (
        "title", "description", "category_id", "status", "priority", "is_urgent", "is_important",
        "priority_score", "due_date", "due_time", "estimated_minutes", "completed_at", "updated_at",
    ),
    date_field="due_date",
    bool_fields=frozenset({"is_urgent", "is_important"}),
)
HABITS = Collection(
    HABITS_TABLE,
    (
        "name", "description", "category", "tracking_type", "frequency", "target_value", "unit",
        "color", "is_archived", "streak_days",
    ),
    order_by="created_at ASC",
    bool_fields=frozenset({"is_archived"}),
)
HABIT_ENTRIES = Collection(
    HABIT_ENTRIES_TABLE,
    ("habit_id", "date", "value", "completed", "notes"),
    date_field="date",
    order_by="date DESC",
    bool_fields=frozenset({"completed"}),
)
GOALS = Collection(
    GOALS_TABLE,
    ("title", "description", "category", "deadline", "progress", "updated_at"),
)
HEALTH_ENTRIES = Collection(
    HEALTH_ENTRIES_TABLE,
    (
        "date", "sleep_hours", "sleep_quality", "exercise_minutes", "exercise_type",
        "calories_burned", "mood", "notes",
    ),
    date_field="date",
    order_by="date DESC",
)
TIMER_SESSIONS = Collection(
    TIMER_SESSIONS_TABLE,
    ("date", "type", "duration", "completed"),
    date_field="date",
    bool_fields=frozenset({"completed"}),
)
CALENDAR_EVENTS = Collection(
    CALENDAR_EVENTS_TABLE,
    (
        "title", "description", "event_type", "start_date", "start_time", "end_date", "end_time",
        "location", "is_all_day", "color",
    ),
    date_field="start_date",
    order_by="start_date ASC, start_time ASC",
    bool_fields=frozenset({"is_all_day"}),
)
MEALS = Collection(
    MEALS_TABLE,
    ("date", "meal_type", "logged_at", "items", "source", "totals"),
    date_field="date",
    order_by="date DESC, logged_at ASC",
    json_fields=frozenset({"items", "totals"}),
)
NUTRITION_GOALS = Collection(
    NUTRITION_GOALS_TABLE,
    ("calorie_target", "protein_target", "carbs_target", "fat_target", "fiber_target", "is_active"),
    bool_fields=frozenset({"is_active"}),
)
WORKOUTS = Collection(
    WORKOUTS_TABLE,
    ("started_at", "ended_at", "notes"),
    date_field="started_at",
    order_by="started_at DESC",
)
WORKOUT_SETS = Collection(
    WORKOUT_SETS_TABLE,
    ("workout_id", "exercise_name", "weight", "reps", "order_index"),
    order_by="order_index ASC, created_at ASC",
)
SCREEN_TIME_APPS = Collection(
    SCREEN_TIME_APPS_TABLE,
    ("name", "category", "is_excluded"),
    order_by="name ASC",
    bool_fields=frozenset({"is_excluded"}),
)
SCREEN_TIME_ENTRIES = Collection(
    SCREEN_TIME_ENTRIES_TABLE,
    ("app_id", "date", "minutes"),
    date_field="date",
    order_by="date DESC",
)
SCREEN_TIME_LIMITS = Collection(
    SCREEN_TIME_LIMITS_TABLE,
    ("app_id", "limit_minutes", "is_active"),
    bool_fields=frozenset({"is_active"}),
)
WATCHLIST_ITEMS = Collection(
    WATCHLIST_TABLE,
    ("title", "type", "source", "link", "length", "status", "finished_at", "notes"),
)
CARDIO_ENTRIES = Collection(
    CARDIO_ENTRIES_TABLE,
    ("date", "type", "duration_sec", "distance_meters", "notes"),
    date_field="date",
    order_by="date DESC, created_at DESC",
)
FOOD_ITEMS = Collection(
    FOOD_ITEMS_TABLE,
    ("name", "brand", "barcode", "servings", "nutrients", "source", "verified"),
    order_by="name ASC",
    bool_fields=frozenset({"verified"}),
    json_fields=frozenset({"servings", "nutrients"}),
)
WEEKLY_PLANS = Collection(
    WEEKLY_PLANS_TABLE,
    ("week_start_date", "title", "goals", "priorities", "notes", "reflection"),
    date_field="week_start_date",
    order_by="week_start_date DESC",
    json_fields=frozenset({"goals", "priorities"}),
)
DAILY_PLANS = Collection(
    DAILY_PLANS_TABLE,
    (
        "weekly_plan_id", "date", "title", "time_blocks", "priorities", "reflection", "energy_level",
        "mood_rating",
    ),
    date_field="date",
    order_by="date DESC",
    json_fields=frozenset({"time_blocks", "priorities"}),
)

EXPORT_COLLECTIONS = {
    "todo_categories": TODO_CATEGORIES,
    "todos": TODOS,
    "habits": HABITS,
    "habit_entries": HABIT_ENTRIES,
    "goals": GOALS,
    "health_entries": HEALTH_ENTRIES,
    "timer_sessions": TIMER_SESSIONS,
    "calendar_events": CALENDAR_EVENTS,
    "meals": MEALS,
    "nutrition_goals": NUTRITION_GOALS,
    "workouts": WORKOUTS,
    "workout_sets": WORKOUT_SETS,
    "screen_time_apps": SCREEN_TIME_APPS,
    "screen_time_entries": SCREEN_TIME_ENTRIES,
    "screen_time_limits": SCREEN_TIME_LIMITS,
    "watchlist_items": WATCHLIST_ITEMS,
    "cardio_entries": CARDIO_ENTRIES,
    "food_items": FOOD_ITEMS,
    "weekly_plans": WEEKLY_PLANS,
    "daily_plans": DAILY_PLANS,
}


def _new_id() -> str:
    return uuid4().hex


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def local_today() -> date:
    return datetime.now(ZoneInfo(get_settings().app_timezone)).date()


def _to_db_value(collection: Collection, key: str, value):
    if value is None:
        return None
    if key in collection.json_fields:
        return json.dumps(value)
    if key in collection.bool_fields:
        return int(bool(value))
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _normalize_row(collection: Collection, row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    for key, value in list(payload.items()):
        if value is None:
            continue
        if key in collection.bool_fields:
            payload[key] = bool(value)
        elif key in collection.json_fields and isinstance(value, str):
            payload[key] = json.loads(value)
        elif hasattr(value, "isoformat"):
            payload[key] = value.isoformat()
    return payload


def _select_columns(collection: Collection) -> str:
    return ", ".join(("id", *collection.columns, "created_at"))


async def list_records(
    collection: Collection,
    *,
    day: str | None = None,
    start: str | None = None,
    end: str | None = None,
    filters: dict | None = None,
) -> list[dict]:
    clauses = []
    params: dict = {}
    if collection.date_field and (day or start or end):
        day_expr = f"substr({collection.date_field}, 1, 10)"
        if day:
            clauses.append(f"{day_expr} = :day")
            params["day"] = day
        if start:
            clauses.append(f"{day_expr} >= :start")
            params["start"] = start
        if end:
            clauses.append(f"{day_expr} <= :end")
            params["end"] = end
    for key, value in (filters or {}).items():
        if key not in collection.columns or value is None:
            continue
        clauses.append(f"{key} = :f_{key}")
        params[f"f_{key}"] = _to_db_value(collection, key, value)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"SELECT {_select_columns(collection)} FROM {collection.table} {where} "
                f"ORDER BY {collection.order_by}"
            ),
            params,
        )).mappings().all()
    return [_normalize_row(collection, row) for row in rows]


async def get_record(collection: Collection, record_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(f"SELECT {_select_columns(collection)} FROM {collection.table} WHERE id = :id"),
            {"id": record_id},
        )).mappings().fetchone()
    return _normalize_row(collection, row) if row else {}


def _insert_statement(collection: Collection, payload: dict):
    record = {
        key: _to_db_value(collection, key, payload.get(key))
        for key in collection.columns
        if payload.get(key) is not None
    }
    record["id"] = _new_id()
    record["created_at"] = _now_iso()
    columns = ", ".join(record)
    values = ", ".join(f":{key}" for key in record)
    return sql_text(f"INSERT INTO {collection.table} ({columns}) VALUES ({values})"), record


async def create_record(collection: Collection, payload: dict) -> dict:
    statement, record = _insert_statement(collection, payload)
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(statement, record)
        await session.commit()
    return await get_record(collection, record["id"])


async def update_record(collection: Collection, record_id: str, patch: dict) -> dict:
    updates = []
    params = {"id": record_id}
    for key, value in patch.items():
        if key not in collection.columns:
            continue
        updates.append(f"{key} = :{key}")
        params[key] = _to_db_value(collection, key, value)
    if "updated_at" in collection.columns and updates:
        updates.append("updated_at = :updated_at")
        params["updated_at"] = _now_iso()
    if not updates:
        return await get_record(collection, record_id)
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(f"UPDATE {collection.table} SET {', '.join(updates)} WHERE id = :id"),
            params,
        )
        await session.commit()
    return await get_record(collection, record_id)


async def delete_record(collection: Collection, record_id: str) -> bool:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(f"DELETE FROM {collection.table} WHERE id = :id"),
            {"id": record_id},
        )
        await session.commit()
    return bool(result.rowcount)


def _status_timestamp(current: dict, new_status, done_status: str, field: str) -> dict:
    if new_status is None:
        return {}
    if new_status != done_status:
        return {field: None}
    if current.get("status") == done_status and current.get(field):
        return {}
    return {field: _now_iso()}


async def create_todo(payload: dict) -> dict:
    payload = dict(payload)
    payload.update(_status_timestamp({}, payload.get("status"), "completed", "completed_at"))
    return await create_record(TODOS, payload)


async def update_todo(todo_id: str, patch: dict) -> dict:
    current = await get_record(TODOS, todo_id)
    if not current:
        return {}
    patch = dict(patch)
    patch.update(_status_timestamp(current, patch.get("status"), "completed", "completed_at"))
    return await update_record(TODOS, todo_id, patch)


async def create_watchlist_item(payload: dict) -> dict:
    payload = dict(payload)
    payload.update(_status_timestamp({}, payload.get("status"), "Done", "finished_at"))
    return await create_record(WATCHLIST_ITEMS, payload)


async def update_watchlist_item(item_id: str, patch: dict) -> dict:
    current = await get_record(WATCHLIST_ITEMS, item_id)
    if not current:
        return {}
    patch = dict(patch)
    patch.update(_status_timestamp(current, patch.get("status"), "Done", "finished_at"))
    return await update_record(WATCHLIST_ITEMS, item_id, patch)


async def _delete_with_dependents(collection: Collection, record_id: str, dependents: list[str]) -> bool:
    """Run the dependent statements and the parent delete in one transaction."""
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        for statement in dependents:
            await session.execute(sql_text(statement), {"parent_id": record_id})
        result = await session.execute(
            sql_text(f"DELETE FROM {collection.table} WHERE id = :parent_id"),
            {"parent_id": record_id},
        )
        if not result.rowcount:
            await session.rollback()
            return False
        await session.commit()
    return True


async def delete_todo_category(category_id: str) -> bool:
    return await _delete_with_dependents(
        TODO_CATEGORIES,
        category_id,
        [f"UPDATE {TODOS_TABLE} SET category_id = NULL WHERE category_id = :parent_id"],
    )


async def delete_habit(habit_id: str) -> bool:
    return await _delete_with_dependents(
        HABITS,
        habit_id,
        [f"DELETE FROM {HABIT_ENTRIES_TABLE} WHERE habit_id = :parent_id"],
    )


async def update_habit(habit_id: str, patch: dict) -> dict:
    """Apply ``patch``; a new target re-marks every stored entry and the streak."""
    habit = await update_record(HABITS, habit_id, patch)
    if patch.get("target_value") is None:
        return habit
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                UPDATE {HABIT_ENTRIES_TABLE}
                SET completed = CASE WHEN COALESCE(value, 0) >= :target THEN 1 ELSE 0 END
                WHERE habit_id = :habit_id
                """
            ),
            {"target": patch["target_value"], "habit_id": habit_id},
        )
        await session.commit()
    await refresh_habit_streak(habit_id)
    return await get_record(HABITS, habit_id)


def consecutive_days(done_days: set, today: date) -> int:
    """Run of consecutive done days ending today, or yesterday when today is open."""
    current = today if today in done_days else today - timedelta(days=1)
    count = 0
    while current in done_days:
        count += 1
        current = current - timedelta(days=1)
    return count


async def refresh_habit_streak(habit_id: str, today: date | None = None) -> int:
    today = today or local_today()
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT date FROM {HABIT_ENTRIES_TABLE}
                WHERE habit_id = :habit_id AND completed = 1 AND date <= :today
                """
            ),
            {"habit_id": habit_id, "today": today.isoformat()},
        )).mappings().all()
        done_days = {date.fromisoformat(str(row["date"])[:10]) for row in rows}
        streak = consecutive_days(done_days, today)
        await session.execute(
            sql_text(f"UPDATE {HABITS_TABLE} SET streak_days = :streak WHERE id = :habit_id"),
            {"streak": streak, "habit_id": habit_id},
        )
        await session.commit()
    return streak


async def upsert_habit_entry(habit: dict, payload: dict) -> dict:
    target = habit.get("target_value") or 1
    value = payload.get("value") or 0
    record = {
        "id": _new_id(),
        "habit_id": habit["id"],
        "date": _to_db_value(HABIT_ENTRIES, "date", payload.get("date")),
        "value": value,
        "completed": int(value >= target),
        "notes": payload.get("notes"),
        "created_at": _now_iso(),
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {HABIT_ENTRIES_TABLE} (id, habit_id, date, value, completed, notes, created_at)
                VALUES (:id, :habit_id, :date, :value, :completed, :notes, :created_at)
                ON CONFLICT (habit_id, date) DO UPDATE SET
                    value = EXCLUDED.value,
                    completed = EXCLUDED.completed,
                    notes = EXCLUDED.notes
                """
            ),
            record,
        )
        await session.commit()
    await refresh_habit_streak(habit["id"])
    entries = await list_records(HABIT_ENTRIES, day=record["date"], filters={"habit_id": habit["id"]})
    return entries[0] if entries else {}


async def delete_habit_entry(entry_id: str) -> bool:
    entry = await get_record(HABIT_ENTRIES, entry_id)
    if not entry:
        return False
    deleted = await delete_record(HABIT_ENTRIES, entry_id)
    await refresh_habit_streak(entry["habit_id"])
    return deleted


async def upsert_health_entry(payload: dict) -> dict:
    fields = [key for key in HEALTH_ENTRIES.columns if key != "date"]
    record = {key: _to_db_value(HEALTH_ENTRIES, key, payload.get(key)) for key in HEALTH_ENTRIES.columns}
    record["id"] = _new_id()
    record["created_at"] = _now_iso()
    updates = ",\n".join(
        f"{key} = COALESCE(EXCLUDED.{key}, {HEALTH_ENTRIES_TABLE}.{key})" for key in fields
    )
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {HEALTH_ENTRIES_TABLE} (id, {', '.join(HEALTH_ENTRIES.columns)}, created_at)
                VALUES (:id, {', '.join(':' + key for key in HEALTH_ENTRIES.columns)}, :created_at)
                ON CONFLICT (date) DO UPDATE SET
                {updates}
                """
            ),
            record,
        )
        await session.commit()
    entries = await list_records(HEALTH_ENTRIES, day=record["date"])
    return entries[0] if entries else {}


async def set_active_nutrition_goal(payload: dict) -> dict:
    statement, record = _insert_statement(NUTRITION_GOALS, {**payload, "is_active": True})
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(sql_text(f"UPDATE {NUTRITION_GOALS_TABLE} SET is_active = 0"))
        await session.execute(statement, record)
        await session.commit()
    return await get_record(NUTRITION_GOALS, record["id"])


async def get_active_nutrition_goal() -> dict:
    goals = await list_records(NUTRITION_GOALS, filters={"is_active": True})
    return goals[0] if goals else {}


async def list_workouts_with_sets(start: str | None = None, end: str | None = None) -> list[dict]:
    workouts = await list_records(WORKOUTS, start=start, end=end)
    sets = await list_records(WORKOUT_SETS)
    by_workout: dict[str, list[dict]] = {}
    for item in sets:
        by_workout.setdefault(item["workout_id"], []).append(item)
    for workout in workouts:
        workout["sets"] = by_workout.get(workout["id"], [])
    return workouts


async def add_workout_set(workout_id: str, payload: dict) -> dict:
    payload = dict(payload)
    if payload.get("order_index") is None:
        existing = await list_records(WORKOUT_SETS, filters={"workout_id": workout_id})
        payload["order_index"] = len(existing)
    payload["workout_id"] = workout_id
    return await create_record(WORKOUT_SETS, payload)


async def delete_workout(workout_id: str) -> bool:
    return await _delete_with_dependents(
        WORKOUTS,
        workout_id,
        [f"DELETE FROM {WORKOUT_SETS_TABLE} WHERE workout_id = :parent_id"],
    )


async def delete_screen_time_app(app_id: str) -> bool:
    return await _delete_with_dependents(
        SCREEN_TIME_APPS,
        app_id,
        [
            f"DELETE FROM {SCREEN_TIME_ENTRIES_TABLE} WHERE app_id = :parent_id",
            f"DELETE FROM {SCREEN_TIME_LIMITS_TABLE} WHERE app_id = :parent_id",
        ],
    )


async def delete_weekly_plan(plan_id: str) -> bool:
    return await _delete_with_dependents(
        WEEKLY_PLANS,
        plan_id,
        [f"UPDATE {DAILY_PLANS_TABLE} SET weekly_plan_id = NULL WHERE weekly_plan_id = :parent_id"],
    )


async def seed_food_items() -> int:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        count = (await session.execute(sql_text(f"SELECT COUNT(*) FROM {FOOD_ITEMS_TABLE}"))).scalar()
        if count:
            return 0
        for food in SEED_FOODS:
            statement, record = _insert_statement(FOOD_ITEMS, {**food, "source": "usda", "verified": True})
            await session.execute(statement, record)
        await session.commit()
    return len(SEED_FOODS)


async def search_food_items(query: str, limit: int = 10) -> list[dict]:
    pattern = f"%{query.strip().lower()}%"
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT {_select_columns(FOOD_ITEMS)} FROM {FOOD_ITEMS_TABLE}
                WHERE lower(name) LIKE :pattern OR lower(COALESCE(brand, '')) LIKE :pattern
                ORDER BY verified DESC, name ASC
                LIMIT :limit
                """
            ),
            {"pattern": pattern, "limit": limit},
        )).mappings().all()
    return [_normalize_row(FOOD_ITEMS, row) for row in rows]


def _with_item_ids(items):
    if items is None:
        return None
    return [{**item, "id": item.get("id") or _new_id()} for item in items]


def prepare_plan(payload: dict, list_fields: tuple) -> dict:
    """Give every checklist item or time block an id the client can toggle by."""
    payload = dict(payload)
    for field in list_fields:
        if field in payload:
            payload[field] = _with_item_ids(payload[field])
    return payload


async def export_all() -> dict:
    payload = {}
    for name, collection in EXPORT_COLLECTIONS.items():
        payload[name] = await list_records(collection)
    payload["exported_at"] = _now_iso()
    return payload
