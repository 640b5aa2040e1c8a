from __future__ import annotations

import logging

from sqlalchemy import text as sql_text

from backend.db import get_engine

logger = logging.getLogger(__name__)

TODO_CATEGORIES_TABLE = "todo_categories"
TODOS_TABLE = "todos"
HABITS_TABLE = "habits"
HABIT_ENTRIES_TABLE = "habit_entries"
GOALS_TABLE = "goals"
HEALTH_ENTRIES_TABLE = "health_entries"
TIMER_SESSIONS_TABLE = "timer_sessions"
CALENDAR_EVENTS_TABLE = "calendar_events"
MEALS_TABLE = "meals"
NUTRITION_GOALS_TABLE = "nutrition_goals"
WORKOUTS_TABLE = "workouts"
WORKOUT_SETS_TABLE = "workout_sets"
SCREEN_TIME_APPS_TABLE = "screen_time_apps"
SCREEN_TIME_ENTRIES_TABLE = "screen_time_entries"
SCREEN_TIME_LIMITS_TABLE = "screen_time_limits"
WATCHLIST_TABLE = "watchlist_items"
CARDIO_ENTRIES_TABLE = "cardio_entries"
FOOD_ITEMS_TABLE = "food_items"
WEEKLY_PLANS_TABLE = "weekly_plans"
DAILY_PLANS_TABLE = "daily_plans"

TABLE_DDL = {
    TODO_CATEGORIES_TABLE: """
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        color TEXT,
        icon TEXT,
        description TEXT,
        order_index INTEGER DEFAULT 0,
        is_archived INTEGER DEFAULT 0,
        created_at TEXT NOT NULL
    """,
    TODOS_TABLE: """
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT,
        category_id TEXT,
        status TEXT NOT NULL DEFAULT 'pending',
        priority TEXT NOT NULL DEFAULT 'medium',
        is_urgent INTEGER DEFAULT 0,
        is_important INTEGER DEFAULT 0,
        priority_score INTEGER,
        due_date TEXT,
        due_time TEXT,
        estimated_minutes INTEGER,
        completed_at TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT
    """,
    HABITS_TABLE: """
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        description TEXT,
        category TEXT,
        tracking_type TEXT NOT NULL DEFAULT 'boolean',
        frequency TEXT NOT NULL DEFAULT 'daily',
        target_value INTEGER DEFAULT 1,
        unit TEXT,
        color TEXT,
        is_archived INTEGER DEFAULT 0,
        streak_days INTEGER DEFAULT 0,
        created_at TEXT NOT NULL
    """,
    HABIT_ENTRIES_TABLE: """
        id TEXT PRIMARY KEY,
        habit_id TEXT NOT NULL,
        date TEXT NOT NULL,
        value REAL DEFAULT 0,
        completed INTEGER DEFAULT 0,
        notes TEXT,
        created_at TEXT NOT NULL,
        UNIQUE (habit_id, date)
    """,
    GOALS_TABLE: """
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT,
        category TEXT,
        deadline TEXT,
        progress INTEGER DEFAULT 0,
        created_at TEXT NOT NULL,
        updated_at TEXT
    """,
    HEALTH_ENTRIES_TABLE: """
        id TEXT PRIMARY KEY,
        date TEXT NOT NULL UNIQUE,
        sleep_hours REAL,
        sleep_quality INTEGER,
        exercise_minutes INTEGER,
        exercise_type TEXT,
        calories_burned INTEGER,
        mood INTEGER,
        notes TEXT,
        created_at TEXT NOT NULL
    """,
    TIMER_SESSIONS_TABLE: """
        id TEXT PRIMARY KEY,
        date TEXT NOT NULL,
        type TEXT NOT NULL,
        duration INTEGER NOT NULL,
        completed INTEGER DEFAULT 0,
        created_at TEXT NOT NULL
    """,
    CALENDAR_EVENTS_TABLE: """
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT,
        event_type TEXT NOT NULL DEFAULT 'personal',
        start_date TEXT NOT NULL,
        start_time TEXT,
        end_date TEXT,
        end_time TEXT,
        location TEXT,
        is_all_day INTEGER DEFAULT 0,
        color TEXT,
        created_at TEXT NOT NULL
    """,
    MEALS_TABLE: """
        id TEXT PRIMARY KEY,
        date TEXT NOT NULL,
        meal_type TEXT NOT NULL,
        logged_at TEXT,
        items TEXT,
        source TEXT DEFAULT 'manual',
        totals TEXT,
        created_at TEXT NOT NULL
    """,
    NUTRITION_GOALS_TABLE: """
        id TEXT PRIMARY KEY,
        calorie_target INTEGER,
        protein_target REAL,
        carbs_target REAL,
        fat_target REAL,
        fiber_target REAL DEFAULT 25,
        is_active INTEGER DEFAULT 1,
        created_at TEXT NOT NULL
    """,
    WORKOUTS_TABLE: """
        id TEXT PRIMARY KEY,
        started_at TEXT NOT NULL,
        ended_at TEXT,
        notes TEXT,
        created_at TEXT NOT NULL
    """,
    WORKOUT_SETS_TABLE: """
        id TEXT PRIMARY KEY,
        workout_id TEXT NOT NULL,
        exercise_name TEXT NOT NULL,
        weight REAL DEFAULT 0,
        reps INTEGER DEFAULT 0,
        order_index INTEGER DEFAULT 0,
        created_at TEXT NOT NULL
    """,
    SCREEN_TIME_APPS_TABLE: """
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        category TEXT,
        is_excluded INTEGER DEFAULT 0,
        created_at TEXT NOT NULL
    """,
    SCREEN_TIME_ENTRIES_TABLE: """
        id TEXT PRIMARY KEY,
        app_id TEXT NOT NULL,
        date TEXT NOT NULL,
        minutes INTEGER NOT NULL DEFAULT 0,
        created_at TEXT NOT NULL
    """,
    SCREEN_TIME_LIMITS_TABLE: """
        id TEXT PRIMARY KEY,
        app_id TEXT,
        limit_minutes INTEGER NOT NULL,
        is_active INTEGER DEFAULT 1,
        created_at TEXT NOT NULL
    """,
    WATCHLIST_TABLE: """
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        type TEXT NOT NULL DEFAULT 'movie',
        source TEXT,
        link TEXT,
        length INTEGER,
        status TEXT NOT NULL DEFAULT 'To Watch',
        finished_at TEXT,
        notes TEXT,
        created_at TEXT NOT NULL
    """,
    CARDIO_ENTRIES_TABLE: """
        id TEXT PRIMARY KEY,
        date TEXT NOT NULL,
        type TEXT NOT NULL DEFAULT 'run',
        duration_sec INTEGER NOT NULL,
        distance_meters REAL,
        notes TEXT,
        created_at TEXT NOT NULL
    """,
    FOOD_ITEMS_TABLE: """
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        brand TEXT,
        barcode TEXT,
        servings TEXT,
        nutrients TEXT NOT NULL,
        source TEXT NOT NULL DEFAULT 'user',
        verified INTEGER DEFAULT 0,
        created_at TEXT NOT NULL
    """,
    WEEKLY_PLANS_TABLE: """
        id TEXT PRIMARY KEY,
        week_start_date TEXT NOT NULL UNIQUE,
        title TEXT NOT NULL,
        goals TEXT,
        priorities TEXT,
        notes TEXT,
        reflection TEXT,
        created_at TEXT NOT NULL
    """,
    DAILY_PLANS_TABLE: """
        id TEXT PRIMARY KEY,
        weekly_plan_id TEXT,
        date TEXT NOT NULL UNIQUE,
        title TEXT NOT NULL,
        time_blocks TEXT,
        priorities TEXT,
        reflection TEXT,
        energy_level INTEGER,
        mood_rating INTEGER,
        created_at TEXT NOT NULL
    """,
}


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        for table_name, columns in TABLE_DDL.items():
            await conn.execute(sql_text(f"CREATE TABLE IF NOT EXISTS {table_name} ({columns})"))

    async def ensure_index(index_sql: str) -> None:
        try:
            async with engine.begin() as conn:
                await conn.execute(sql_text(index_sql))
        except Exception as exc:
            logger.warning("Index creation skipped: %s", exc)

    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{HABIT_ENTRIES_TABLE}_date ON {HABIT_ENTRIES_TABLE} (date)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{TODOS_TABLE}_status_due ON {TODOS_TABLE} (status, due_date)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{TIMER_SESSIONS_TABLE}_date ON {TIMER_SESSIONS_TABLE} (date)"
    )
    await ensure_index(f"CREATE INDEX IF NOT EXISTS idx_{MEALS_TABLE}_date ON {MEALS_TABLE} (date)")
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{SCREEN_TIME_ENTRIES_TABLE}_app_date "
        f"ON {SCREEN_TIME_ENTRIES_TABLE} (app_id, date)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{WORKOUT_SETS_TABLE}_workout "
        f"ON {WORKOUT_SETS_TABLE} (workout_id, order_index)"
    )
    await ensure_index(
        f"CREATE INDEX IF NOT EXISTS idx_{CARDIO_ENTRIES_TABLE}_date ON {CARDIO_ENTRIES_TABLE} (date)"
    )
    await ensure_index(f"CREATE INDEX IF NOT EXISTS idx_{FOOD_ITEMS_TABLE}_name ON {FOOD_ITEMS_TABLE} (name)")
    logger.info("Database schema ready (%s tables)", len(TABLE_DDL))
