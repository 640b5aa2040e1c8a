"""Analytics rollups over a named time window.

Every collection is filtered to the same inclusive ``[start, end]`` window and
reduced into one fixed-shape record per domain. Averages only look at records
that actually carry the field; sums read a missing value as 0.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, timedelta

from dashboard.constants import (
    DEFAULT_GOAL_CATEGORY,
    DEFAULT_TODO_PRIORITY,
    TIME_RANGE_ALIASES,
    TIME_RANGE_DAYS,
)
from dashboard.metrics.completion import (
    active_habits,
    completion_rate,
    is_habit_complete,
    round_half_up,
)
from dashboard.metrics.dates import (
    days_between,
    end_of_month,
    end_of_week,
    format_day,
    local_day,
    parse_day,
    start_of_month,
    start_of_week,
)


@dataclass(frozen=True)
class DateWindow:
    token: str
    start: date
    end: date

    @property
    def days(self) -> int:
        return days_between(self.start, self.end) + 1

    def contains(self, value, tz_name=None) -> bool:
        return self.start <= local_day(value, tz_name) <= self.end


@dataclass(frozen=True)
class HabitStats:
    total_completions: int = 0
    completion_rate: int = 0
    best_habit: str | None = None
    best_habit_score: int = 0


@dataclass(frozen=True)
class GoalStats:
    total_goals: int = 0
    completed_goals: int = 0
    average_progress: int = 0
    goals_by_category: dict = field(default_factory=dict)


@dataclass(frozen=True)
class HealthStats:
    average_sleep: float = 0
    average_sleep_quality: float = 0
    average_mood: float = 0
    total_exercise_minutes: int = 0
    total_calories_burned: int = 0
    exercise_days: int = 0
    average_exercise_per_day: int = 0
    nights_tracked: int = 0


@dataclass(frozen=True)
class TimerStats:
    total_sessions: int = 0
    total_minutes: int = 0
    total_hours: float = 0
    pomodoro_sessions: int = 0
    average_session_length: int = 0


@dataclass(frozen=True)
class TodoStats:
    total_todos: int = 0
    completed_todos: int = 0
    pending_todos: int = 0
    completion_rate: int = 0
    priority_distribution: dict = field(default_factory=dict)


@dataclass(frozen=True)
class AnalyticsReport:
    window: DateWindow
    habits: HabitStats
    goals: GoalStats
    health: HealthStats
    timer: TimerStats
    todos: TodoStats

    def as_dict(self) -> dict:
        payload = asdict(self)
        payload["window"] = {
            "token": self.window.token,
            "start": format_day(self.window.start),
            "end": format_day(self.window.end),
            "days": self.window.days,
        }
        return payload


def resolve_window(token: str, today: date) -> DateWindow:
    key = TIME_RANGE_ALIASES.get(token, token)
    if key in TIME_RANGE_DAYS:
        return DateWindow(key, today - timedelta(days=TIME_RANGE_DAYS[key]), today)
    if key == "thisWeek":
        return DateWindow(key, start_of_week(today), end_of_week(today))
    if key == "thisMonth":
        return DateWindow(key, start_of_month(today), end_of_month(today))
    raise ValueError(f"Unknown time range: {token!r}")


def filter_window(records, window: DateWindow, field_name="date", tz_name=None) -> list:
    return [
        record
        for record in records
        if record.get(field_name) and window.contains(record.get(field_name), tz_name)
    ]


def average(records, field_name, digits=1):
    values = [record.get(field_name) for record in records if record.get(field_name) is not None]
    if not values:
        return 0
    return round_half_up(sum(values) / len(values), digits)


def total(records, field_name):
    return sum(record.get(field_name) or 0 for record in records)


def habit_stats(habits, entries, window: DateWindow) -> HabitStats:
    active = active_habits(habits)
    by_id = {habit.get("id"): habit for habit in active}
    completed_days = set()
    for entry in filter_window(entries, window):
        habit = by_id.get(entry.get("habit_id"))
        if habit is not None and is_habit_complete(habit, entry):
            completed_days.add((habit.get("id"), parse_day(entry.get("date"))))

    completions = len(completed_days)
    possible = len(active) * window.days
    rate = min(100, completion_rate(completions, possible))

    best_habit = None
    best_score = 0
    for habit in active:
        score = sum(1 for habit_id, _ in completed_days if habit_id == habit.get("id"))
        if best_habit is None or score > best_score:
            best_habit, best_score = habit, score
    return HabitStats(
        total_completions=completions,
        completion_rate=rate,
        best_habit=best_habit.get("name") if best_habit else None,
        best_habit_score=best_score,
    )


def goal_stats(goals) -> GoalStats:
    by_category = {}
    for goal in goals:
        category = goal.get("category") or DEFAULT_GOAL_CATEGORY
        by_category[category] = by_category.get(category, 0) + 1
    return GoalStats(
        total_goals=len(goals),
        completed_goals=sum(1 for goal in goals if (goal.get("progress") or 0) >= 100),
        average_progress=average(goals, "progress", digits=0),
        goals_by_category=by_category,
    )


def health_stats(entries, window: DateWindow) -> HealthStats:
    windowed = filter_window(entries, window)
    exercise_minutes = total(windowed, "exercise_minutes")
    exercise_days = sum(1 for entry in windowed if (entry.get("exercise_minutes") or 0) > 0)
    return HealthStats(
        average_sleep=average(windowed, "sleep_hours"),
        average_sleep_quality=average(windowed, "sleep_quality"),
        average_mood=average(windowed, "mood"),
        total_exercise_minutes=exercise_minutes,
        total_calories_burned=total(windowed, "calories_burned"),
        exercise_days=exercise_days,
        average_exercise_per_day=round_half_up(exercise_minutes / exercise_days) if exercise_days else 0,
        nights_tracked=sum(1 for entry in windowed if entry.get("sleep_hours") is not None),
    )


def timer_stats(sessions, window: DateWindow) -> TimerStats:
    finished = [session for session in filter_window(sessions, window) if session.get("completed")]
    minutes = total(finished, "duration")
    return TimerStats(
        total_sessions=len(finished),
        total_minutes=minutes,
        total_hours=round_half_up(minutes / 60, 1),
        pomodoro_sessions=sum(1 for session in finished if session.get("type") == "pomodoro"),
        average_session_length=round_half_up(minutes / len(finished)) if finished else 0,
    )


def todo_stats(todos) -> TodoStats:
    distribution = {}
    for todo in todos:
        priority = todo.get("priority") or DEFAULT_TODO_PRIORITY
        distribution[priority] = distribution.get(priority, 0) + 1
    completed = sum(1 for todo in todos if todo.get("status") == "completed")
    return TodoStats(
        total_todos=len(todos),
        completed_todos=completed,
        pending_todos=sum(1 for todo in todos if todo.get("status") == "pending"),
        completion_rate=completion_rate(completed, len(todos)),
        priority_distribution=distribution,
    )


def build_report(
    token: str,
    today: date,
    *,
    habits=(),
    habit_entries=(),
    goals=(),
    health_entries=(),
    timer_sessions=(),
    todos=(),
) -> AnalyticsReport:
    window = resolve_window(token, today)
    return AnalyticsReport(
        window=window,
        habits=habit_stats(list(habits), list(habit_entries), window),
        goals=goal_stats(list(goals)),
        health=health_stats(list(health_entries), window),
        timer=timer_stats(list(timer_sessions), window),
        todos=todo_stats(list(todos)),
    )
