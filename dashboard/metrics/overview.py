"""Counts and insights shown on the overview page."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from dashboard.constants import (
    GOAL_ON_TRACK_PROGRESS,
    RECOMMENDED_SLEEP_HOURS,
    SLEEP_INSIGHT_NIGHTS,
)
from dashboard.metrics.completion import round_half_up
from dashboard.metrics.dates import parse_day
from dashboard.metrics.eisenhower import is_overdue
from dashboard.metrics.streaks import longest_stored_streak


@dataclass(frozen=True)
class TodoOverview:
    total: int
    due_today: list = field(default_factory=list)
    overdue: list = field(default_factory=list)
    completed: int = 0
    pending: int = 0


@dataclass(frozen=True)
class CategoryProgress:
    category_id: str
    name: str
    completed: int
    total: int
    color: str | None = None


@dataclass(frozen=True)
class EventOverview:
    today: list = field(default_factory=list)
    tomorrow: list = field(default_factory=list)
    upcoming: int = 0


@dataclass(frozen=True)
class Insight:
    kind: str
    title: str
    message: str
    tone: str = "info"


def todo_overview(todos, today: date) -> TodoOverview:
    return TodoOverview(
        total=len(todos),
        due_today=[todo for todo in todos if todo.get("due_date") and parse_day(todo["due_date"]) == today],
        overdue=[todo for todo in todos if is_overdue(todo, today)],
        completed=sum(1 for todo in todos if todo.get("status") == "completed"),
        pending=sum(1 for todo in todos if todo.get("status") == "pending"),
    )


def category_progress(todos, categories) -> list[CategoryProgress]:
    rows = []
    for category in categories:
        if category.get("is_archived"):
            continue
        in_category = [todo for todo in todos if todo.get("category_id") == category.get("id")]
        rows.append(
            CategoryProgress(
                category_id=category.get("id"),
                name=category.get("name") or "",
                completed=sum(1 for todo in in_category if todo.get("status") == "completed"),
                total=len(in_category),
                color=category.get("color"),
            )
        )
    return rows


def event_overview(events, today: date) -> EventOverview:
    tomorrow = today + timedelta(days=1)
    starts = [(event, parse_day(event.get("start_date"))) for event in events]
    return EventOverview(
        today=[event for event, start in starts if start == today],
        tomorrow=[event for event, start in starts if start == tomorrow],
        upcoming=sum(1 for _, start in starts if start > today),
    )


def recent_sleep_average(health_entries, nights: int = SLEEP_INSIGHT_NIGHTS):
    """Mean sleep over the last ``nights`` recorded nights, or None."""
    recorded = sorted(
        (entry for entry in health_entries if entry.get("sleep_hours")),
        key=lambda entry: parse_day(entry.get("date")),
    )[-nights:]
    if not recorded:
        return None
    return sum(entry["sleep_hours"] for entry in recorded) / len(recorded)


def build_insights(habits, goals, health_entries) -> list[Insight]:
    insights = []

    streak = longest_stored_streak(habits)
    if streak > 0:
        insights.append(
            Insight(
                kind="habit_streak",
                title="Habit Streak",
                message=f"Great job maintaining your habits! Your longest streak is {streak} days.",
                tone="success",
            )
        )

    sleep = recent_sleep_average(health_entries)
    if sleep is not None and sleep < RECOMMENDED_SLEEP_HOURS:
        insights.append(
            Insight(
                kind="sleep_pattern",
                title="Sleep Pattern",
                message=(
                    f"Your average sleep is {round_half_up(sleep, 1):.1f} hours. "
                    "Consider aiming for 7-9 hours nightly."
                ),
                tone="warning",
            )
        )

    on_track = sum(1 for goal in goals if (goal.get("progress") or 0) >= GOAL_ON_TRACK_PROGRESS)
    if on_track > 0:
        insights.append(
            Insight(
                kind="goals_on_track",
                title="Goal Achievement",
                message=f"{on_track} of your goals are on track. Keep up the momentum!",
            )
        )
    return insights
