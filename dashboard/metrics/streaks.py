"""Consecutive-day streaks counted backward from a reference day.

The walk tolerates one missing day in total: a run that ends yesterday still
counts when today has nothing yet, and the same slack also lets a single gap
inside the run through (today + two days ago gives 2). The store keeps its own
strict streak on ``habits.streak_days``.
"""

from __future__ import annotations

from dashboard.metrics.completion import is_habit_complete
from dashboard.metrics.dates import days_between, local_day


def completion_days(values, tz_name=None):
    """Distinct calendar days of ``values``, newest first."""
    return sorted({local_day(value, tz_name) for value in values}, reverse=True)


def calculate_streak(values, reference_day, tz_name=None) -> int:
    streak = 0
    for day in completion_days(values, tz_name):
        if day > reference_day:
            continue
        diff = days_between(day, reference_day)
        if diff == streak or diff == streak + 1:
            streak += 1
        else:
            break
    return streak


def habit_streak(habit, entries, reference_day) -> int:
    days = [
        entry.get("date")
        for entry in entries
        if entry.get("habit_id") == habit.get("id") and is_habit_complete(habit, entry)
    ]
    return calculate_streak(days, reference_day)


def longest_stored_streak(habits) -> int:
    return max([int(habit.get("streak_days") or 0) for habit in habits], default=0)
