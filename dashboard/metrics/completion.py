from __future__ import annotations

import math
from dataclasses import dataclass

from dashboard.constants import DEFAULT_TARGET_VALUE
from dashboard.metrics.dates import parse_day


@dataclass(frozen=True)
class CompletionSummary:
    completed: int
    total: int
    rate: int


@dataclass(frozen=True)
class FocusSummary:
    completed_sessions: int
    total_sessions: int
    total_minutes: int
    rate: int


def round_half_up(value, digits=0):
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def completion_rate(completed, total) -> int:
    if total <= 0:
        return 0
    return round_half_up(100 * completed / total)


def target_value(habit) -> float:
    return habit.get("target_value") or DEFAULT_TARGET_VALUE


def is_habit_complete(habit, entry) -> bool:
    return (entry.get("value") or 0) >= target_value(habit)


def active_habits(habits):
    return [habit for habit in habits if not habit.get("is_archived")]


def habit_completion_today(habits, entries, day=None) -> CompletionSummary:
    """Active habits whose entry for ``day`` reaches the habit target.

    ``entries`` is usually already filtered to one day by the store; passing
    ``day`` filters it again here. Each habit counts at most once and entries
    for archived or unknown habits are ignored, so the rate stays in [0, 100].
    """
    active = active_habits(habits)
    by_id = {habit.get("id"): habit for habit in active}
    done = set()
    for entry in entries:
        if day is not None and parse_day(entry.get("date")) != day:
            continue
        habit = by_id.get(entry.get("habit_id"))
        if habit is not None and is_habit_complete(habit, entry):
            done.add(habit.get("id"))
    return CompletionSummary(len(done), len(active), completion_rate(len(done), len(active)))


def todo_completion(todos) -> CompletionSummary:
    completed = sum(1 for todo in todos if todo.get("status") == "completed")
    return CompletionSummary(completed, len(todos), completion_rate(completed, len(todos)))


def goal_completion(goals) -> CompletionSummary:
    completed = sum(1 for goal in goals if (goal.get("progress") or 0) >= 100)
    return CompletionSummary(completed, len(goals), completion_rate(completed, len(goals)))


def focus_completion(sessions) -> FocusSummary:
    finished = [session for session in sessions if session.get("completed")]
    minutes = sum(int(session.get("duration") or 0) for session in finished)
    return FocusSummary(
        completed_sessions=len(finished),
        total_sessions=len(sessions),
        total_minutes=minutes,
        rate=completion_rate(len(finished), len(sessions)),
    )
