from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from dashboard.constants import (
    DEFAULT_PRIORITY_SCORE,
    ESSENTIAL_PRIORITY_THRESHOLD,
    ESSENTIAL_TASKS_LIMIT,
)
from dashboard.metrics.dates import parse_day, parse_timestamp


@dataclass(frozen=True)
class Quadrants:
    urgent_important: list = field(default_factory=list)
    not_urgent_important: list = field(default_factory=list)
    urgent_not_important: list = field(default_factory=list)
    not_urgent_not_important: list = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "urgent_important": self.urgent_important,
            "not_urgent_important": self.not_urgent_important,
            "urgent_not_important": self.urgent_not_important,
            "not_urgent_not_important": self.not_urgent_not_important,
        }


def priority_score(todo) -> int:
    return todo.get("priority_score") or DEFAULT_PRIORITY_SCORE


def is_open(todo) -> bool:
    return todo.get("status") != "completed"


def is_urgent_important(todo) -> bool:
    return bool(todo.get("is_urgent")) and bool(todo.get("is_important"))


def is_overdue(todo, today: date) -> bool:
    due = todo.get("due_date")
    return bool(due) and is_open(todo) and parse_day(due) < today


def _due_key(todo):
    due = todo.get("due_date")
    return (due is None or due == "", parse_day(due) if due else date.max)


def _created_at(todo) -> float:
    created = todo.get("created_at")
    if not created:
        return 0.0
    return parse_timestamp(created).timestamp()


def quadrant_sort_key(todo):
    return (-priority_score(todo), *_due_key(todo), -_created_at(todo))


def quadrant_of(todo) -> str:
    urgent = bool(todo.get("is_urgent"))
    important = bool(todo.get("is_important"))
    if urgent and important:
        return "urgent_important"
    if important:
        return "not_urgent_important"
    if urgent:
        return "urgent_not_important"
    return "not_urgent_not_important"


def classify(todos) -> Quadrants:
    """Split open todos into the four Eisenhower quadrants, each sorted."""
    buckets = {key: [] for key in Quadrants().as_dict()}
    for todo in todos:
        if not is_open(todo):
            continue
        buckets[quadrant_of(todo)].append(todo)
    return Quadrants(**{key: sorted(items, key=quadrant_sort_key) for key, items in buckets.items()})


def _essential_sort_key(todo):
    return (not is_urgent_important(todo), -priority_score(todo), *_due_key(todo))


def essential_tasks(todos, today: date, limit: int = ESSENTIAL_TASKS_LIMIT) -> list:
    candidates = []
    seen = set()
    for todo in todos:
        if not is_open(todo):
            continue
        key = todo.get("id") or id(todo)
        if key in seen:
            continue
        explicit_score = todo.get("priority_score")
        if (
            is_urgent_important(todo)
            or is_overdue(todo, today)
            or (explicit_score is not None and explicit_score >= ESSENTIAL_PRIORITY_THRESHOLD)
        ):
            seen.add(key)
            candidates.append(todo)
    return sorted(candidates, key=_essential_sort_key)[:limit]
