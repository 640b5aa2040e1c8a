from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from dashboard.metrics.completion import round_half_up
from dashboard.metrics.dates import parse_day, parse_timestamp

KG_TO_LB = 2.205


@dataclass(frozen=True)
class WorkoutSummary:
    exercises: int
    total_sets: int
    total_volume: float


@dataclass(frozen=True)
class CardioSummary:
    sessions: int
    total_minutes: int
    total_km: float
    average_pace: float | None


@dataclass(frozen=True)
class SleepSummary:
    average_hours: float
    average_quality: float
    nights_tracked: int
    best_night: float


@dataclass(frozen=True)
class ExerciseSummary:
    total_minutes: int
    total_calories: int
    workout_days: int


def workout_summary(sets) -> WorkoutSummary:
    sets = list(sets or [])
    exercises = {(item.get("exercise_name") or "").strip().lower() for item in sets}
    volume = sum((item.get("weight") or 0) * (item.get("reps") or 0) for item in sets)
    return WorkoutSummary(
        exercises=len(exercises),
        total_sets=len(sets),
        total_volume=round_half_up(volume, 1),
    )


def workout_duration_minutes(workout, now: datetime | None = None) -> int:
    """Minutes from start to end, or to ``now`` while the workout is running."""
    started = parse_timestamp(workout.get("started_at"))
    ended_raw = workout.get("ended_at")
    if ended_raw:
        ended = parse_timestamp(ended_raw)
    else:
        ended = now or datetime.now(timezone.utc)
        if ended.tzinfo is None:
            ended = ended.replace(tzinfo=timezone.utc)
    return max(0, round_half_up((ended - started).total_seconds() / 60))


def to_pounds(weight_kg) -> float:
    return round_half_up((weight_kg or 0) * KG_TO_LB, 1)


def cardio_minutes(entry) -> int:
    return round_half_up((entry.get("duration_sec") or 0) / 60)


def pace_min_per_km(entry) -> float | None:
    """Minutes per kilometre, or None without a distance."""
    meters = entry.get("distance_meters") or 0
    if meters <= 0:
        return None
    return round_half_up((entry.get("duration_sec") or 0) / 60 / (meters / 1000), 2)


def cardio_summary(entries) -> CardioSummary:
    entries = list(entries or [])
    seconds = sum(entry.get("duration_sec") or 0 for entry in entries)
    with_distance = [entry for entry in entries if (entry.get("distance_meters") or 0) > 0]
    meters = sum(entry["distance_meters"] for entry in with_distance)
    paced_seconds = sum(entry.get("duration_sec") or 0 for entry in with_distance)
    return CardioSummary(
        sessions=len(entries),
        total_minutes=round_half_up(seconds / 60),
        total_km=round_half_up(meters / 1000, 2),
        average_pace=round_half_up(paced_seconds / 60 / (meters / 1000), 2) if meters else None,
    )


def _last_days(entries, today: date, days: int) -> list:
    start = today - timedelta(days=days)
    return [entry for entry in entries if start <= parse_day(entry.get("date")) <= today]


def sleep_summary(entries, today: date, days: int = 7) -> SleepSummary:
    nights = [entry for entry in _last_days(entries, today, days) if entry.get("sleep_hours")]
    if not nights:
        return SleepSummary(0, 0, 0, 0)
    hours = [entry["sleep_hours"] for entry in nights]
    qualities = [entry["sleep_quality"] for entry in nights if entry.get("sleep_quality") is not None]
    return SleepSummary(
        average_hours=round_half_up(sum(hours) / len(hours), 1),
        average_quality=round_half_up(sum(qualities) / len(qualities), 1) if qualities else 0,
        nights_tracked=len(nights),
        best_night=max(hours),
    )


def exercise_summary(entries, today: date, days: int = 7) -> ExerciseSummary:
    active = [
        entry for entry in _last_days(entries, today, days) if (entry.get("exercise_minutes") or 0) > 0
    ]
    return ExerciseSummary(
        total_minutes=sum(entry.get("exercise_minutes") or 0 for entry in active),
        total_calories=sum(entry.get("calories_burned") or 0 for entry in active),
        workout_days=len(active),
    )
