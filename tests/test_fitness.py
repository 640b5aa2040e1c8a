from datetime import date, datetime, timezone

from dashboard.metrics.fitness import (
    cardio_minutes,
    cardio_summary,
    exercise_summary,
    pace_min_per_km,
    sleep_summary,
    to_pounds,
    workout_duration_minutes,
    workout_summary,
)

TODAY = date(2024, 3, 10)


CARDIO = [
    {"type": "run", "duration_sec": 1800, "distance_meters": 5000},
    {"type": "row", "duration_sec": 900, "distance_meters": None},
    {"type": "ride", "duration_sec": 3600, "distance_meters": 20000},
]


class TestWorkouts:
    def test_summary_counts_distinct_exercises_and_volume(self):
        sets = [
            {"exercise_name": "Bench Press", "weight": 60, "reps": 10},
            {"exercise_name": "bench press ", "weight": 60, "reps": 8},
            {"exercise_name": "Squat", "weight": 100, "reps": 5},
        ]
        summary = workout_summary(sets)
        assert summary.exercises == 2
        assert summary.total_sets == 3
        assert summary.total_volume == 1580.0

    def test_empty_workout(self):
        summary = workout_summary(None)
        assert (summary.exercises, summary.total_sets, summary.total_volume) == (0, 0, 0)

    def test_duration_of_finished_workout(self):
        workout = {"started_at": "2024-03-10T10:00:00+00:00", "ended_at": "2024-03-10T11:15:30+00:00"}
        assert workout_duration_minutes(workout) == 76

    def test_duration_of_running_workout_uses_now(self):
        workout = {"started_at": "2024-03-10T10:00:00Z", "ended_at": None}
        now = datetime(2024, 3, 10, 10, 30, tzinfo=timezone.utc)
        assert workout_duration_minutes(workout, now=now) == 30

    def test_to_pounds(self):
        assert to_pounds(100) == 220.5
        assert to_pounds(None) == 0


class TestHealthSummaries:
    def test_sleep_over_recent_nights(self):
        entries = [
            {"date": "2024-03-10", "sleep_hours": 8, "sleep_quality": 7},
            {"date": "2024-03-09", "sleep_hours": 6},
            {"date": "2024-03-07", "sleep_hours": None},
            {"date": "2024-02-28", "sleep_hours": 9},
        ]
        summary = sleep_summary(entries, TODAY)
        assert summary.nights_tracked == 2
        assert summary.average_hours == 7.0
        assert summary.average_quality == 7.0
        assert summary.best_night == 8

    def test_sleep_without_entries(self):
        assert sleep_summary([], TODAY).nights_tracked == 0

    def test_exercise_counts_active_days(self):
        entries = [
            {"date": "2024-03-10", "exercise_minutes": 30, "calories_burned": 200},
            {"date": "2024-03-09", "exercise_minutes": 0},
            {"date": "2024-03-08", "exercise_minutes": 45},
        ]
        summary = exercise_summary(entries, TODAY)
        assert (summary.total_minutes, summary.total_calories, summary.workout_days) == (75, 200, 2)


class TestCardio:
    def test_pace_needs_a_distance(self):
        assert pace_min_per_km(CARDIO[0]) == 6.0
        assert pace_min_per_km(CARDIO[1]) is None
        assert pace_min_per_km({"duration_sec": 600, "distance_meters": 0}) is None

    def test_minutes_round_half_up(self):
        assert cardio_minutes({"duration_sec": 90}) == 2
        assert cardio_minutes({}) == 0

    def test_summary_paces_only_sessions_with_distance(self):
        summary = cardio_summary(CARDIO)
        assert (summary.sessions, summary.total_minutes, summary.total_km) == (3, 105, 25.0)
        assert summary.average_pace == 3.6

    def test_summary_without_distances(self):
        summary = cardio_summary([CARDIO[1]])
        assert (summary.total_km, summary.average_pace) == (0, None)
        assert cardio_summary(None).sessions == 0
