from datetime import date, timedelta

import pytest

from dashboard.metrics.rollups import (
    average,
    build_report,
    goal_stats,
    habit_stats,
    health_stats,
    resolve_window,
    timer_stats,
    todo_stats,
)

WEDNESDAY = date(2024, 3, 6)


class TestResolveWindow:
    def test_this_week_runs_monday_through_sunday(self):
        window = resolve_window("thisWeek", WEDNESDAY)
        assert (window.start, window.end) == (date(2024, 3, 4), date(2024, 3, 10))
        assert window.days == 7

    def test_this_month_covers_the_calendar_month(self):
        window = resolve_window("thisMonth", date(2024, 2, 10))
        assert (window.start, window.end) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_rolling_windows_end_today(self):
        window = resolve_window("last7days", WEDNESDAY)
        assert window.end == WEDNESDAY
        assert window.start == WEDNESDAY - timedelta(days=7)

    @pytest.mark.parametrize("alias, token", [("7days", "last7days"), ("30days", "last30days"), ("90days", "last90days")])
    def test_short_aliases(self, alias, token):
        assert resolve_window(alias, WEDNESDAY).token == token

    def test_unknown_token_raises(self):
        with pytest.raises(ValueError):
            resolve_window("lastFortnight", WEDNESDAY)

    def test_bounds_are_inclusive(self):
        window = resolve_window("thisWeek", WEDNESDAY)
        assert window.contains("2024-03-04")
        assert window.contains("2024-03-10")
        assert not window.contains("2024-03-11")


class TestAverages:
    def test_nulls_are_excluded(self):
        assert average([{"x": None}, {"x": 4}, {"x": 6}], "x") == 5.0

    def test_no_values_gives_zero(self):
        assert average([], "x") == 0
        assert average([{"x": None}], "x") == 0


class TestDomainStats:
    def test_habit_rate_over_window(self):
        window = resolve_window("thisWeek", WEDNESDAY)
        habits = [{"id": "a", "name": "Read"}, {"id": "b", "name": "Run"}]
        entries = [{"habit_id": "a", "date": f"2024-03-{day:02d}", "value": 1} for day in range(4, 11)]
        entries.append({"habit_id": "a", "date": "2024-03-04", "value": 1})
        entries.append({"habit_id": "b", "date": "2024-03-05", "value": 1})
        entries.append({"habit_id": "b", "date": "2024-02-28", "value": 1})
        stats = habit_stats(habits, entries, window)
        assert stats.total_completions == 8
        assert stats.completion_rate == 57
        assert stats.best_habit == "Read"
        assert stats.best_habit_score == 7

    def test_rolling_habit_rate_counts_both_bounds_and_skips_archived(self):
        window = resolve_window("last7days", WEDNESDAY)
        habits = [{"id": "a", "name": "Read"}, {"id": "b", "name": "Old", "is_archived": True}]
        entries = [{"habit_id": "a", "date": f"2024-03-{day:02d}", "value": 1} for day in range(3, 7)]
        entries.append({"habit_id": "b", "date": "2024-03-05", "value": 1})
        stats = habit_stats(habits, entries, window)
        assert window.days == 8
        assert (stats.total_completions, stats.completion_rate) == (4, 50)

    def test_habit_rate_without_habits_is_zero(self):
        stats = habit_stats([], [], resolve_window("thisWeek", WEDNESDAY))
        assert (stats.completion_rate, stats.best_habit) == (0, None)

    def test_health_averages_skip_missing_fields(self):
        window = resolve_window("thisWeek", WEDNESDAY)
        entries = [
            {"date": "2024-03-04", "sleep_hours": 8, "mood": 6, "exercise_minutes": 30},
            {"date": "2024-03-05", "sleep_hours": None, "mood": 8, "exercise_minutes": 0},
            {"date": "2024-03-06", "sleep_hours": 6, "exercise_minutes": 60, "calories_burned": 400},
            {"date": "2024-02-01", "sleep_hours": 2},
        ]
        stats = health_stats(entries, window)
        assert stats.average_sleep == 7.0
        assert stats.average_mood == 7.0
        assert stats.nights_tracked == 2
        assert stats.total_exercise_minutes == 90
        assert stats.exercise_days == 2
        assert stats.average_exercise_per_day == 45
        assert stats.total_calories_burned == 400

    def test_timer_counts_completed_sessions_only(self):
        window = resolve_window("thisWeek", WEDNESDAY)
        sessions = [
            {"date": "2024-03-05", "type": "pomodoro", "duration": 25, "completed": True},
            {"date": "2024-03-05", "type": "break", "duration": 5, "completed": True},
            {"date": "2024-03-06", "type": "pomodoro", "duration": 25, "completed": False},
        ]
        stats = timer_stats(sessions, window)
        assert stats.total_sessions == 2
        assert stats.total_minutes == 30
        assert stats.total_hours == 0.5
        assert stats.pomodoro_sessions == 1
        assert stats.average_session_length == 15

    def test_todo_distribution_defaults_to_medium(self):
        stats = todo_stats([{"priority": "high", "status": "completed"}, {"status": "pending"}, {"status": "pending"}])
        assert stats.priority_distribution == {"high": 1, "medium": 2}
        assert stats.pending_todos == 2
        assert stats.completion_rate == 33

    def test_goals_group_by_category(self):
        stats = goal_stats([{"category": "health", "progress": 100}, {"progress": 50}])
        assert stats.goals_by_category == {"health": 1, "uncategorized": 1}
        assert stats.completed_goals == 1
        assert stats.average_progress == 75


class TestBuildReport:
    def test_empty_inputs_give_a_zeroed_report(self):
        report = build_report("thisWeek", WEDNESDAY)
        assert report.habits.completion_rate == 0
        assert report.health.average_sleep == 0
        assert report.timer.total_sessions == 0
        assert report.todos.total_todos == 0

    def test_as_dict_formats_the_window(self):
        payload = build_report("thisWeek", WEDNESDAY).as_dict()
        assert payload["window"] == {"token": "thisWeek", "start": "2024-03-04", "end": "2024-03-10", "days": 7}
        assert set(payload) == {"window", "habits", "goals", "health", "timer", "todos"}
