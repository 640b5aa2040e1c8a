from datetime import date

from dashboard.metrics.completion import (
    completion_rate,
    focus_completion,
    goal_completion,
    habit_completion_today,
    round_half_up,
    todo_completion,
)

DAY = date(2024, 3, 10)


def _entry(habit_id, value, day="2024-03-10"):
    return {"habit_id": habit_id, "date": day, "value": value}


class TestRounding:
    def test_halves_round_up(self):
        assert round_half_up(66.5) == 67
        assert round_half_up(2.5) == 3
        assert round_half_up(1.25, 1) == 1.3

    def test_whole_digit_rounding_returns_int(self):
        assert isinstance(round_half_up(10.2), int)

    def test_completion_rate_guards_zero_total(self):
        assert completion_rate(0, 0) == 0
        assert completion_rate(2, 3) == 67
        assert completion_rate(1, 3) == 33


class TestHabitCompletion:
    def test_entry_reaching_target_completes_habit(self):
        summary = habit_completion_today([{"id": "a", "target_value": 3}], [_entry("a", 3)], DAY)
        assert (summary.completed, summary.total, summary.rate) == (1, 1, 100)

    def test_entry_below_target_does_not_complete(self):
        summary = habit_completion_today([{"id": "a", "target_value": 3}], [_entry("a", 2)], DAY)
        assert (summary.completed, summary.rate) == (0, 0)

    def test_missing_target_defaults_to_one(self):
        summary = habit_completion_today([{"id": "a"}], [_entry("a", 1)], DAY)
        assert summary.completed == 1

    def test_no_habits_gives_zero(self):
        summary = habit_completion_today([], [_entry("a", 5)], DAY)
        assert (summary.completed, summary.total, summary.rate) == (0, 0, 0)

    def test_archived_and_unknown_habits_are_ignored(self):
        habits = [{"id": "a"}, {"id": "b", "is_archived": True}]
        entries = [_entry("a", 1), _entry("b", 1), _entry("ghost", 1)]
        summary = habit_completion_today(habits, entries, DAY)
        assert (summary.completed, summary.total) == (1, 1)

    def test_rate_never_exceeds_hundred_with_duplicate_entries(self):
        habits = [{"id": "a"}, {"id": "b"}]
        entries = [_entry("a", 1), _entry("a", 1), _entry("a", 2)]
        summary = habit_completion_today(habits, entries, DAY)
        assert summary.completed == 1
        assert 0 <= summary.rate <= 100

    def test_entries_from_other_days_are_skipped(self):
        summary = habit_completion_today([{"id": "a"}], [_entry("a", 1, "2024-03-09")], DAY)
        assert summary.completed == 0


class TestOtherCompletions:
    def test_todo_completion(self):
        todos = [{"status": "completed"}, {"status": "pending"}, {"status": "in_progress"}]
        summary = todo_completion(todos)
        assert (summary.completed, summary.total, summary.rate) == (1, 3, 33)

    def test_goal_completion_counts_full_progress(self):
        summary = goal_completion([{"progress": 100}, {"progress": 99}, {"progress": None}])
        assert summary.completed == 1

    def test_focus_only_counts_completed_sessions(self):
        sessions = [
            {"duration": 25, "completed": True},
            {"duration": 5, "completed": True},
            {"duration": 25, "completed": False},
        ]
        summary = focus_completion(sessions)
        assert summary.completed_sessions == 2
        assert summary.total_minutes == 30
        assert summary.rate == 67
