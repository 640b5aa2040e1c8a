from datetime import date

from dashboard.metrics.overview import (
    build_insights,
    category_progress,
    event_overview,
    recent_sleep_average,
    todo_overview,
)

TODAY = date(2024, 3, 10)


class TestInsights:
    def test_all_three_insights(self):
        habits = [{"id": "a", "streak_days": 5}, {"id": "b", "streak_days": 2}]
        goals = [{"progress": 60}, {"progress": 20}]
        health = [{"date": f"2024-03-0{day}", "sleep_hours": 6} for day in range(1, 8)]
        insights = build_insights(habits, goals, health)
        assert [insight.kind for insight in insights] == ["habit_streak", "sleep_pattern", "goals_on_track"]
        assert "5 days" in insights[0].message
        assert "6.0 hours" in insights[1].message
        assert insights[1].tone == "warning"
        assert insights[2].message.startswith("1 of your goals")

    def test_no_data_no_insights(self):
        assert build_insights([], [], []) == []

    def test_enough_sleep_is_not_flagged(self):
        health = [{"date": "2024-03-09", "sleep_hours": 7.5}]
        assert build_insights([], [], health) == []

    def test_sleep_average_uses_latest_nights(self):
        health = [{"date": "2024-03-01", "sleep_hours": 2}]
        health += [{"date": f"2024-03-{day:02d}", "sleep_hours": 8} for day in range(2, 9)]
        assert recent_sleep_average(health) == 8.0
        assert recent_sleep_average([]) is None


class TestOverviewCounts:
    def test_todo_overview(self):
        todos = [
            {"id": "1", "status": "pending", "due_date": "2024-03-10"},
            {"id": "2", "status": "pending", "due_date": "2024-03-01"},
            {"id": "3", "status": "completed", "due_date": "2024-03-01"},
            {"id": "4", "status": "in_progress"},
        ]
        overview = todo_overview(todos, TODAY)
        assert [todo["id"] for todo in overview.due_today] == ["1"]
        assert [todo["id"] for todo in overview.overdue] == ["2"]
        assert (overview.total, overview.completed, overview.pending) == (4, 1, 2)

    def test_category_progress_skips_archived(self):
        categories = [{"id": "c1", "name": "Work"}, {"id": "c2", "name": "Old", "is_archived": True}]
        todos = [
            {"category_id": "c1", "status": "completed"},
            {"category_id": "c1", "status": "pending"},
            {"category_id": "c2", "status": "pending"},
        ]
        rows = category_progress(todos, categories)
        assert [(row.name, row.completed, row.total) for row in rows] == [("Work", 1, 2)]

    def test_event_overview(self):
        events = [
            {"title": "Dentist", "start_date": "2024-03-10"},
            {"title": "Standup", "start_date": "2024-03-11"},
            {"title": "Trip", "start_date": "2024-03-20"},
            {"title": "Past", "start_date": "2024-03-01"},
        ]
        overview = event_overview(events, TODAY)
        assert [event["title"] for event in overview.today] == ["Dentist"]
        assert [event["title"] for event in overview.tomorrow] == ["Standup"]
        assert overview.upcoming == 2
