from datetime import date

from dashboard.metrics.screen_time import (
    TOTAL_LIMIT_LABEL,
    app_usage,
    entries_for_day,
    entries_for_week,
    limit_warnings,
    top_apps,
    total_minutes,
)

APPS = [
    {"id": "slack", "name": "Slack", "category": "work"},
    {"id": "youtube", "name": "YouTube", "category": "video", "is_excluded": True},
    {"id": "maps", "name": "Maps"},
    {"id": "mail", "name": "Mail"},
]


class TestUsage:
    def test_app_usage_sums_minutes_per_app(self):
        entries = [
            {"app_id": "slack", "minutes": 30},
            {"app_id": "slack", "minutes": 50},
            {"app_id": "maps", "minutes": None},
        ]
        assert app_usage(entries) == {"slack": 80, "maps": 0}

    def test_day_and_week_filters(self):
        entries = [
            {"app_id": "slack", "date": "2024-03-04", "minutes": 10},
            {"app_id": "slack", "date": "2024-03-06", "minutes": 10},
            {"app_id": "slack", "date": "2024-03-11", "minutes": 10},
        ]
        assert len(entries_for_day(entries, date(2024, 3, 6))) == 1
        assert len(entries_for_week(entries, date(2024, 3, 6))) == 2


class TestRanking:
    def test_excluded_and_idle_apps_are_not_ranked(self):
        usage = {"slack": 80, "youtube": 120, "maps": 0, "mail": 80}
        ranked = top_apps(usage, APPS)
        assert [item.name for item in ranked] == ["Mail", "Slack"]

    def test_limit_on_ranked_apps(self):
        usage = {app: 10 + index for index, app in enumerate(["slack", "maps", "mail"])}
        assert len(top_apps(usage, APPS, limit=2)) == 2

    def test_total_ignores_excluded_and_unknown_apps(self):
        usage = {"slack": 80, "youtube": 120, "stranger": 30}
        assert total_minutes(usage, APPS) == 80


class TestLimitWarnings:
    def test_warns_at_eighty_percent(self):
        warnings = limit_warnings({"slack": 80}, APPS, [{"app_id": "slack", "limit_minutes": 100}])
        assert len(warnings) == 1
        assert warnings[0].app_name == "Slack"
        assert warnings[0].percentage == 80

    def test_silent_below_eighty_percent(self):
        assert limit_warnings({"slack": 79}, APPS, [{"app_id": "slack", "limit_minutes": 100}]) == []

    def test_excluded_apps_still_warn(self):
        warnings = limit_warnings({"youtube": 50}, APPS, [{"app_id": "youtube", "limit_minutes": 50}])
        assert [warning.percentage for warning in warnings] == [100]

    def test_limit_without_app_covers_total_usage(self):
        warnings = limit_warnings({"slack": 80, "youtube": 50}, APPS, [{"app_id": None, "limit_minutes": 150}])
        assert warnings[0].app_name == TOTAL_LIMIT_LABEL
        assert warnings[0].usage == 130
        assert warnings[0].percentage == 87

    def test_inactive_and_empty_limits_are_skipped(self):
        limits = [
            {"app_id": "slack", "limit_minutes": 10, "is_active": False},
            {"app_id": "slack", "limit_minutes": 0},
        ]
        assert limit_warnings({"slack": 500}, APPS, limits) == []

    def test_sorted_by_percentage(self):
        limits = [
            {"app_id": "slack", "limit_minutes": 100},
            {"app_id": "mail", "limit_minutes": 40},
        ]
        warnings = limit_warnings({"slack": 90, "mail": 60}, APPS, limits)
        assert [warning.app_id for warning in warnings] == ["mail", "slack"]
