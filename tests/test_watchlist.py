import random
from datetime import datetime, timezone

import pytest

from dashboard.metrics.watchlist import filter_items, suggestion_count, suggestions, watchlist_stats

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)

ITEMS = [
    {"id": "1", "title": "Dune", "type": "movie", "status": "Done", "finished_at": "2024-03-10T09:00:00Z"},
    {"id": "2", "title": "Severance", "type": "show", "status": "Done", "finished_at": "2024-03-09T20:00:00Z"},
    {"id": "3", "title": "Arrival", "type": "movie", "status": "Done", "finished_at": "2024-02-01T20:00:00Z"},
    {"id": "4", "title": "Lex Fridman", "type": "podcast", "status": "To Watch"},
    {"id": "5", "title": "Heat", "type": "movie", "status": "To Watch"},
    {"id": "6", "title": "Andor", "type": "show", "status": "In Progress"},
]


class TestWatchlistStats:
    def test_counts_by_status_and_recent_finishes(self):
        stats = watchlist_stats(ITEMS, now=NOW)
        assert (stats.total, stats.to_watch, stats.in_progress, stats.done) == (6, 2, 1, 3)
        assert stats.finished_this_week == 2
        assert stats.streak == 2

    def test_empty_watchlist(self):
        stats = watchlist_stats([], now=NOW)
        assert (stats.total, stats.finished_this_week, stats.streak) == (0, 0, 0)


class TestSuggestions:
    @pytest.mark.parametrize("size, expected", [(0, 3), (12, 3), (16, 4), (40, 5)])
    def test_suggestion_count_is_clamped(self, size, expected):
        assert suggestion_count([{}] * size) == expected

    def test_only_unwatched_items_are_suggested(self):
        picked = suggestions(ITEMS, rng=random.Random(7))
        assert {item["id"] for item in picked} == {"4", "5"}

    def test_same_seed_same_pick(self):
        items = [{"id": str(index), "status": "To Watch"} for index in range(20)]
        first = suggestions(items, rng=random.Random(42))
        second = suggestions(items, rng=random.Random(42))
        assert first == second
        assert len(first) == 5

    def test_does_not_reorder_the_input(self):
        before = [item["id"] for item in ITEMS]
        suggestions(ITEMS, rng=random.Random(1))
        assert [item["id"] for item in ITEMS] == before


class TestFilters:
    def test_filter_by_status_and_type(self):
        assert [item["id"] for item in filter_items(ITEMS, "Done", "movie")] == ["1", "3"]
        assert len(filter_items(ITEMS)) == len(ITEMS)
        assert filter_items(ITEMS, item_type="other") == []
