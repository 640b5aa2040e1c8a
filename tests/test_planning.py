from dashboard.metrics.planning import (
    checklist_progress,
    clock_minutes,
    overlapping_blocks,
    planned_minutes,
    sorted_time_blocks,
    toggle_item,
)

BLOCKS = [
    {"id": "b2", "title": "Standup", "start_time": "10:00", "end_time": "10:15"},
    {"id": "b1", "title": "Deep work", "start_time": "09:00", "end_time": "10:30", "completed": True},
    {"id": "b3", "title": "Lunch", "start_time": "12:00", "end_time": "13:00"},
    {"id": "b4", "title": "Review", "start_time": "13:00", "end_time": "13:45"},
]


class TestChecklists:
    def test_progress_counts_completed_items(self):
        items = [{"id": "a", "completed": True}, {"id": "b"}, {"id": "c", "completed": False}]
        progress = checklist_progress(items)
        assert (progress.completed, progress.total, progress.rate) == (1, 3, 33)

    def test_empty_checklist(self):
        progress = checklist_progress(None)
        assert (progress.completed, progress.total, progress.rate) == (0, 0, 0)

    def test_toggle_returns_copies(self):
        items = [{"id": "a", "text": "Taxes", "completed": False}, {"id": "b", "text": "Gym"}]
        toggled = toggle_item(items, "a")
        assert [item.get("completed") for item in toggled] == [True, None]
        assert items[0]["completed"] is False
        assert toggled[1] is not items[1]
        assert toggle_item(toggled, "a")[0]["completed"] is False

    def test_unknown_id_changes_nothing(self):
        items = [{"id": "a", "completed": True}]
        assert toggle_item(items, "zzz") == items


class TestTimeBlocks:
    def test_clock_minutes(self):
        assert clock_minutes("00:00") == 0
        assert clock_minutes("13:45") == 825

    def test_sorted_by_start_time(self):
        assert [block["id"] for block in sorted_time_blocks(BLOCKS)] == ["b1", "b2", "b3", "b4"]
        assert sorted_time_blocks(None) == []

    def test_planned_minutes_sums_each_block(self):
        assert planned_minutes(BLOCKS) == 90 + 15 + 60 + 45
        assert planned_minutes([{"start_time": "10:00", "end_time": "09:00"}]) == 0

    def test_overlaps_exclude_touching_blocks(self):
        assert overlapping_blocks(BLOCKS) == [("Deep work", "Standup")]
        assert overlapping_blocks([]) == []
