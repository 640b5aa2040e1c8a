from datetime import date

from dashboard.metrics.eisenhower import classify, essential_tasks, is_overdue, quadrant_of

TODAY = date(2024, 3, 10)


def _todo(todo_id, urgent=False, important=False, **extra):
    todo = {"id": todo_id, "title": todo_id, "status": "pending", "is_urgent": urgent, "is_important": important}
    todo.update(extra)
    return todo


class TestClassify:
    def test_open_todos_land_in_exactly_one_quadrant(self):
        todos = [
            _todo("do", urgent=True, important=True),
            _todo("schedule", important=True),
            _todo("delegate", urgent=True),
            _todo("drop"),
        ]
        quadrants = classify(todos).as_dict()
        assert [item["id"] for item in quadrants["urgent_important"]] == ["do"]
        assert [item["id"] for item in quadrants["not_urgent_important"]] == ["schedule"]
        assert [item["id"] for item in quadrants["urgent_not_important"]] == ["delegate"]
        assert [item["id"] for item in quadrants["not_urgent_not_important"]] == ["drop"]
        assert sum(len(items) for items in quadrants.values()) == len(todos)

    def test_completed_todos_are_left_out(self):
        todos = [_todo("done", urgent=True, important=True, status="completed")]
        assert classify(todos).urgent_important == []

    def test_quadrant_sorted_by_score_then_due_date(self):
        todos = [
            _todo("low", important=True, priority_score=2, due_date="2024-03-11"),
            _todo("later", important=True, priority_score=5, due_date="2024-03-20"),
            _todo("sooner", important=True, priority_score=5, due_date="2024-03-12"),
            _todo("undated", important=True, priority_score=5),
        ]
        ordered = [item["id"] for item in classify(todos).not_urgent_important]
        assert ordered == ["sooner", "later", "undated", "low"]

    def test_quadrant_of_defaults_to_neither(self):
        assert quadrant_of({}) == "not_urgent_not_important"


class TestEssentialTasks:
    def test_selects_urgent_important_overdue_and_high_score(self):
        todos = [
            _todo("critical", urgent=True, important=True),
            _todo("overdue", due_date="2024-03-01"),
            _todo("scored", priority_score=4),
            _todo("default-score"),
            _todo("low", priority_score=2, due_date="2024-03-15"),
            _todo("finished", urgent=True, important=True, status="completed"),
        ]
        ids = [todo["id"] for todo in essential_tasks(todos, TODAY)]
        assert ids[0] == "critical"
        assert set(ids) == {"critical", "overdue", "scored"}

    def test_caps_at_eight(self):
        todos = [_todo(f"t{index}", urgent=True, important=True) for index in range(12)]
        assert len(essential_tasks(todos, TODAY)) == 8

    def test_duplicates_are_listed_once(self):
        todo = _todo("same", urgent=True, important=True)
        assert len(essential_tasks([todo, dict(todo)], TODAY)) == 1

    def test_nothing_essential(self):
        assert essential_tasks([_todo("calm")], TODAY) == []

    def test_overdue_needs_an_open_todo_with_past_due_date(self):
        assert is_overdue(_todo("a", due_date="2024-03-09"), TODAY)
        assert not is_overdue(_todo("b", due_date="2024-03-10"), TODAY)
        assert not is_overdue(_todo("c", due_date="2024-03-09", status="completed"), TODAY)
