"""Progress figures for weekly and daily plans."""

from __future__ import annotations

from dataclasses import dataclass

from dashboard.metrics.completion import completion_rate


@dataclass(frozen=True)
class ChecklistProgress:
    completed: int
    total: int
    rate: int


def checklist_progress(items) -> ChecklistProgress:
    items = list(items or [])
    completed = sum(1 for item in items if item.get("completed"))
    return ChecklistProgress(completed, len(items), completion_rate(completed, len(items)))


def toggle_item(items, item_id: str) -> list[dict]:
    """Copy of ``items`` with the matching entry's ``completed`` flipped."""
    return [
        {**item, "completed": not item.get("completed")} if item.get("id") == item_id else dict(item)
        for item in items or []
    ]


def clock_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def sorted_time_blocks(blocks) -> list[dict]:
    return sorted(blocks or [], key=lambda block: (block.get("start_time") or "", block.get("end_time") or ""))


def planned_minutes(blocks) -> int:
    return sum(
        max(0, clock_minutes(block["end_time"]) - clock_minutes(block["start_time"]))
        for block in blocks or []
    )


def overlapping_blocks(blocks) -> list[tuple]:
    """Pairs of titles whose time ranges overlap, in start order."""
    ordered = sorted_time_blocks(blocks)
    pairs = []
    for index, block in enumerate(ordered):
        for other in ordered[index + 1:]:
            if clock_minutes(other["start_time"]) >= clock_minutes(block["end_time"]):
                break
            pairs.append((block.get("title"), other.get("title")))
    return pairs
