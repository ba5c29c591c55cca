"""Tests for single-day allocation."""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from study_planner.scheduling import FreeSlot, Task, allocate_day, score

NOW = datetime(2024, 10, 14, 8, 0, tzinfo=timezone.utc)
DAY = date(2024, 10, 14)


def _ranked(*specs):
    tasks = [
        Task(
            id=task_id,
            title=task_id.title(),
            deadline=NOW + timedelta(days=days),
            estimated_hours=hours,
            difficulty_score=difficulty,
        )
        for task_id, days, hours, difficulty in specs
    ]
    return score(tasks, NOW)


def _remaining(ranked):
    return {item.id: item.estimated_hours for item in ranked}


def test_higher_priority_task_fills_slots_first() -> None:
    ranked = _ranked(("lab", 5, 5, 2), ("exam", 1, 4, 9))
    remaining = _remaining(ranked)
    slots = [FreeSlot(540, 720), FreeSlot(780, 1020)]

    blocks = allocate_day(DAY, slots, ranked, remaining)

    assert [(b.task_id, b.start_time, b.duration_hours) for b in blocks] == [
        ("exam", "09:00", 3.0),
        ("exam", "13:00", 1.0),
        ("lab", "14:00", 3.0),
    ]
    assert remaining == {"exam": 0.0, "lab": pytest.approx(2.0)}
    assert all(block.day == DAY for block in blocks)
    assert blocks[0].task_title == "Exam"


def test_blocks_within_a_slot_never_overlap() -> None:
    ranked = _ranked(("a", 1, 1.5, 9), ("b", 2, 1.2, 5), ("c", 3, 2, 3))
    remaining = _remaining(ranked)

    blocks = allocate_day(DAY, [FreeSlot(540, 900)], ranked, remaining)

    ordered = sorted(blocks, key=lambda block: block.start_minute)
    for earlier, later in zip(ordered, ordered[1:]):
        assert earlier.end_minute <= later.start_minute
    assert ordered[-1].end_minute <= 900
    assert sum(block.duration_hours for block in blocks) == pytest.approx(4.7)


def test_allocations_below_one_hour_are_skipped() -> None:
    ranked = _ranked(("short", 1, 0.5, 9), ("long", 2, 3, 4))
    remaining = _remaining(ranked)

    blocks = allocate_day(DAY, [FreeSlot(540, 720)], ranked, remaining)

    assert [block.task_id for block in blocks] == ["long"]
    assert remaining["short"] == 0.5


def test_lower_priority_task_skips_gaps_under_an_hour() -> None:
    ranked = _ranked(("first", 1, 1, 9), ("second", 2, 2, 2))
    remaining = _remaining(ranked)

    blocks = allocate_day(DAY, [FreeSlot(540, 630)], ranked, remaining)

    assert [(b.task_id, b.duration_hours) for b in blocks] == [("first", 1.0)]
    assert remaining["second"] == 2


def test_partial_slot_is_sized_in_tenths_of_an_hour() -> None:
    ranked = _ranked(("essay", 1, 2, 6))
    remaining = _remaining(ranked)

    [block] = allocate_day(DAY, [FreeSlot(540, 615)], ranked, remaining)

    assert block.duration_hours == 1.2
    assert block.end_time == "10:12"
    assert remaining["essay"] == pytest.approx(0.8)


def test_fractional_remainder_never_exceeds_estimate() -> None:
    ranked = _ranked(("reading", 1, 2.25, 4))
    remaining = _remaining(ranked)

    [block] = allocate_day(DAY, [FreeSlot(540, 900)], ranked, remaining)

    assert block.duration_hours == 2.2
    assert remaining["reading"] == pytest.approx(0.05)


def test_completed_tasks_are_ignored() -> None:
    ranked = _ranked(("done", 1, 3, 9), ("todo", 4, 2, 2))
    remaining = {"done": 0.0, "todo": 2.0}

    blocks = allocate_day(DAY, [FreeSlot(540, 720)], ranked, remaining)

    assert [(b.task_id, b.start_time) for b in blocks] == [("todo", "09:00")]


def test_no_slots_means_no_blocks() -> None:
    ranked = _ranked(("x", 1, 3, 5))
    remaining = _remaining(ranked)

    assert allocate_day(DAY, [], ranked, remaining) == []
    assert remaining == {"x": 3}
