"""Greedy allocation of one day's free slots to prioritized tasks."""
from __future__ import annotations

from datetime import date
from typing import Dict, List, MutableMapping, Sequence

from study_planner.scheduling.availability import MIN_BLOCK_MINUTES
from study_planner.scheduling.models import FreeSlot, PrioritizedTask, StudyBlock
from study_planner.scheduling.priority import priority_order

# Blocks are sized in tenths of an hour so reported durations match booked minutes.
MINUTES_PER_UNIT = 6
MIN_BLOCK_UNITS = MIN_BLOCK_MINUTES // MINUTES_PER_UNIT
EPSILON = 1e-9


def allocate_day(
    day: date,
    slots: Sequence[FreeSlot],
    tasks: Sequence[PrioritizedTask],
    remaining: MutableMapping[str, float],
) -> List[StudyBlock]:
    """Pour the day's free time into tasks, highest priority first.

    ``remaining`` maps task id to unscheduled hours and is decremented in place;
    it is the only state carried from one day to the next.
    """
    cursors: Dict[int, int] = {index: slot.start_minute for index, slot in enumerate(slots)}
    blocks: List[StudyBlock] = []

    for task in priority_order(tasks):
        if remaining.get(task.id, 0.0) <= 0:
            continue

        for index, slot in enumerate(slots):
            task_units = _whole_units(remaining[task.id])
            if task_units < MIN_BLOCK_UNITS:
                break

            gap_minutes = slot.end_minute - cursors[index]
            if gap_minutes < MIN_BLOCK_MINUTES:
                continue

            take_units = min(task_units, gap_minutes // MINUTES_PER_UNIT)
            if take_units < MIN_BLOCK_UNITS:
                continue

            duration_hours = take_units / 10
            blocks.append(
                StudyBlock(
                    task_id=task.id,
                    day=day,
                    start_minute=cursors[index],
                    duration_hours=duration_hours,
                    task_title=task.title,
                )
            )
            cursors[index] += take_units * MINUTES_PER_UNIT
            remaining[task.id] = _settle(remaining[task.id] - duration_hours)

    blocks.sort(key=lambda block: block.start_minute)
    return blocks


def is_bookable(hours: float) -> bool:
    """True when ``hours`` still holds at least one minimum-length block."""
    return _whole_units(hours) >= MIN_BLOCK_UNITS


def _whole_units(hours: float) -> int:
    return int(hours * 10 + EPSILON)


def _settle(hours: float) -> float:
    return 0.0 if abs(hours) < EPSILON * 10 else round(hours, 6)
