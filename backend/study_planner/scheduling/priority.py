"""Deterministic priority scoring for study tasks.

Each task gets three weights in [0, 100]:

* urgency: 100 when overdue, otherwise ``100 - 10 * days_until_deadline`` clamped
* difficulty: ``difficulty_score * 10``
* hours: ``estimated_hours * 2`` clamped

The priority score is their sum. Scores depend only on the task fields and the
reference time passed in, so scoring is reproducible.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from study_planner.scheduling.clock import days_between, parse_timestamp
from study_planner.scheduling.errors import InputValidationError
from study_planner.scheduling.models import PrioritizedTask, Task

URGENCY_LABELS = ("critical", "high", "medium", "low")


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def urgency_weight(days_until_deadline: float) -> float:
    if days_until_deadline < 0:
        return 100.0
    return round(_clamp(100 - days_until_deadline * 10), 2)


def difficulty_weight(difficulty_score: float) -> float:
    return round(_clamp(difficulty_score * 10), 2)


def hours_weight(estimated_hours: float) -> float:
    return round(_clamp(estimated_hours * 2), 2)


def urgency_label(days_until_deadline: float) -> str:
    if days_until_deadline < 1:
        return "critical"
    if days_until_deadline < 3:
        return "high"
    if days_until_deadline < 7:
        return "medium"
    return "low"


def score_task(task: Task, now: datetime) -> PrioritizedTask:
    days = days_between(now, task.deadline)
    urgency = urgency_weight(days)
    difficulty = difficulty_weight(task.difficulty_score)
    hours = hours_weight(task.estimated_hours)
    return PrioritizedTask(
        task=task,
        urgency_weight=urgency,
        difficulty_weight=difficulty,
        hours_weight=hours,
        priority_score=round(urgency + difficulty + hours, 2),
        days_until_deadline=days,
        urgency=urgency_label(days),
    )


def score(tasks: Sequence[Task], now: datetime | str) -> List[PrioritizedTask]:
    """Score tasks and return them highest priority first.

    Equal scores are ordered by task id so the ranking never depends on the
    order the caller happened to supply.
    """
    reference = parse_timestamp(now, "now")
    _ensure_unique_ids(tasks)

    scored = priority_order(score_task(task, reference) for task in tasks)
    return [replace(item, rank=index + 1) for index, item in enumerate(scored)]


def summarize_priorities(prioritized: Sequence[PrioritizedTask]) -> Dict[str, object]:
    """Headline numbers for a ranked task list."""
    counts = {label: 0 for label in URGENCY_LABELS}
    for item in prioritized:
        counts[item.urgency] += 1

    highest: Optional[PrioritizedTask] = prioritized[0] if prioritized else None
    lowest: Optional[PrioritizedTask] = prioritized[-1] if prioritized else None
    return {
        "total_tasks": len(prioritized),
        "highest_priority": (highest.title or highest.id) if highest else None,
        "highest_priority_score": highest.priority_score if highest else None,
        "lowest_priority": (lowest.title or lowest.id) if lowest else None,
        "lowest_priority_score": lowest.priority_score if lowest else None,
        **{f"{label}_count": count for label, count in counts.items()},
    }


def _ensure_unique_ids(tasks: Iterable[Task]) -> None:
    seen: set[str] = set()
    for index, task in enumerate(tasks):
        if task.id in seen:
            raise InputValidationError(f"tasks[{index}].id", f"duplicate task id {task.id!r}")
        seen.add(task.id)


def _rank_key(item: PrioritizedTask) -> tuple[float, str]:
    return (-item.priority_score, item.id)


def priority_order(items: Iterable[PrioritizedTask]) -> List[PrioritizedTask]:
    """Highest ``priority_score`` first, ties by ascending task id."""
    return sorted(items, key=_rank_key)
