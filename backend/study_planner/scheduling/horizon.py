"""Multi-day study plan orchestration.

Tasks are scored once, then each calendar day in the horizon is resolved into
free slots and filled greedily. Remaining hours carry over from one day to
the next, so days are processed strictly in order. Planning stops early as
soon as no task has a full hour left to book; sub-hour remainders can never
be placed on any day and are reported as shortfalls.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from study_planner.scheduling.allocator import allocate_day, is_bookable
from study_planner.scheduling.availability import free_slots
from study_planner.scheduling.clock import parse_date, parse_timestamp
from study_planner.scheduling.errors import InputValidationError
from study_planner.scheduling.models import (
    AvailabilityInterval,
    PrioritizedTask,
    Schedule,
    ScheduleSummary,
    StudyBlock,
    Task,
    TaskShortfall,
)
from study_planner.scheduling.priority import score

DEFAULT_MAX_HOURS_PER_DAY = 6.0
DEFAULT_HORIZON_DAYS = 7

logger = logging.getLogger(__name__)


def plan(
    tasks: Sequence[Task],
    availability: Sequence[AvailabilityInterval] | None = None,
    max_hours_per_day: float = DEFAULT_MAX_HOURS_PER_DAY,
    start_date: date | str | None = None,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
    *,
    now: datetime | str,
    log: Optional[logging.Logger] = None,
) -> Schedule:
    """Build a study schedule covering ``horizon_days`` days from ``start_date``.

    Hours that do not fit inside the horizon are left unscheduled and reported
    in ``Schedule.shortfalls``; that is not an error. ``days_planned`` counts
    the days walked before nothing bookable (a full hour or more) remained.
    """
    log = log or logger
    reference = parse_timestamp(now, "now")
    first_day = parse_date(start_date, "start_date") if start_date is not None else reference.date()
    _validate_limits(max_hours_per_day, horizon_days)

    prioritized = score(tasks, reference)
    remaining: Dict[str, float] = {item.id: item.estimated_hours for item in prioritized}
    intervals = list(availability or [])

    blocks: List[StudyBlock] = []
    days_planned = 0
    for offset in range(horizon_days):
        day = first_day + timedelta(days=offset)
        blocks.extend(_plan_single_day(day, intervals, max_hours_per_day, prioritized, remaining, log))
        days_planned += 1
        if not any(is_bookable(hours) for hours in remaining.values()):
            log.debug("Nothing left to book after %s day(s)", days_planned)
            break

    schedule = _build_schedule(blocks, prioritized, remaining, days_planned)
    log.info(
        "Planned %s task(s) over %s day(s): %s block(s), %.1fh scheduled, %s task(s) short",
        len(prioritized),
        days_planned,
        schedule.summary.total_blocks,
        schedule.summary.total_hours,
        len(schedule.shortfalls),
    )
    return schedule


def plan_day(
    tasks: Sequence[Task],
    availability: Sequence[AvailabilityInterval] | None = None,
    max_hours_per_day: float = DEFAULT_MAX_HOURS_PER_DAY,
    day: date | str | None = None,
    *,
    now: datetime | str,
    log: Optional[logging.Logger] = None,
) -> Schedule:
    """Single-day variant of :func:`plan`."""
    return plan(tasks, availability, max_hours_per_day, day, 1, now=now, log=log)


def summarize(blocks: Sequence[StudyBlock]) -> ScheduleSummary:
    total_hours = sum(block.duration_hours for block in blocks)
    days_covered = len({block.day for block in blocks})
    average = total_hours / days_covered if days_covered else 0.0
    return ScheduleSummary(
        total_blocks=len(blocks),
        total_hours=round(total_hours, 1),
        days_covered=days_covered,
        average_hours_per_day=round(average, 1),
    )


def _plan_single_day(
    day: date,
    intervals: Sequence[AvailabilityInterval],
    max_hours_per_day: float,
    prioritized: Sequence[PrioritizedTask],
    remaining: Dict[str, float],
    log: logging.Logger,
) -> List[StudyBlock]:
    slots = free_slots(day, intervals, max_hours_per_day)
    if not slots:
        log.debug("%s: no free slots", day.isoformat())
        return []
    day_blocks = allocate_day(day, slots, prioritized, remaining)
    log.debug(
        "%s: %s slot(s) %s -> %s block(s)",
        day.isoformat(),
        len(slots),
        slots,
        len(day_blocks),
    )
    return day_blocks


def _build_schedule(
    blocks: List[StudyBlock],
    prioritized: Sequence[PrioritizedTask],
    remaining: Dict[str, float],
    days_planned: int,
) -> Schedule:
    scheduled: Dict[str, float] = {}
    for block in blocks:
        scheduled[block.task_id] = scheduled.get(block.task_id, 0.0) + block.duration_hours

    shortfalls = tuple(
        TaskShortfall(
            task_id=item.id,
            estimated_hours=item.estimated_hours,
            scheduled_hours=round(scheduled.get(item.id, 0.0), 1),
            unscheduled_hours=round(remaining[item.id], 2),
        )
        for item in prioritized
        if remaining[item.id] > 0
    )
    return Schedule(
        blocks=tuple(blocks),
        summary=summarize(blocks),
        shortfalls=shortfalls,
        days_planned=days_planned,
    )


def _validate_limits(max_hours_per_day: float, horizon_days: int) -> None:
    if max_hours_per_day < 0 or max_hours_per_day > 24:
        raise InputValidationError("max_hours_per_day", "must be between 0 and 24")
    if horizon_days < 1:
        raise InputValidationError("horizon_days", "must be at least 1")
