"""Translate API payloads into scheduling-core calls and back."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from study_planner.api.schemas.prioritization import (
    PrioritizationRequest,
    PrioritizationSummary,
    PrioritizedTaskPayload,
    TaskPayload,
)
from study_planner.api.schemas.study_plan import (
    AvailabilityPayload,
    DayBlockPayload,
    DayPlanPayload,
    StudyBlockPayload,
    StudyPlanRequest,
    StudyPlanSummary,
    UnscheduledTaskPayload,
)
from study_planner.core.config import settings
from study_planner.scheduling import (
    AvailabilityInterval,
    InputValidationError,
    PrioritizedTask,
    Schedule,
    Task,
    plan,
    plan_day,
    score,
    summarize_priorities,
)


@dataclass
class PrioritizationResult:
    prioritized_tasks: List[PrioritizedTaskPayload]
    summary: PrioritizationSummary


@dataclass
class StudyPlanResult:
    study_blocks: List[StudyBlockPayload]
    blocks_by_day: List[DayPlanPayload]
    summary: StudyPlanSummary
    unscheduled: List[UnscheduledTaskPayload]


def prioritize_tasks(payload: PrioritizationRequest) -> PrioritizationResult:
    """Rank the submitted tasks, highest priority first."""
    now = _reference_time(payload.now)
    prioritized = score(_to_tasks(payload.tasks), now)
    return PrioritizationResult(
        prioritized_tasks=[_prioritized_payload(item) for item in prioritized],
        summary=PrioritizationSummary(**summarize_priorities(prioritized)),
    )


def build_study_plan(payload: StudyPlanRequest) -> StudyPlanResult:
    """
    Produce a weekly (or single-day) schedule for the submitted tasks.

    Tasks are scored against ``payload.now`` (server clock when omitted) and
    placed starting at ``payload.start_date`` (that day's date when omitted).
    """
    now = _reference_time(payload.now)
    tasks = _to_tasks(payload.tasks)
    availability = _to_availability(payload.availability or [])
    max_hours = (
        payload.max_hours_per_day
        if payload.max_hours_per_day is not None
        else settings.default_max_hours_per_day
    )
    start_date = payload.start_date or now.date()

    if payload.plan_type == "daily":
        schedule = plan_day(tasks, availability, max_hours, start_date, now=now)
    else:
        horizon_days = payload.horizon_days or settings.default_horizon_days
        if horizon_days > settings.max_horizon_days:
            raise InputValidationError(
                "horizon_days", f"must be at most {settings.max_horizon_days}"
            )
        schedule = plan(tasks, availability, max_hours, start_date, horizon_days, now=now)

    return _plan_result(schedule, payload.plan_type)


def _reference_time(value: Optional[datetime]) -> datetime:
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_tasks(items: Sequence[TaskPayload]) -> List[Task]:
    return [
        Task.parse(
            id=item.id,
            title=item.title,
            deadline=item.deadline,
            estimated_hours=item.estimated_hours,
            difficulty_score=item.difficulty_score,
            field=f"tasks[{index}]",
        )
        for index, item in enumerate(items)
    ]


def _to_availability(items: Sequence[AvailabilityPayload]) -> List[AvailabilityInterval]:
    return [
        AvailabilityInterval.parse(
            day=item.day,
            start_time=item.start_time,
            end_time=item.end_time,
            available=item.available,
            field=f"availability[{index}]",
        )
        for index, item in enumerate(items)
    ]


def _prioritized_payload(item: PrioritizedTask) -> PrioritizedTaskPayload:
    return PrioritizedTaskPayload(
        id=item.id,
        title=item.title or item.id,
        deadline=item.task.deadline,
        estimated_hours=item.estimated_hours,
        difficulty_score=item.task.difficulty_score,
        urgency_weight=item.urgency_weight,
        difficulty_weight=item.difficulty_weight,
        hours_weight=item.hours_weight,
        priority_score=item.priority_score,
        days_until_deadline=math.ceil(item.days_until_deadline),
        urgency=item.urgency,
        rank=item.rank,
    )


def _plan_result(schedule: Schedule, plan_type: str) -> StudyPlanResult:
    study_blocks = [
        StudyBlockPayload(
            task_id=block.task_id,
            day=block.day,
            start_time=block.start_time,
            duration=block.duration_hours,
            task_title=block.task_title,
        )
        for block in schedule.blocks
    ]
    blocks_by_day = [
        DayPlanPayload(
            day=day,
            blocks=[
                DayBlockPayload(
                    task_id=block.task_id,
                    task_title=block.task_title or block.task_id,
                    start_time=block.start_time,
                    end_time=block.end_time,
                    duration=block.duration_hours,
                )
                for block in blocks
            ],
            total_hours=round(sum(block.duration_hours for block in blocks), 1),
        )
        for day, blocks in schedule.blocks_by_day().items()
    ]
    summary = schedule.summary
    return StudyPlanResult(
        study_blocks=study_blocks,
        blocks_by_day=blocks_by_day,
        summary=StudyPlanSummary(
            total_blocks=summary.total_blocks,
            total_hours=summary.total_hours,
            days_covered=summary.days_covered,
            average_hours_per_day=summary.average_hours_per_day,
            plan_type=plan_type,
        ),
        unscheduled=[
            UnscheduledTaskPayload(
                task_id=item.task_id,
                estimated_hours=item.estimated_hours,
                scheduled_hours=item.scheduled_hours,
                unscheduled_hours=item.unscheduled_hours,
            )
            for item in schedule.shortfalls
        ],
    )
