"""Value types shared by the prioritization and scheduling pipeline."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from study_planner.scheduling.clock import MINUTES_PER_DAY, format_minutes, parse_hhmm, parse_timestamp
from study_planner.scheduling.errors import InputValidationError


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return _WEEKDAYS_BY_INDEX[day.weekday()]

    @classmethod
    def parse(cls, value: "str | Weekday", field: str = "day") -> "Weekday":
        if isinstance(value, Weekday):
            return value
        normalized = str(value).strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise InputValidationError(field, f"unknown weekday {value!r}") from None

    @property
    def is_weekend(self) -> bool:
        return self in (Weekday.SATURDAY, Weekday.SUNDAY)


_WEEKDAYS_BY_INDEX: Tuple[Weekday, ...] = tuple(Weekday)


@dataclass(frozen=True)
class Task:
    id: str
    deadline: datetime
    estimated_hours: float
    difficulty_score: float
    title: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "deadline", parse_timestamp(self.deadline, "deadline"))
        if not math.isfinite(self.estimated_hours) or self.estimated_hours < 0:
            raise InputValidationError("estimated_hours", "must be a finite non-negative number")
        if not math.isfinite(self.difficulty_score):
            raise InputValidationError("difficulty_score", "must be a finite number")

    @classmethod
    def parse(
        cls,
        *,
        id: str,
        deadline: datetime | str,
        estimated_hours: float,
        difficulty_score: float,
        title: Optional[str] = None,
        field: str = "task",
    ) -> "Task":
        """Build a Task from boundary values, rejecting malformed fields."""
        if not isinstance(id, str) or not id.strip():
            raise InputValidationError(f"{field}.id", "task id must be a non-empty string")
        hours = float(estimated_hours)
        if not math.isfinite(hours) or hours < 0:
            raise InputValidationError(f"{field}.estimated_hours", "must be a finite non-negative number")
        difficulty = float(difficulty_score)
        if not math.isfinite(difficulty):
            raise InputValidationError(f"{field}.difficulty_score", "must be a finite number")
        return cls(
            id=id,
            title=title,
            deadline=parse_timestamp(deadline, f"{field}.deadline"),
            estimated_hours=hours,
            difficulty_score=difficulty,
        )


@dataclass(frozen=True)
class PrioritizedTask:
    task: Task
    urgency_weight: float
    difficulty_weight: float
    hours_weight: float
    priority_score: float
    days_until_deadline: float
    urgency: str
    rank: int = 0

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> Optional[str]:
        return self.task.title

    @property
    def estimated_hours(self) -> float:
        return self.task.estimated_hours


@dataclass(frozen=True)
class AvailabilityInterval:
    """Open (``available=True``) or busy time on a weekday, in minutes since midnight."""

    day: Weekday
    start_minute: int
    end_minute: int
    available: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.start_minute < self.end_minute <= MINUTES_PER_DAY:
            raise InputValidationError(
                "availability",
                f"interval {format_minutes(self.start_minute)}-{format_minutes(self.end_minute)} "
                "must have start_time before end_time within one day",
            )

    @classmethod
    def parse(
        cls,
        *,
        day: str | Weekday,
        start_time: str,
        end_time: str,
        available: bool = True,
        field: str = "availability",
    ) -> "AvailabilityInterval":
        weekday = Weekday.parse(day, f"{field}.day")
        start = parse_hhmm(start_time, f"{field}.start_time")
        end = parse_hhmm(end_time, f"{field}.end_time")
        if start >= end:
            raise InputValidationError(f"{field}.end_time", "end_time must be after start_time")
        return cls(day=weekday, start_minute=start, end_minute=end, available=available)

    def overlaps(self, start_minute: int, end_minute: int) -> bool:
        return self.start_minute < end_minute and self.end_minute > start_minute


@dataclass(frozen=True)
class FreeSlot:
    start_minute: int
    end_minute: int

    @property
    def duration_minutes(self) -> int:
        return self.end_minute - self.start_minute

    def __repr__(self) -> str:
        return f"FreeSlot({format_minutes(self.start_minute)}-{format_minutes(self.end_minute)})"


@dataclass(frozen=True)
class StudyBlock:
    task_id: str
    day: date
    start_minute: int
    duration_hours: float
    task_title: Optional[str] = None

    @property
    def end_minute(self) -> int:
        return self.start_minute + round(self.duration_hours * 60)

    @property
    def start_time(self) -> str:
        return format_minutes(self.start_minute)

    @property
    def end_time(self) -> str:
        return format_minutes(self.end_minute)


@dataclass(frozen=True)
class ScheduleSummary:
    total_blocks: int
    total_hours: float
    days_covered: int
    average_hours_per_day: float


@dataclass(frozen=True)
class TaskShortfall:
    task_id: str
    estimated_hours: float
    scheduled_hours: float
    unscheduled_hours: float


@dataclass(frozen=True)
class Schedule:
    blocks: Tuple[StudyBlock, ...]
    summary: ScheduleSummary
    shortfalls: Tuple[TaskShortfall, ...] = field(default_factory=tuple)
    days_planned: int = 0

    def blocks_by_day(self) -> Dict[date, List[StudyBlock]]:
        grouped: Dict[date, List[StudyBlock]] = {}
        for block in self.blocks:
            grouped.setdefault(block.day, []).append(block)
        return grouped

    def hours_for_task(self, task_id: str) -> float:
        return round(sum(block.duration_hours for block in self.blocks if block.task_id == task_id), 1)
