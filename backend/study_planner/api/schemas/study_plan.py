"""Schemas for study plan generation."""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from study_planner.api.schemas.prioritization import TaskPayload

WeekdayName = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
CLOCK_PATTERN = r"^\d{2}:\d{2}$"


class AvailabilityPayload(BaseModel):
    day: WeekdayName
    start_time: str = Field(..., pattern=CLOCK_PATTERN, description="HH:MM, 24h")
    end_time: str = Field(..., pattern=CLOCK_PATTERN, description="HH:MM, 24h")
    available: bool = True

    @field_validator("day", mode="before")
    @classmethod
    def normalize_day(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class StudyPlanRequest(BaseModel):
    tasks: List[TaskPayload] = Field(default_factory=list)
    availability: Optional[List[AvailabilityPayload]] = None
    max_hours_per_day: Optional[float] = Field(default=None, ge=0, le=24)
    start_date: Optional[date] = None
    horizon_days: Optional[int] = Field(default=None, ge=1)
    plan_type: Literal["weekly", "daily"] = "weekly"
    now: Optional[datetime] = Field(default=None, description="Reference time; defaults to the server clock")


class StudyBlockPayload(BaseModel):
    task_id: str
    day: date
    start_time: str
    duration: float
    task_title: Optional[str] = None


class DayBlockPayload(BaseModel):
    task_id: str
    task_title: str
    start_time: str
    end_time: str
    duration: float


class DayPlanPayload(BaseModel):
    day: date
    blocks: List[DayBlockPayload]
    total_hours: float


class StudyPlanSummary(BaseModel):
    total_blocks: int
    total_hours: float
    days_covered: int
    average_hours_per_day: float
    plan_type: Literal["weekly", "daily"]


class UnscheduledTaskPayload(BaseModel):
    task_id: str
    estimated_hours: float
    scheduled_hours: float
    unscheduled_hours: float


class StudyPlanResponse(BaseModel):
    study_blocks: List[StudyBlockPayload]
    blocks_by_day: List[DayPlanPayload]
    summary: StudyPlanSummary
    unscheduled: List[UnscheduledTaskPayload]
    request_id: str
