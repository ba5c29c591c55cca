"""Schemas for task prioritization."""
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class TaskPayload(BaseModel):
    id: str = Field(..., min_length=1, max_length=200)
    title: Optional[str] = Field(default=None, max_length=300)
    deadline: datetime
    estimated_hours: float = Field(..., ge=0, allow_inf_nan=False)
    difficulty_score: float = Field(..., ge=1, le=10, allow_inf_nan=False)

    @field_validator("id")
    @classmethod
    def strip_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("id must not be blank")
        return cleaned


class PrioritizationRequest(BaseModel):
    tasks: List[TaskPayload] = Field(default_factory=list)
    now: Optional[datetime] = Field(default=None, description="Reference time; defaults to the server clock")


class PrioritizedTaskPayload(BaseModel):
    id: str
    title: str
    deadline: datetime
    estimated_hours: float
    difficulty_score: float
    urgency_weight: float
    difficulty_weight: float
    hours_weight: float
    priority_score: float
    days_until_deadline: int
    urgency: Literal["critical", "high", "medium", "low"]
    rank: int


class PrioritizationSummary(BaseModel):
    total_tasks: int
    highest_priority: Optional[str] = None
    highest_priority_score: Optional[float] = None
    lowest_priority: Optional[str] = None
    lowest_priority_score: Optional[float] = None
    critical_count: int = 0
    high_count: int = 0
    medium_count: int = 0
    low_count: int = 0


class PrioritizationResponse(BaseModel):
    prioritized_tasks: List[PrioritizedTaskPayload]
    summary: PrioritizationSummary
    request_id: str
