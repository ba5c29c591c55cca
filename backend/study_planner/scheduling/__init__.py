"""Task prioritization and time-block scheduling engine."""

from study_planner.scheduling.allocator import allocate_day
from study_planner.scheduling.availability import default_availability, free_slots
from study_planner.scheduling.errors import InputValidationError
from study_planner.scheduling.horizon import plan, plan_day, summarize
from study_planner.scheduling.models import (
    AvailabilityInterval,
    FreeSlot,
    PrioritizedTask,
    Schedule,
    ScheduleSummary,
    StudyBlock,
    Task,
    TaskShortfall,
    Weekday,
)
from study_planner.scheduling.priority import score, summarize_priorities

__all__ = [
    "AvailabilityInterval",
    "FreeSlot",
    "InputValidationError",
    "PrioritizedTask",
    "Schedule",
    "ScheduleSummary",
    "StudyBlock",
    "Task",
    "TaskShortfall",
    "Weekday",
    "allocate_day",
    "default_availability",
    "free_slots",
    "plan",
    "plan_day",
    "score",
    "summarize",
    "summarize_priorities",
]
