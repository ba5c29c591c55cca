"""Study plan endpoints."""
from __future__ import annotations

from time import perf_counter

from fastapi import APIRouter, HTTPException, Request, status

from study_planner.api.errors import validation_detail
from study_planner.api.schemas.study_plan import StudyPlanRequest, StudyPlanResponse
from study_planner.observability.metrics import elapsed_ms, log_metric
from study_planner.observability.tracing import trace
from study_planner.scheduling import InputValidationError
from study_planner.services.study_planner import build_study_plan

router = APIRouter()


@router.post("/study-plan", response_model=StudyPlanResponse, tags=["study-plan"])
def create_study_plan(request: Request, payload: StudyPlanRequest) -> StudyPlanResponse:
    """Split prioritized tasks into study blocks across the planning horizon."""
    request_id = getattr(request.state, "request_id", None)
    metadata = {
        "route": "/study-plan",
        "task_count": len(payload.tasks),
        "availability_count": len(payload.availability or []),
        "plan_type": payload.plan_type,
        "max_hours_per_day": payload.max_hours_per_day,
        "horizon_days": payload.horizon_days,
    }
    start = perf_counter()

    try:
        with trace("study_plan.create", metadata=metadata, request_id=request_id) as plan_trace:
            result = build_study_plan(payload)
            if plan_trace:
                plan_trace.update(
                    metadata={
                        "total_blocks": result.summary.total_blocks,
                        "total_hours": result.summary.total_hours,
                        "days_covered": result.summary.days_covered,
                        "unscheduled_tasks": len(result.unscheduled),
                    }
                )
    except InputValidationError as exc:
        log_metric("study_plan.create.rejected", 1, metadata={"field": exc.field})
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=validation_detail(exc),
        ) from exc

    unscheduled_hours = round(sum(item.unscheduled_hours for item in result.unscheduled), 2)
    log_metric("study_plan.create.success", 1, metadata={"plan_type": payload.plan_type})
    log_metric("study_plan.total_hours", result.summary.total_hours)
    log_metric("study_plan.unscheduled_hours", unscheduled_hours)
    log_metric("study_plan.create.latency_ms", elapsed_ms(start))

    return StudyPlanResponse(
        study_blocks=result.study_blocks,
        blocks_by_day=result.blocks_by_day,
        summary=result.summary,
        unscheduled=result.unscheduled,
        request_id=request_id or "",
    )
