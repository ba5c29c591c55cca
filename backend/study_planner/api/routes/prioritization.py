"""Task prioritization endpoints."""
from __future__ import annotations

from time import perf_counter

from fastapi import APIRouter, HTTPException, Request, status

from study_planner.api.errors import validation_detail
from study_planner.api.schemas.prioritization import PrioritizationRequest, PrioritizationResponse
from study_planner.observability.metrics import elapsed_ms, log_metric
from study_planner.observability.tracing import trace
from study_planner.scheduling import InputValidationError
from study_planner.services.study_planner import prioritize_tasks

router = APIRouter()


@router.post("/prioritization", response_model=PrioritizationResponse, tags=["prioritization"])
def prioritize(request: Request, payload: PrioritizationRequest) -> PrioritizationResponse:
    """Rank tasks by urgency, difficulty and workload."""
    request_id = getattr(request.state, "request_id", None)
    start = perf_counter()

    try:
        with trace(
            "prioritization.rank",
            metadata={"route": "/prioritization", "task_count": len(payload.tasks)},
            request_id=request_id,
        ):
            result = prioritize_tasks(payload)
    except InputValidationError as exc:
        log_metric("prioritization.rank.rejected", 1, metadata={"field": exc.field})
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=validation_detail(exc),
        ) from exc

    log_metric("prioritization.rank.success", 1)
    log_metric("prioritization.rank.count", result.summary.total_tasks)
    log_metric("prioritization.rank.latency_ms", elapsed_ms(start))

    return PrioritizationResponse(
        prioritized_tasks=result.prioritized_tasks,
        summary=result.summary,
        request_id=request_id or "",
    )
