"""Main FastAPI application for the study planner backend."""
from fastapi import FastAPI, Request

from study_planner.api.routes.prioritization import router as prioritization_router
from study_planner.api.routes.study_plan import router as study_plan_router
from study_planner.core.config import settings
from study_planner.core.logging import configure_logging
from study_planner.core.middleware import RequestIDMiddleware
from study_planner.observability.client import init_opik
from study_planner.observability.tracing import trace

configure_logging(log_level=settings.log_level, scheduling_level=settings.scheduling_log_level)

app = FastAPI(title=settings.app_name, version="0.1.0", debug=settings.debug)
app.add_middleware(RequestIDMiddleware)
app.include_router(prioritization_router)
app.include_router(study_plan_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
