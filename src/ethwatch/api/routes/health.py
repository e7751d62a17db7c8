"""Health check endpoint."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Liveness probe.

    Unhealthy once the balance monitor loop has exited without being asked
    to stop.
    """
    task = getattr(request.app.state, "monitor_task", None)
    stop_event = getattr(request.app.state, "stop_event", None)

    if task is not None and task.done() and not (stop_event and stop_event.is_set()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "reason": "balance monitor stopped"},
        )

    return JSONResponse(content={"status": "healthy"})
