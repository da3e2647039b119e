"""Health Routes — process liveness and database readiness.

Invariants:
    - GET /health/ answers 200 whenever the process serves requests; it never
      touches the database
    - GET /health/ready answers 503 when no session manager is attached or the
      database does not answer SELECT 1
"""

import time

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness(request: Request):
    return {
        "status": "healthy",
        "service": request.app.title,
        "version": request.app.version,
    }


@router.get("/ready")
async def readiness(request: Request):
    """Database round-trip; latency reported for dashboards."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        return _not_ready("database_not_configured")

    started = time.perf_counter()
    reachable = await manager.health_check()
    latency_ms = round((time.perf_counter() - started) * 1000, 2)
    if not reachable:
        return _not_ready("database_unavailable")
    return {
        "status": "ready",
        "checks": {"database": {"status": "healthy", "latency_ms": latency_ms}},
    }


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
