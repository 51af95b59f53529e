"""
Liveness and readiness endpoints.

Both always answer 200; the health of dependencies is carried in the body
so orchestrators can tell "endpoint reachable" apart from "store healthy".
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..health import HealthReporter
from .dependencies import get_health_reporter

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/ready", summary="Readiness probe")
async def readiness_probe(
    reporter: HealthReporter = Depends(get_health_reporter),
) -> JSONResponse:
    """
    Check the dependencies tagged ``ready`` (the document store).

    Returns:
        Overall status plus one entry per probe
    """
    report = await reporter.report_ready()
    return JSONResponse(status_code=200, content=report.to_response())


@router.get("/live", summary="Liveness probe")
async def liveness_probe(
    reporter: HealthReporter = Depends(get_health_reporter),
) -> JSONResponse:
    """Report that the process is up, without touching any dependency."""
    report = await reporter.report_live()
    return JSONResponse(status_code=200, content=report.to_response())
