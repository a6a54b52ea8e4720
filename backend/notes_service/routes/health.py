"""
Notes Service: Health and Readiness Routes
===========================================

What:  Liveness (GET /health) and readiness (GET /ready) probes.
Who:   Container health checks, load balancers, process supervisors.

Probe Semantics:
    /health  never touches the database; 200 as long as the process answers.
    /ready   runs SELECT 1 through the pool; 200 {"ready": true} on success,
             500 {"ready": false} on any failure. Failures are reported, not
             acted upon: restarts and backoff belong to the supervisor.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from notes_service.database import Database, get_database
from notes_service.schemas.note import HealthResponse, ReadyResponse
from notes_service.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadyResponse,
    responses={500: {"description": "Database unreachable", "model": ReadyResponse}},
    summary="Readiness check",
)
async def readiness_check(database: Database = Depends(get_database)):
    if await note_service.is_ready(database):
        return ReadyResponse(ready=True)
    return JSONResponse(status_code=500, content={"ready": False})
