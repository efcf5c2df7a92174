"""
NoteKeeper — Health Check Route
=================================

What:  Health check endpoint for monitoring and process supervisors.
How:   Reports version, uptime and how many notes are held in memory.
       The store is the only dependency; if the process answers, it is healthy.
"""

import logging
import time

from fastapi import APIRouter, Depends

from notekeeper import __version__
from notekeeper.schemas.note import HealthResponse
from notekeeper.store import NoteStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: NoteStore = Depends(get_store)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        notes=store.count(),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
