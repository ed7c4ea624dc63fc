"""
FileRelay: Health Check Route
===============================

What:  Liveness endpoint for monitoring and load balancer probes.
How:   Reports whether the generative client is configured, the model in
       use and process uptime. Never calls the Gemini API, so probes do
       not consume quota.

Status levels:
    - healthy:   API key configured
    - degraded:  API key missing (only reachable when the app is served
                 without the startup check, e.g. in tests)
"""

import logging
import time

from fastapi import APIRouter, Depends

from filerelay import __version__
from filerelay.config import settings
from filerelay.schemas.upload import HealthResponse
from filerelay.services.llm_base import GenerativeService
from filerelay.services.relay_service import get_generative_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    generator: GenerativeService = Depends(get_generative_service),
) -> HealthResponse:
    overall = "healthy"
    if not await generator.health_check():
        overall = "degraded"
        logger.warning("Health check: generative service is not configured")

    return HealthResponse(
        status=overall,
        version=__version__,
        model=settings.gemini_model,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
