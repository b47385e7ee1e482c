"""
Health check endpoint, reporting the active pipeline and its limits.
"""

import time
from fastapi import APIRouter

from ...config import settings
from ...models.api_models import HealthResponse, ParserLimits
from ...version import API_VERSION, get_current_pipeline_version

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Report service status with the pipeline version and configured limits.

    The limits are read on each call, so the response reflects overrides
    applied to settings at runtime.
    """
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        uptime_seconds=time.time() - _start_time,
        pipeline_version=get_current_pipeline_version(),
        limits=ParserLimits(
            max_email_size_mb=settings.max_email_size_mb,
            max_mime_depth=settings.max_mime_depth,
            max_mime_parts=settings.max_mime_parts,
        ),
    )
