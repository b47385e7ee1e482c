"""
Request middleware for the parsing API.

Each request gets an id that is bound into the structlog context, so the
parser's own log lines (rescue passes, dropped MIME parts, fallbacks) can be
traced back to the request that triggered them.
"""

import time
import uuid
from typing import Callable
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
import structlog

from ..version import get_current_pipeline_version

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def setup_logging_middleware(app: FastAPI) -> None:
    """
    Bind a request id and log request start and completion.

    A caller-supplied X-Request-ID is reused; otherwise a new one is
    generated. The id is echoed back in the response headers.
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.time()
        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            content_length=request.headers.get("content-length"),
        )

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        process_time_ms = round((time.time() - start_time) * 1000, 2)
        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=process_time_ms,
            request_id=request_id,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Process-Time"] = str(process_time_ms / 1000)
        return response


def setup_error_handling_middleware(app: FastAPI) -> None:
    """
    Turn unhandled exceptions into a ParseResponse-shaped JSON 500.

    parse_body itself never raises, so reaching this handler means a failure
    outside the parser (request decoding, response building).
    """

    @app.middleware("http")
    async def handle_errors(request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.error(
                "Unhandled exception",
                method=request.method,
                path=request.url.path,
                error=str(e),
                exc_info=True,
            )
            return JSONResponse(
                status_code=500,
                content={
                    "success": False,
                    "body": None,
                    "error": "Internal server error",
                    "detail": str(e) if app.debug else "An unexpected error occurred",
                    "pipeline_version": get_current_pipeline_version().model_dump(),
                },
            )
