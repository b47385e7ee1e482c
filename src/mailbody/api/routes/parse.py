"""
Body parsing endpoints - raw inbound message in, renderable body out.
"""

from time import time
from fastapi import APIRouter, File, HTTPException, UploadFile
import structlog

from ...config import settings
from ...display import prepare_for_display
from ...models.api_models import ParseRawRequest, ParseResponse
from ...models.parsed_body import ParsedBody
from ...parsing import parse_body
from ...version import get_current_pipeline_version

logger = structlog.get_logger(__name__)
router = APIRouter()


def _check_size(size_bytes: int) -> None:
    size_mb = size_bytes / (1024 * 1024)
    if size_mb > settings.max_email_size_mb:
        raise HTTPException(
            status_code=413,
            detail=f"Message size ({size_mb:.1f}MB) exceeds maximum ({settings.max_email_size_mb}MB)"
        )


def _parse(raw: str, raw_size_bytes: int) -> ParseResponse:
    start_time = time()

    body = parse_body(raw)
    processing_time_ms = (time() - start_time) * 1000

    logger.info(
        "Message body parsed",
        kind=body.kind.value,
        raw_size_bytes=raw_size_bytes,
        content_length=len(body.content),
        processing_time_ms=round(processing_time_ms, 2),
    )

    return ParseResponse(
        success=True,
        body=body,
        raw_size_bytes=raw_size_bytes,
        processing_time_ms=processing_time_ms,
        pipeline_version=get_current_pipeline_version(),
    )


@router.post("/eml", response_model=ParseResponse)
async def parse_eml_file(
    file: UploadFile = File(..., description=".eml file to parse"),
) -> ParseResponse:
    """
    Parse an uploaded .eml file into a sanitized body.

    Bytes that are not valid UTF-8 are replaced, matching how the inbound
    transport hands raw messages over as text.

    Args:
        file: Uploaded .eml file

    Returns:
        ParseResponse with the renderable body
    """
    if not file.filename or not file.filename.endswith(".eml"):
        raise HTTPException(
            status_code=400,
            detail="File must be .eml format"
        )

    eml_bytes = await file.read()
    _check_size(len(eml_bytes))

    logger.info("Parsing uploaded message", filename=file.filename, size_bytes=len(eml_bytes))

    return _parse(eml_bytes.decode("utf-8", errors="replace"), len(eml_bytes))


@router.post("/raw", response_model=ParseResponse)
async def parse_raw_message(request: ParseRawRequest) -> ParseResponse:
    """
    Parse a raw message sent as JSON text.

    Args:
        request: Raw message text

    Returns:
        ParseResponse with the renderable body
    """
    raw_size_bytes = len(request.raw.encode("utf-8", errors="replace"))
    _check_size(raw_size_bytes)

    return _parse(request.raw, raw_size_bytes)


@router.post("/display", response_model=ParsedBody)
async def prepare_stored_body(body: ParsedBody) -> ParsedBody:
    """
    Apply display-time fixes to a previously stored body.

    Re-runs the residual quoted-printable rescue and the HTML reclassification,
    for bodies stored before either fix applied to them.

    Args:
        body: Stored body

    Returns:
        Body ready for rendering
    """
    return prepare_for_display(body)
