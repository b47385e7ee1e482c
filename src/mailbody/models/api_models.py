"""
API request and response models for FastAPI endpoints.

This module defines the Pydantic models used for API request/response validation.
"""

from typing import Optional
from pydantic import BaseModel, Field

from .parsed_body import ParsedBody
from .pipeline_version import PipelineVersion


class ParseRawRequest(BaseModel):
    """Request model for raw message parsing endpoint."""

    raw: str = Field(description="Full raw message (headers + body) as received over SMTP")


class ParseResponse(BaseModel):
    """Response model for parsing endpoints."""

    success: bool = Field(description="Whether parsing succeeded")
    body: Optional[ParsedBody] = Field(None, description="Sanitized renderable body")
    raw_size_bytes: Optional[int] = Field(None, description="Size of the raw message in bytes")
    processing_time_ms: Optional[float] = Field(
        None, description="Processing time in milliseconds"
    )
    pipeline_version: Optional[PipelineVersion] = Field(
        None, description="Version contract for this processing"
    )
    error: Optional[str] = Field(None, description="Error message if failed")


class ParserLimits(BaseModel):
    """Resource limits applied to every parsed message."""

    max_email_size_mb: int = Field(description="Largest accepted raw message, in MB")
    max_mime_depth: int = Field(description="Deepest MIME nesting level still processed")
    max_mime_parts: int = Field(description="Parts visited per message before the walk stops")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status", examples=["healthy"])
    version: str = Field(description="API version", examples=["1.0.0"])
    uptime_seconds: float = Field(description="Service uptime")
    pipeline_version: PipelineVersion = Field(description="Active parsing pipeline")
    limits: ParserLimits = Field(description="Configured parser limits")


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str = Field(description="API version")
    pipeline_version: PipelineVersion = Field(
        description="Current pipeline version"
    )
