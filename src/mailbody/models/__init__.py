# Data models for the message body pipeline

from .pipeline_version import PipelineVersion
from .parsed_body import AccumulatedResult, BodyKind, BodyPart, HeaderBlock, ParsedBody
from .api_models import (
    HealthResponse,
    ParserLimits,
    ParseRawRequest,
    ParseResponse,
    VersionResponse,
)

__all__ = [
    "PipelineVersion",
    "AccumulatedResult",
    "BodyKind",
    "BodyPart",
    "HeaderBlock",
    "ParsedBody",
    "ParseRawRequest",
    "ParseResponse",
    "HealthResponse",
    "ParserLimits",
    "VersionResponse",
]
