"""
Version constants for the message body pipeline.

Stored bodies carry the pipeline version they were produced with, so a change
to any stage below must bump its constant.
"""

from .models.pipeline_version import PipelineVersion

# API Version
API_VERSION = "1.0.0"

# Component versions (update these when implementations change)
PARSER_VERSION = "mime-walker-1.0.0"
SANITIZER_VERSION = "html-sanitizer-1.0.0"
LINKIFIER_VERSION = "linkifier-1.0.0"


def get_current_pipeline_version() -> PipelineVersion:
    """
    Get current pipeline version configuration.

    Returns:
        PipelineVersion instance with current versions
    """
    return PipelineVersion(
        parser_version=PARSER_VERSION,
        sanitizer_version=SANITIZER_VERSION,
        linkifier_version=LINKIFIER_VERSION,
    )
