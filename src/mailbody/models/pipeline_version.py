"""
Pipeline version model for deterministic processing.

Same version parameters + same raw message = same rendered body.
"""

from pydantic import BaseModel, Field


class PipelineVersion(BaseModel):
    """
    Immutable version contract for the parsing pipeline.

    Echoed in API responses so stored bodies can be traced back to the
    decoder and sanitizer revisions that produced them.
    """

    parser_version: str = Field(
        description="MIME walker and transfer decoder version", examples=["mime-walker-1.0.0"]
    )
    sanitizer_version: str = Field(
        description="HTML sanitizer version", examples=["html-sanitizer-1.0.0"]
    )
    linkifier_version: str = Field(
        description="Plain-text linkifier version", examples=["linkifier-1.0.0"]
    )

    model_config = {
        "frozen": True,  # Immutable
        "json_schema_extra": {
            "example": {
                "parser_version": "mime-walker-1.0.0",
                "sanitizer_version": "html-sanitizer-1.0.0",
                "linkifier_version": "linkifier-1.0.0",
            }
        },
    }

    def to_repr(self) -> str:
        """
        Short representation for logging.

        Returns:
            Compact string representation with all version components.
        """
        return (
            f"Pipeline-{self.parser_version}-"
            f"{self.sanitizer_version}-{self.linkifier_version}"
        )
