"""Sanitized, renderable bodies from raw inbound mail."""

from .display import SANDBOX_POLICY, escape_srcdoc, prepare_for_display
from .models.parsed_body import BodyKind, ParsedBody
from .parsing import (
    decode_base64,
    decode_quoted_printable,
    looks_like_html,
    parse_body,
    reclassify,
)
from .sanitization import linkify, sanitize_html

__all__ = [
    "BodyKind",
    "ParsedBody",
    "parse_body",
    "sanitize_html",
    "linkify",
    "decode_quoted_printable",
    "decode_base64",
    "looks_like_html",
    "reclassify",
    "prepare_for_display",
    "escape_srcdoc",
    "SANDBOX_POLICY",
]
