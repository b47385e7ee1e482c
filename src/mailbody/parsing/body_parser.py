"""
Top-level body parsing: raw message in, sanitized renderable body out.

Pipeline:
1. Split the raw message into headers and body
2. Walk the MIME tree into html/text buffers
3. Classify (HTML wins over text, raw message as last resort)
4. Rescue content that still carries quoted-printable artifacts
5. Reclassify text that is obviously HTML
6. Sanitize HTML or linkify text

parse_body never raises: a message that breaks the walk is rendered as its
own raw text.
"""

import re

import structlog

from ..models.parsed_body import AccumulatedResult, BodyKind, ParsedBody
from ..sanitization.html_sanitizer import sanitize_html
from ..sanitization.linkifier import linkify
from .mime_walker import walk_mime
from .splitter import split_message
from .transfer_decoding import decode_quoted_printable

logger = structlog.get_logger(__name__)

# Encoded "=" left behind by a missing or wrong Content-Transfer-Encoding
RESIDUAL_QP_MARKERS = ("=3D", "=3d")

HTML_MARKERS = re.compile(r"<html|<body|</div>", re.IGNORECASE)


def classify(result: AccumulatedResult, raw: str) -> ParsedBody:
    """
    Choose the final representation from the walk buffers.

    Args:
        result: Buffers filled by walk_mime
        raw: Original raw message, used when both buffers are empty

    Returns:
        html body if any HTML was found, else text body, else the raw message as text
    """
    if result.html:
        return ParsedBody(kind=BodyKind.HTML, content=result.html)
    if result.text:
        return ParsedBody(kind=BodyKind.TEXT, content=result.text)
    return ParsedBody(kind=BodyKind.TEXT, content=raw)


def has_residual_encoding(content: str) -> bool:
    """Check for an encoded "=" sign that survived decoding."""
    return any(marker in content for marker in RESIDUAL_QP_MARKERS)


def rescue_residual_encoding(parsed: ParsedBody) -> ParsedBody:
    """
    Force one extra quoted-printable decode over content that still shows `=3D`.

    Best effort only: this catches parts whose Content-Transfer-Encoding was
    missing or wrong. It is applied once and not re-checked afterwards.

    Args:
        parsed: Classified body

    Returns:
        Body with decoded content, or `parsed` itself when no artifacts are found
    """
    if not has_residual_encoding(parsed.content):
        return parsed

    logger.info(
        "Forcing quoted-printable decode",
        kind=parsed.kind.value,
        content_length=len(parsed.content),
    )
    return parsed.model_copy(update={"content": decode_quoted_printable(parsed.content)})


def looks_like_html(content: str) -> bool:
    """Loose check for HTML markup (`<html`, `<body` or `</div>`)."""
    return HTML_MARKERS.search(content) is not None


def reclassify(parsed: ParsedBody) -> ParsedBody:
    """
    Promote a text body to html when its content is evidently HTML.

    Idempotent: html bodies, and text bodies that show no HTML markers,
    are returned unchanged.
    """
    if parsed.kind is BodyKind.TEXT and looks_like_html(parsed.content):
        return parsed.model_copy(update={"kind": BodyKind.HTML})
    return parsed


def decode_body(raw: str) -> ParsedBody:
    """
    Decode a raw message into an unsanitized body.

    Runs split, MIME walk, classification, residual-encoding rescue and HTML
    reclassification. Unlike parse_body, exceptions propagate.

    Args:
        raw: Full raw message (headers + body)

    Returns:
        Classified, decoded body
    """
    result = AccumulatedResult()

    split = split_message(raw)
    if split is None:
        result.text = raw
    else:
        headers, body = split
        walk_mime(headers, body, result)

    parsed = classify(result, raw)
    parsed = rescue_residual_encoding(parsed)
    return reclassify(parsed)


def parse_body(raw: str) -> ParsedBody:
    """
    Parse a raw inbound message into a sanitized, renderable body.

    Args:
        raw: Full raw message (headers + body) as received

    Returns:
        ParsedBody: sanitized HTML, or linkified text. Falls back to the raw
        message as text if decoding fails for any reason.
    """
    try:
        parsed = decode_body(raw)
    except Exception as e:
        logger.error(
            "Body parsing failed, falling back to raw message",
            error=str(e),
            raw_length=len(raw),
            exc_info=True,
        )
        parsed = ParsedBody(kind=BodyKind.TEXT, content=raw)

    if parsed.kind is BodyKind.HTML:
        content = sanitize_html(parsed.content)
    else:
        content = linkify(parsed.content)

    logger.debug("Body parsed", kind=parsed.kind.value, content_length=len(content))

    return parsed.model_copy(update={"content": content})
