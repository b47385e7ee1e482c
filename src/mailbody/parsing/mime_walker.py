"""
Multipart traversal for raw MIME messages.

The walk runs over an explicit LIFO worklist instead of recursion: children
are pushed in reverse so parts are still visited depth-first in sibling order,
while hostile nesting can only grow the list up to the configured caps.
"""

import re
from typing import Iterator, List, Optional

import structlog

from ..config import settings
from ..models.parsed_body import AccumulatedResult, BodyPart, HeaderBlock
from .headers import (
    DEFAULT_CONTENT_TYPE,
    get_boundary,
    get_content_type,
    get_transfer_encoding,
    parse_headers,
)
from .splitter import find_header_delimiter
from .transfer_decoding import decode_transfer_encoding

logger = structlog.get_logger(__name__)

# Headerless segments this short are boundary noise, not content
MIN_HEADERLESS_SEGMENT_LENGTH = 5

HEADERLESS_PART_HEADERS = HeaderBlock([("Content-Type", DEFAULT_CONTENT_TYPE)])


def split_multipart_body(body: str, boundary: str) -> List[str]:
    """
    Split a multipart body on its boundary token.

    The token is escaped, so boundaries such as `=_Part_12+34()` are matched
    literally. The closing `--` marker is consumed with the delimiter.

    Args:
        body: Multipart body text
        boundary: Boundary parameter from Content-Type

    Returns:
        Trimmed, non-empty segments in order (preamble and epilogue included)
    """
    delimiter = re.compile(f"--{re.escape(boundary)}(?:--)?")
    segments = (segment.strip() for segment in delimiter.split(body))
    return [segment for segment in segments if segment]


def iter_child_parts(body: str, boundary: str, depth: int) -> Iterator[BodyPart]:
    """
    Yield the child parts of a multipart body, in order.

    Segments without their own header block are kept as headerless
    text/plain parts when longer than a few characters, which covers senders
    that omit part headers entirely.
    """
    for segment in split_multipart_body(body, boundary):
        index = find_header_delimiter(segment)
        if index != -1:
            yield BodyPart(
                headers=parse_headers(segment[:index]),
                body=segment[index:].strip(),
                depth=depth,
            )
        elif len(segment) > MIN_HEADERLESS_SEGMENT_LENGTH:
            yield BodyPart(headers=HEADERLESS_PART_HEADERS, body=segment, depth=depth)


def walk_mime(
    headers: HeaderBlock,
    body: str,
    result: AccumulatedResult,
    max_depth: Optional[int] = None,
    max_parts: Optional[int] = None,
) -> AccumulatedResult:
    """
    Walk a MIME part and its descendants, filling the html/text buffers.

    Multipart parts only contribute their children; leaves are decoded
    according to Content-Transfer-Encoding and appended to `result.html` when
    their content type mentions "html", otherwise to `result.text`.

    Args:
        headers: Headers of the top-level part
        body: Body of the top-level part
        result: Accumulator owned by the caller
        max_depth: Deepest nesting level still processed (settings.max_mime_depth)
        max_parts: Parts visited before the walk stops (settings.max_mime_parts)

    Returns:
        The same `result`, for chaining
    """
    if max_depth is None:
        max_depth = settings.max_mime_depth
    if max_parts is None:
        max_parts = settings.max_mime_parts

    worklist: List[BodyPart] = [BodyPart(headers=headers, body=body, depth=0)]
    visited = 0

    while worklist:
        if visited >= max_parts:
            logger.warning(
                "MIME part limit reached, remaining parts dropped",
                max_parts=max_parts,
                dropped=len(worklist),
            )
            break

        part = worklist.pop()
        visited += 1

        if part.depth > max_depth:
            logger.warning(
                "MIME nesting too deep, part dropped",
                depth=part.depth,
                max_depth=max_depth,
            )
            continue

        content_type = get_content_type(part.headers)

        if "multipart" in content_type.lower():
            boundary = get_boundary(part.headers)
            if boundary is None:
                logger.warning(
                    "Multipart part without boundary dropped",
                    content_type=content_type,
                    depth=part.depth,
                )
                continue

            children = list(iter_child_parts(part.body, boundary, part.depth + 1))
            worklist.extend(reversed(children))
            continue

        encoding = get_transfer_encoding(part.headers)
        result.append(content_type, decode_transfer_encoding(part.body, encoding))

    return result
