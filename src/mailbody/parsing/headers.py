"""
Header block parsing and the handful of header lookups the MIME walk needs.

Only Content-Type (media type and boundary) and Content-Transfer-Encoding are
ever consulted; everything else in the block is carried but ignored.
"""

import re
from typing import List, Optional

from ..models.parsed_body import HeaderBlock

DEFAULT_CONTENT_TYPE = "text/plain"

# Permissive: optional quotes, stops at the closing quote, ";" or end of line
BOUNDARY_PARAM = re.compile(r"boundary\s*=\s*\"?([^\";\r\n]+)\"?", re.IGNORECASE)


def parse_headers(text: str) -> HeaderBlock:
    """
    Parse a raw header block into a case-insensitive HeaderBlock.

    Folded continuation lines (starting with a space or tab) are joined onto
    the header they continue. Lines without a colon are skipped.

    Args:
        text: Header text preceding the header/body delimiter

    Returns:
        HeaderBlock with unfolded values
    """
    items: List[List[str]] = []
    continuing = False

    for line in text.splitlines():
        if line[:1] in (" ", "\t"):
            if continuing:
                items[-1][1] = f"{items[-1][1]} {line.strip()}"
            continue

        name, sep, value = line.partition(":")
        name = name.strip()
        if not sep or not name:
            continuing = False
            continue

        items.append([name, value.strip()])
        continuing = True

    return HeaderBlock((name, value) for name, value in items)


def get_content_type(headers: HeaderBlock) -> str:
    """
    Get the media type of a part, without parameters.

    Returns:
        Value before the first ";", trimmed; "text/plain" if missing or empty
    """
    value = headers.get("Content-Type", "")
    media_type = value.split(";", 1)[0].strip()
    return media_type or DEFAULT_CONTENT_TYPE


def get_transfer_encoding(headers: HeaderBlock) -> str:
    """
    Get the declared Content-Transfer-Encoding.

    Returns:
        Trimmed header value; "" (identity) if missing
    """
    return headers.get("Content-Transfer-Encoding", "").strip()


def get_boundary(headers: HeaderBlock) -> Optional[str]:
    """
    Extract the multipart boundary parameter from Content-Type.

    The value is returned verbatim. Callers must escape it before using it in
    a regular expression.

    Returns:
        Boundary token, or None if the parameter is absent
    """
    match = BOUNDARY_PARAM.search(headers.get("Content-Type", ""))
    if not match:
        return None

    boundary = match.group(1).strip()
    return boundary or None
