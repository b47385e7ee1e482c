"""
Header/body splitting at the first blank line.
"""

from typing import Optional, Tuple

from ..models.parsed_body import HeaderBlock
from .headers import parse_headers

CRLF_DELIMITER = "\r\n\r\n"
LF_DELIMITER = "\n\n"


def find_header_delimiter(text: str) -> int:
    """
    Find where the header block ends.

    A CRLF blank line is preferred; bare LF is accepted when no CRLF blank
    line exists anywhere in the text.

    Returns:
        Index of the delimiter, or -1 if there is none
    """
    index = text.find(CRLF_DELIMITER)
    if index == -1:
        index = text.find(LF_DELIMITER)
    return index


def split_message(raw: str) -> Optional[Tuple[HeaderBlock, str]]:
    """
    Split a raw message (or multipart segment) into headers and body.

    Args:
        raw: Message text

    Returns:
        (headers, body) with the body trimmed of surrounding whitespace,
        or None when there is no blank-line delimiter
    """
    index = find_header_delimiter(raw)
    if index == -1:
        return None

    return parse_headers(raw[:index]), raw[index:].strip()
