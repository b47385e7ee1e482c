# Raw message parsing module

from .body_parser import (
    classify,
    decode_body,
    has_residual_encoding,
    looks_like_html,
    parse_body,
    reclassify,
    rescue_residual_encoding,
)
from .headers import get_boundary, get_content_type, get_transfer_encoding, parse_headers
from .mime_walker import split_multipart_body, walk_mime
from .splitter import find_header_delimiter, split_message
from .transfer_decoding import (
    decode_base64,
    decode_quoted_printable,
    decode_transfer_encoding,
)

__all__ = [
    "parse_body",
    "decode_body",
    "classify",
    "has_residual_encoding",
    "rescue_residual_encoding",
    "looks_like_html",
    "reclassify",
    "parse_headers",
    "get_content_type",
    "get_transfer_encoding",
    "get_boundary",
    "walk_mime",
    "split_multipart_body",
    "find_header_delimiter",
    "split_message",
    "decode_quoted_printable",
    "decode_base64",
    "decode_transfer_encoding",
]
