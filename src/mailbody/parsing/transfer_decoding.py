"""
Content-Transfer-Encoding decoders.

Both decoders assume the payload is UTF-8 and never raise: when a payload
cannot be decoded the input is handed back untouched, so a broken part still
renders as something rather than failing the whole message.
"""

import base64
import binascii
import re

# Trailing blanks before "=" + line break mark a wrapped source line
SOFT_LINE_BREAK = re.compile(r"[\t ]*=\r?\n")
QP_ESCAPE = re.compile(r"=([0-9A-Fa-f]{2})")
WHITESPACE = re.compile(r"\s+")


def decode_quoted_printable(text: str) -> str:
    """
    Decode a quoted-printable payload into UTF-8 text.

    Soft line breaks are removed first. Every `=HH` escape with two valid hex
    digits becomes the byte it encodes; any other `=` is kept literally, which
    tolerates the many senders that do not escape it.

    Args:
        text: Quoted-printable encoded content

    Returns:
        Decoded text, or `text` unchanged if the bytes are not valid UTF-8
    """
    if not text:
        return ""

    unwrapped = SOFT_LINE_BREAK.sub("", text)

    try:
        decoded = bytearray()
        position = 0
        for match in QP_ESCAPE.finditer(unwrapped):
            decoded += unwrapped[position:match.start()].encode("utf-8")
            decoded.append(int(match.group(1), 16))
            position = match.end()
        decoded += unwrapped[position:].encode("utf-8")

        return decoded.decode("utf-8")
    except UnicodeError:
        return text


def decode_base64(text: str) -> str:
    """
    Decode a base64 payload into UTF-8 text.

    Whitespace (line wrapping) is stripped and missing `=` padding restored
    before a strict decode against the standard alphabet.

    Args:
        text: Base64 encoded content

    Returns:
        Decoded text, or `text` unchanged on invalid base64 or invalid UTF-8
    """
    compact = WHITESPACE.sub("", text)
    compact += "=" * (-len(compact) % 4)

    try:
        return base64.b64decode(compact, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError):
        return text


def decode_transfer_encoding(content: str, encoding: str) -> str:
    """
    Decode leaf content according to its declared transfer encoding.

    Matching is a case-insensitive substring check, so decorated values such
    as `"Base64"` or `quoted-printable; foo` still select the right decoder.
    Anything else (7bit, 8bit, binary, missing) is returned as-is.

    Args:
        content: Raw leaf body
        encoding: Content-Transfer-Encoding header value ("" if missing)

    Returns:
        Decoded content
    """
    encoding = encoding.lower()

    if "base64" in encoding:
        return decode_base64(content)
    if "quoted-printable" in encoding:
        return decode_quoted_printable(content)
    return content
