"""
Parsed body models - the data flowing through the MIME decoding pipeline.

ParsedBody is the only value that leaves the core. HeaderBlock, BodyPart and
AccumulatedResult are transient and live for a single parse call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Tuple

from pydantic import BaseModel, Field


class BodyKind(str, Enum):
    """Renderable representation of a message body."""

    TEXT = "text"
    HTML = "html"


class ParsedBody(BaseModel):
    """
    Sanitized, renderable message body.

    `kind` tells the renderer how to embed `content`: html bodies go into a
    sandboxed iframe, text bodies into a preformatted block.
    """

    kind: BodyKind = Field(description="Body representation: text or html")
    content: str = Field(description="Decoded (and, after parse_body, sanitized) content")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "kind": "html",
                "content": "<p>Your code is <b>123456</b></p>",
            }
        },
    }


class HeaderBlock:
    """
    Case-insensitive mapping of header name to raw value.

    When a header name repeats, the first occurrence wins.
    """

    def __init__(self, items: Iterable[Tuple[str, str]] = ()):
        self._headers: Dict[str, Tuple[str, str]] = {}
        for name, value in items:
            self._headers.setdefault(name.lower(), (name, value))

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        entry = self._headers.get(name.lower())
        return entry[1] if entry is not None else default

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._headers

    def __getitem__(self, name: str) -> str:
        return self._headers[name.lower()][1]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._headers.values())

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"HeaderBlock({dict(self._headers.values())!r})"


@dataclass
class BodyPart:
    """A header block paired with its body text, queued for the MIME walk."""

    headers: HeaderBlock
    body: str
    depth: int = 0


@dataclass
class AccumulatedResult:
    """Per-call HTML and text buffers filled by the leaves of the MIME walk."""

    html: str = ""
    text: str = ""

    def append(self, content_type: str, content: str) -> None:
        """Append decoded leaf content to exactly one buffer, chosen by content type."""
        if "html" in content_type.lower():
            self.html += content
        else:
            self.text += content
