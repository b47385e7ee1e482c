"""
Plain-text URL linkification.
"""

import re
from typing import Optional

from ..config import settings

# Greedy on purpose: punctuation right after a URL becomes part of the link
URL_PATTERN = re.compile(r"https?://\S+")


def linkify(text: str, link_style: Optional[str] = None) -> str:
    """
    Wrap every http(s) URL in a hardened anchor tag.

    The matched text is used as both href and label. Inside the href a `"`
    is written as `&quot;` so the URL cannot close the attribute; the label
    is kept as matched.

    Args:
        text: Plain text body
        link_style: Inline style for links (settings.text_link_style)

    Returns:
        Text with URLs wrapped in <a target="_blank" rel="noopener noreferrer">
    """
    if not text:
        return ""

    if link_style is None:
        link_style = settings.text_link_style

    def _wrap(match: re.Match) -> str:
        url = match.group(0)
        href = url.replace('"', "&quot;")
        return (
            f'<a href="{href}" target="_blank" rel="noopener noreferrer" '
            f'style="{link_style}">{url}</a>'
        )

    return URL_PATTERN.sub(_wrap, text)
