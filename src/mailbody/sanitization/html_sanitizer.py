"""
HTML hardening for untrusted message bodies.

Only two rewrites are applied: script elements are removed and anchors are
rebuilt so every link opens in a new, unprivileged browsing context. Event
handler attributes, <style>, <iframe>, <object> and <embed> are left alone;
HTML bodies must still be rendered inside a sandboxed iframe (see
mailbody.display.SANDBOX_POLICY).
"""

import re
from typing import Optional

from ..config import settings

SCRIPT_ELEMENT = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)

# Whole opening tag of an anchor with a quoted href, whatever else it carries
ANCHOR_OPEN_TAG = re.compile(
    r"<a\s+(?:[^>]*?\s+)?href\s*=\s*([\"'])(.*?)\1[^>]*>",
    re.IGNORECASE,
)


def remove_scripts(html: str) -> str:
    """Remove every <script>...</script> element, content included."""
    return SCRIPT_ELEMENT.sub("", html)


def secure_anchor_tags(html: str, link_style: Optional[str] = None) -> str:
    """
    Rebuild the opening tag of every anchor that has a quoted href.

    The new tag keeps only the href and forces target="_blank",
    rel="noopener noreferrer" and the link style. Any other attribute of the
    original tag (target, rel, class, style, on*) is discarded.

    Args:
        html: HTML content
        link_style: Inline style for links (settings.html_link_style)

    Returns:
        HTML with rewritten anchor tags
    """
    if link_style is None:
        link_style = settings.html_link_style

    def _rebuild(match: re.Match) -> str:
        url = match.group(2).replace('"', "&quot;")
        return (
            f'<a href="{url}" target="_blank" rel="noopener noreferrer" '
            f'style="{link_style}">'
        )

    return ANCHOR_OPEN_TAG.sub(_rebuild, html)


def sanitize_html(html: str) -> str:
    """
    Harden an HTML body from an untrusted sender.

    Args:
        html: HTML content

    Returns:
        HTML without script elements and with hardened links
    """
    if not html:
        return ""

    return secure_anchor_tags(remove_scripts(html))
