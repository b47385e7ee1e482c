"""
Display-time preparation of stored bodies.

Bodies stored by older pipeline versions may still carry quoted-printable
artifacts or a text classification for what is really HTML, so both fixes are
re-applied right before rendering.
"""

from .models.parsed_body import BodyKind, ParsedBody
from .parsing.body_parser import reclassify, rescue_residual_encoding
from .sanitization.html_sanitizer import sanitize_html

# HTML bodies render in an iframe that may only open hardened popups
SANDBOX_POLICY = "allow-popups allow-popups-to-escape-sandbox"

SRCDOC_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        '"': "&quot;",
        "'": "&#39;",
        "<": "&lt;",
        ">": "&gt;",
    }
)


def prepare_for_display(parsed: ParsedBody) -> ParsedBody:
    """
    Re-apply the residual-encoding rescue and HTML reclassification.

    Either step can expose markup that was never sanitized (an encoded
    `<script>` decoded by the rescue, or linkified text promoted to html),
    so a changed html result goes through sanitize_html again.

    Args:
        parsed: Stored body

    Returns:
        Body ready for rendering
    """
    prepared = reclassify(rescue_residual_encoding(parsed))

    if prepared is parsed or prepared.kind is not BodyKind.HTML:
        return prepared

    return prepared.model_copy(update={"content": sanitize_html(prepared.content)})


def escape_srcdoc(html: str) -> str:
    """Escape HTML for use inside an iframe srcdoc="..." attribute."""
    return html.translate(SRCDOC_ESCAPES)
