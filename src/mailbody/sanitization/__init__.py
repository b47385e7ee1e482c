# HTML sanitization and text linkification

from .html_sanitizer import remove_scripts, sanitize_html, secure_anchor_tags
from .linkifier import linkify

__all__ = [
    "sanitize_html",
    "remove_scripts",
    "secure_anchor_tags",
    "linkify",
]
