"""MIME type lookup by file extension."""

import mimetypes

# Non-text types that still carry text and get an explicit charset
_CHARSET_TYPES = frozenset({"application/javascript", "application/json"})


def guess_mime_type(relative_path: str) -> str:
    """Return the content type for *relative_path*, or ``""`` if unknown."""
    content_type, _ = mimetypes.guess_type(relative_path, strict=False)
    if content_type is None:
        return ""
    if content_type.startswith("text/") or content_type in _CHARSET_TYPES:
        return f"{content_type}; charset=utf-8"
    return content_type
