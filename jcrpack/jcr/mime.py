"""Mime type resolution for fetched assets."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

MIME_TYPES = {
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "png": "image/png",
    "jpg": "image/jpeg",
    "gif": "image/gif",
}


def resolve_mime_type(url: str, content_type: Optional[str]) -> Optional[str]:
    """Mime type from the ``Content-Type`` header, else from the URL extension."""
    if content_type:
        mime_type = content_type.split(";", 1)[0].strip()
        if mime_type:
            return mime_type
    last_segment = urlsplit(url).path.rsplit("/", 1)[-1]
    if "." not in last_segment:
        return None
    return MIME_TYPES.get(last_segment.rsplit(".", 1)[-1].lower())
