"""Data models for page input and asset retrieval."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RawPage:
    """One fetched page as handed to the packager.

    ``path`` is the page path on the source site (``/1/2/page``), ``data`` is
    the page's JCR XML and ``url`` the absolute URL it was fetched from.
    """

    path: str
    data: str
    url: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> RawPage:
        return cls(path=raw["path"], data=raw["data"], url=raw["url"])


@dataclass(frozen=True)
class FetchedResource:
    """The body and content type of a successful asset fetch."""

    url: str
    content: bytes
    content_type: str | None
    status_code: int
