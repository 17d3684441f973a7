"""HTTP retrieval of asset bodies and content types."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from jcrpack.config import settings
from jcrpack.errors import RetrievalError
from jcrpack.scraper.models import FetchedResource

logger = logging.getLogger(__name__)


class Retriever(Protocol):
    """Anything that can turn a URL into a :class:`FetchedResource`.

    Implementations return ``None`` instead of raising when the resource
    cannot be fetched.
    """

    def retrieve(self, url: str) -> Optional[FetchedResource]: ...


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}


def fetch_resource(client: httpx.Client, url: str) -> FetchedResource:
    """GET *url* with *client* and return its body and content type.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        httpx.TransportError: On connection, timeout or protocol failures.
    """
    response = client.get(url)
    response.raise_for_status()
    return FetchedResource(
        url=url,
        content=response.content,
        content_type=response.headers.get("content-type"),
        status_code=response.status_code,
    )


class HttpRetriever:
    """:class:`Retriever` backed by a single, reused ``httpx.Client``.

    Use it as a context manager so the connection pool is closed once the
    build is done::

        with HttpRetriever() as retriever:
            build_package(pages, site, sink, retriever)
    """

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(
            headers=_default_headers(),
            timeout=settings.request_timeout,
            follow_redirects=True,
        )

    def fetch(self, url: str) -> FetchedResource:
        """Fetch *url*, raising :class:`RetrievalError` on any failure."""
        try:
            return fetch_resource(self._client, url)
        except httpx.HTTPStatusError as exc:
            raise RetrievalError(url, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise RetrievalError(url, str(exc) or type(exc).__name__) from exc

    def retrieve(self, url: str) -> Optional[FetchedResource]:
        """Fetch *url*, logging and returning ``None`` on failure."""
        try:
            return self.fetch(url)
        except RetrievalError as exc:
            logger.warning("%s", exc)
            return None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpRetriever:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
