"""Tests for HTTP asset retrieval.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.
- Page input models are covered through ``RawPage.from_dict``.
"""

from __future__ import annotations

import logging

import httpx
import pytest
import respx

from jcrpack.errors import RetrievalError
from jcrpack.scraper.fetcher import HttpRetriever, fetch_resource
from jcrpack.scraper.models import FetchedResource, RawPage

_ASSET_URL = "https://www.brand.com/a/b/media_1.png"


class TestRawPage:
    def test_from_dict(self) -> None:
        page = RawPage.from_dict({"path": "/1/2/page", "data": "<x/>", "url": "https://h/1/2/page.html"})
        assert page == RawPage(path="/1/2/page", data="<x/>", url="https://h/1/2/page.html")

    def test_from_dict_missing_key(self) -> None:
        with pytest.raises(KeyError):
            RawPage.from_dict({"path": "/p", "data": "<x/>"})


class TestFetchResource:
    def test_returns_body_and_content_type(self) -> None:
        with respx.mock:
            respx.get(_ASSET_URL).mock(
                return_value=httpx.Response(200, content=b"png", headers={"Content-Type": "image/png"})
            )
            with httpx.Client() as client:
                resource = fetch_resource(client, _ASSET_URL)

        assert resource == FetchedResource(
            url=_ASSET_URL, content=b"png", content_type="image/png", status_code=200
        )

    def test_http_error_raises(self) -> None:
        with respx.mock:
            respx.get(_ASSET_URL).mock(return_value=httpx.Response(404))
            with httpx.Client() as client, pytest.raises(httpx.HTTPStatusError):
                fetch_resource(client, _ASSET_URL)


class TestHttpRetriever:
    def test_fetch_success(self) -> None:
        with respx.mock:
            respx.get(_ASSET_URL).mock(return_value=httpx.Response(200, content=b"png"))
            with HttpRetriever() as retriever:
                resource = retriever.fetch(_ASSET_URL)
        assert resource.content == b"png"

    def test_sends_configured_user_agent(self, monkeypatch) -> None:
        monkeypatch.setattr("jcrpack.scraper.fetcher.settings.user_agent", "jcrpack-test/1.0")
        with respx.mock:
            route = respx.get(_ASSET_URL).mock(return_value=httpx.Response(200, content=b""))
            with HttpRetriever() as retriever:
                retriever.retrieve(_ASSET_URL)
        assert route.calls.last.request.headers["User-Agent"] == "jcrpack-test/1.0"

    def test_fetch_status_error_becomes_retrieval_error(self) -> None:
        with respx.mock:
            respx.get(_ASSET_URL).mock(return_value=httpx.Response(503))
            with HttpRetriever() as retriever, pytest.raises(RetrievalError) as excinfo:
                retriever.fetch(_ASSET_URL)
        assert excinfo.value.url == _ASSET_URL
        assert excinfo.value.reason == "HTTP 503"

    def test_retrieve_returns_none_and_logs_on_status_error(self, caplog) -> None:
        with respx.mock:
            respx.get(_ASSET_URL).mock(return_value=httpx.Response(404))
            with caplog.at_level(logging.WARNING, logger="jcrpack.scraper.fetcher"):
                with HttpRetriever() as retriever:
                    assert retriever.retrieve(_ASSET_URL) is None
        assert "HTTP 404" in caplog.text

    def test_retrieve_returns_none_on_transport_error(self) -> None:
        with respx.mock:
            respx.get(_ASSET_URL).mock(side_effect=httpx.ConnectError("boom"))
            with HttpRetriever() as retriever:
                assert retriever.retrieve(_ASSET_URL) is None

    def test_external_client_is_not_closed(self) -> None:
        client = httpx.Client()
        with HttpRetriever(client):
            pass
        assert client.is_closed is False
        client.close()
