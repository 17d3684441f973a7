"""Tests for fileReference classification."""

from __future__ import annotations

import pytest

from jcrpack.jcr.references import classify, processed_file_reference

PAGE_1 = "https://www.brand.com/1/2/page.html"
PAGE_2 = "https://www.brand.com/3/4/page.html"
SITE = "repo"


class TestIncludedReferences:
    @pytest.mark.parametrize(
        "page_url, reference, url, jcr_path",
        [
            (
                PAGE_1,
                "./a/b/media_0.png?param1=value1&param2=value2",
                "https://www.brand.com/1/2/a/b/media_0.png?param1=value1&param2=value2",
                "/content/dam/repo/1/2/a/b/media_0_param1value1_param2value2.png",
            ),
            (
                PAGE_1,
                "/a/b/media_1.png",
                "https://www.brand.com/a/b/media_1.png",
                "/content/dam/repo/a/b/media_1.png",
            ),
            (
                PAGE_1,
                "/a/b/media_1a",
                "https://www.brand.com/a/b/media_1a",
                "/content/dam/repo/a/b/media_1a",
            ),
            (
                PAGE_2,
                "https://www.brand.com/a/b/media_2.png?param1=value1&param2=value2",
                "https://www.brand.com/a/b/media_2.png?param1=value1&param2=value2",
                "/content/dam/repo/a/b/media_2_param1value1_param2value2.png",
            ),
            (
                PAGE_2,
                "/content/dam/repo/a/b/media_3.png?param1=value1&param2=value2",
                "https://www.brand.com/content/dam/repo/a/b/media_3.png?param1=value1&param2=value2",
                "/content/dam/repo/a/b/media_3.png",
            ),
            (
                PAGE_2,
                "/content/dam/site2/a/b/media_4.png?param1=value1",
                "https://www.brand.com/content/dam/site2/a/b/media_4.png?param1=value1",
                "/content/dam/repo/a/b/media_4.png",
            ),
        ],
    )
    def test_bundled(self, page_url: str, reference: str, url: str, jcr_path: str) -> None:
        asset = classify(reference, page_url, SITE)
        assert asset.include is True
        assert asset.file_reference == reference
        assert asset.url == url
        assert asset.jcr_path == jcr_path
        assert asset.processed_file_ref == jcr_path
        assert asset.content is None and asset.mime_type is None

    def test_relative_reference_from_testable_example(self) -> None:
        asset = classify("./a/b/x.png?p=1", "https://h/1/2/page.html", "s")
        assert asset.jcr_path == "/content/dam/s/1/2/a/b/x_p1.png"

    def test_default_port_is_same_origin(self) -> None:
        asset = classify("https://www.brand.com:443/a.png", PAGE_1, SITE)
        assert asset.include is True
        assert asset.jcr_path == "/content/dam/repo/a.png"

    def test_host_comparison_ignores_case(self) -> None:
        assert classify("https://WWW.Brand.com/a.png", PAGE_1, SITE).include is True

    def test_protocol_relative_same_host(self) -> None:
        asset = classify("//www.brand.com/img/a.png", PAGE_1, SITE)
        assert asset.include is True
        assert asset.url == "https://www.brand.com/img/a.png"
        assert asset.processed_file_ref == "/content/dam/repo/img/a.png"

    def test_dot_segments_are_resolved(self) -> None:
        asset = classify("./a/../b.png", "https://h/1/2/page.html", "s")
        assert asset.url == "https://h/1/2/b.png"
        assert asset.jcr_path == "/content/dam/s/1/2/b.png"

    def test_parent_segments_stop_at_the_root(self) -> None:
        asset = classify("/../../../../../../evil.png", PAGE_1, SITE)
        assert asset.include is True
        assert asset.url == "https://www.brand.com/evil.png"
        assert asset.jcr_path == "/content/dam/repo/evil.png"

    def test_scheme_is_case_insensitive(self) -> None:
        asset = classify("HTTPS://www.brand.com/a.png", PAGE_1, SITE)
        assert asset.include is True
        assert asset.jcr_path == "/content/dam/repo/a.png"


class TestKeptReferences:
    def test_other_origin_is_external(self) -> None:
        reference = "https://www.mysite.com/a/b/media_2.png?param1=value1&param2=value2"
        asset = classify(reference, PAGE_2, SITE)
        assert asset.include is False
        assert asset.is_external is True
        assert asset.url == reference
        assert asset.jcr_path is None
        assert asset.processed_file_ref == reference

    def test_other_scheme_is_external(self) -> None:
        asset = classify("http://www.brand.com/a.png", PAGE_1, SITE)
        assert asset.include is False
        assert asset.url == "http://www.brand.com/a.png"

    def test_protocol_relative_other_host(self) -> None:
        asset = classify("//cdn.example.net/a.png", PAGE_1, SITE)
        assert asset.include is False
        assert asset.url == "https://cdn.example.net/a.png"
        assert asset.processed_file_ref == "//cdn.example.net/a.png"

    def test_upper_case_external_url_keeps_its_url(self) -> None:
        asset = classify("HTTP://cdn.example.net/a.png", PAGE_1, SITE)
        assert asset.include is False
        assert asset.is_external is True
        assert asset.url == "HTTP://cdn.example.net/a.png"

    @pytest.mark.parametrize(
        "reference", ["http://www.brand.com:abc/x.png", "https://[::1/x.png", "//www.brand.com:99999/x.png"]
    )
    def test_malformed_urls_are_left_alone(self, reference: str) -> None:
        asset = classify(reference, PAGE_1, SITE)
        assert asset.include is False
        assert asset.url is None
        assert asset.jcr_path is None
        assert asset.processed_file_ref == reference

    @pytest.mark.parametrize("reference", [None, ""])
    def test_empty(self, reference) -> None:
        asset = classify(reference, PAGE_1, SITE)
        assert asset.include is False
        assert asset.url is None
        assert asset.jcr_path is None
        assert asset.processed_file_ref == reference

    @pytest.mark.parametrize(
        "reference", ["urn:aaid:aem:1234", "media.png", "../up/a.png", "data:image/png;base64,AAAA"]
    )
    def test_unrecognised_shapes_are_left_alone(self, reference: str) -> None:
        asset = classify(reference, PAGE_1, SITE)
        assert asset.include is False
        assert asset.is_external is False
        assert asset.url is None
        assert asset.processed_file_ref == reference


def test_processed_file_reference() -> None:
    assert processed_file_reference("/a/b/media_1.png", PAGE_1, SITE) == "/content/dam/repo/a/b/media_1.png"
    assert processed_file_reference("urn:x", PAGE_1, SITE) == "urn:x"
