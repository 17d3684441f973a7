"""Tests for the FileVault XML templates."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from bs4 import BeautifulSoup

from jcrpack.jcr.templates import asset_xml, filter_xml, iso_timestamp, properties_xml


def test_asset_xml_format():
    soup = BeautifulSoup(asset_xml("image/jpeg"), "xml")
    metadata = soup.find("metadata")
    assert metadata["dc:format"] == "image/jpeg"


def test_asset_xml_without_mime_type():
    assert 'dc:format=""' in asset_xml(None)


def test_filter_xml_one_rule_per_path():
    xml = filter_xml(["/content/s/p", "/content/dam/s/a_q1&x.png"])
    soup = BeautifulSoup(xml, "xml")
    roots = [f["root"] for f in soup.find_all("filter")]
    assert roots == ["/content/s/p", "/content/dam/s/a_q1&x.png"]


def test_filter_xml_empty():
    soup = BeautifulSoup(filter_xml([]), "xml")
    assert soup.find("workspaceFilter") is not None
    assert soup.find_all("filter") == []


def test_iso_timestamp_converts_to_utc():
    moment = datetime(2024, 1, 2, 3, 4, 5, 678900, tzinfo=timezone(timedelta(hours=2)))
    assert iso_timestamp(moment) == "2024-01-02T01:04:05.678Z"


def test_properties_xml_escapes_name():
    xml = properties_xml("a&b", datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert "<entry key='name'>a&amp;b</entry>" in xml
    assert "<entry key='group'>my_packages</entry>" in xml
