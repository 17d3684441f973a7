"""Fixed FileVault XML documents: asset nodes, filter and package properties."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional
from xml.sax.saxutils import escape

AUTHOR = "anonymous"
GENERATOR = "org.apache.jackrabbit.vault:3.7.1-T20231005151103-335689a8"

FILTER_XML_PATH = "META-INF/vault/filter.xml"
PROPERTIES_XML_PATH = "META-INF/vault/properties.xml"

_ATTR_ENTITIES = {'"': "&quot;", "'": "&apos;"}

_ASSET_XML = """<?xml version="1.0" encoding="UTF-8"?>
<jcr:root xmlns:jcr="http://www.jcp.org/jcr/1.0" xmlns:dam="http://www.day.com/dam/1.0" xmlns:tiff="http://ns.adobe.com/tiff/1.0/" xmlns:nt="http://www.jcp.org/jcr/nt/1.0" xmlns:mix="http://www.jcp.org/jcr/mix/1.0" xmlns:cq="http://www.day.com/jcr/cq/1.0" xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:exif="http://ns.adobe.com/exif/1.0/"
    jcr:mixinTypes="[mix:referenceable]"
    jcr:primaryType="dam:Asset">
    <jcr:content
        jcr:primaryType="dam:AssetContent">
        <metadata
            dc:format="{mime_type}"
            jcr:mixinTypes="[cq:Taggable]"
            jcr:primaryType="nt:unstructured"/>
        <related jcr:primaryType="nt:unstructured"/>
    </jcr:content>
</jcr:root>
"""

_FILTER_XML = """<?xml version='1.0' encoding='UTF-8'?>
<workspaceFilter version='1.0'>
{filters}</workspaceFilter>
"""

_PROPERTIES_XML = """<?xml version='1.0' encoding='UTF-8'?>
<!DOCTYPE properties SYSTEM 'http://java.sun.com/dtd/properties.dtd'>
<properties>
<comment>FileVault Package Properties</comment>
<entry key='description'></entry>
<entry key='generator'>{generator}</entry>
<entry key='packageType'>content</entry>
<entry key='lastWrappedBy'>{author}</entry>
<entry key='packageFormatVersion'>2</entry>
<entry key='group'>{group}</entry>
<entry key='created'>{now}</entry>
<entry key='lastModifiedBy'>{author}</entry>
<entry key='buildCount'>1</entry>
<entry key='lastWrapped'>{now}</entry>
<entry key='version'></entry>
<entry key='dependencies'></entry>
<entry key='createdBy'>{author}</entry>
<entry key='name'>{name}</entry>
<entry key='lastModified'>{now}</entry>
</properties>
"""


def iso_timestamp(moment: datetime) -> str:
    """``2024-05-01T10:20:30.123Z`` style UTC timestamp."""
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def asset_xml(mime_type: Optional[str]) -> str:
    return _ASSET_XML.format(mime_type=escape(mime_type or "", _ATTR_ENTITIES))


def filter_xml(jcr_paths: Iterable[str]) -> str:
    filters = "".join(
        f"  <filter root='{escape(path, _ATTR_ENTITIES)}'/>\n" for path in jcr_paths
    )
    return _FILTER_XML.format(filters=filters)


def properties_xml(package_name: str, created_at: datetime, group: str = "my_packages") -> str:
    return _PROPERTIES_XML.format(
        generator=GENERATOR,
        author=AUTHOR,
        group=escape(group),
        now=iso_timestamp(created_at),
        name=escape(package_name),
    )
