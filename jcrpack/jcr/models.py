"""Dataclass models for the packaging pipeline.

These are plain Python objects.  Pages are frozen once their markup has
been rewritten; assets are filled in place by the collector when their
content is fetched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class JcrPage:
    path: str
    url: str
    source_xml: str
    processed_xml: str
    jcr_path: str
    content_xml_path: str


@dataclass
class ResolvedAsset:
    """Classification result for one ``fileReference`` value.

    ``include`` is true only for assets bundled into the package; those
    always carry a ``jcr_path`` and their ``processed_file_ref`` points at
    it.  Everything else keeps its original reference.
    """

    file_reference: str | None
    url: str | None = None
    jcr_path: str | None = None
    processed_file_ref: str | None = None
    include: bool = False
    content: bytes | None = None
    mime_type: str | None = None

    @property
    def is_external(self) -> bool:
        """An absolute reference to another origin."""
        return not self.include and self.url is not None


@dataclass(frozen=True)
class PackageManifest:
    package_name: str
    created_at: datetime
    filter_paths: list[str] = field(default_factory=list)
    archive_path: str | None = None
