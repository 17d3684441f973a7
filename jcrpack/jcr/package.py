"""Package assembly.

``build_package`` orchestrates a full build from fetched pages to a
FileVault zip:

    site name → pages (map + rewrite) → assets (discover + fetch)
    → filter.xml → properties.xml → zip

Every entry is written twice: into the zip and, expanded, into the sink
under ``jcr/``.  Steps run strictly in that order; an asset that cannot be
fetched is packaged without content, any other error aborts the build.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Union

from jcrpack.config import settings
from jcrpack.jcr.assets import collect_assets, discover_assets
from jcrpack.jcr.context import BuildContext
from jcrpack.jcr.models import PackageManifest
from jcrpack.jcr.naming import package_name, site_name_from
from jcrpack.jcr.pages import jcr_pages
from jcrpack.jcr.paths import content_entry_path, rendition_entry_path
from jcrpack.jcr.templates import (
    FILTER_XML_PATH,
    PROPERTIES_XML_PATH,
    asset_xml,
    filter_xml,
    properties_xml,
)
from jcrpack.scraper.fetcher import Retriever
from jcrpack.storage.archive import PackageArchive
from jcrpack.storage.filesystem import FileSink

logger = logging.getLogger(__name__)

OUTPUT_PREFIX = "jcr"


class _PackageWriter:
    """Writes every entry to both the archive and the sink."""

    def __init__(self, sink: FileSink, prefix: str = OUTPUT_PREFIX) -> None:
        self.sink = sink
        self.prefix = prefix
        self.archive = PackageArchive()

    def emit(self, path: str, content: Union[str, bytes, None]) -> None:
        self.archive.write_entry(path, content)
        self.sink.save(f"{self.prefix}/{path}", content)

    def finish(self, archive_name: str) -> str:
        target = f"{self.prefix}/{archive_name}"
        self.sink.save(target, self.archive.finalize())
        return target


def filter_paths(ctx: BuildContext) -> List[str]:
    """Repository paths claimed by the package: pages first, then assets."""
    paths = [page.jcr_path for page in jcr_pages(ctx)]
    paths.extend(asset.jcr_path for asset in discover_assets(ctx))
    return paths


def build_package(
    pages: Sequence,
    site: str,
    sink: FileSink,
    retriever: Optional[Retriever] = None,
    *,
    annotate_external: Optional[bool] = None,
    group: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Optional[PackageManifest]:
    """Build the content package for *pages* and persist it through *sink*.

    Args:
        pages: :class:`~jcrpack.scraper.models.RawPage` objects, in order.
        site: Site name source, either a raw identifier or a site URL.
        sink: Destination for the expanded entries and the final zip.
        retriever: Fetches asset bodies; without one, assets are packaged
            with empty content.
        annotate_external: Probe external references for a mime type.
            Defaults to ``settings.annotate_external``.
        group: Package group, defaults to ``settings.package_group``.
        now: Build timestamp, defaults to the current UTC time.

    Returns:
        The :class:`PackageManifest`, or ``None`` when *pages* is empty.

    Raises:
        ConfigurationError: If *site* does not yield a site name.
        MarkupError: If a page's markup cannot be parsed.
    """
    if not pages:
        logger.info("No pages given, nothing to package")
        return None

    site_name = site_name_from(site)
    name = package_name([page.path for page in pages], site_name)
    ctx = BuildContext(
        raw_pages=list(pages),
        site_name=site_name,
        retriever=retriever,
        annotate_external=(
            settings.annotate_external if annotate_external is None else annotate_external
        ),
    )
    created_at = now or datetime.now(timezone.utc)
    writer = _PackageWriter(sink)
    logger.info("Building package %r for site %r", name, site_name)

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------
    for page in jcr_pages(ctx):
        writer.emit(page.content_xml_path, page.processed_xml)

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------
    for asset in collect_assets(ctx):
        writer.emit(content_entry_path(asset.jcr_path), asset_xml(asset.mime_type))
        writer.emit(rendition_entry_path(asset.jcr_path), asset.content)

    # ------------------------------------------------------------------
    # filter.xml & properties.xml
    # ------------------------------------------------------------------
    paths = filter_paths(ctx)
    writer.emit(FILTER_XML_PATH, filter_xml(paths))
    writer.emit(
        PROPERTIES_XML_PATH,
        properties_xml(name, created_at, group or settings.package_group),
    )

    archive_path = writer.finish(f"{name}.zip")
    logger.info(
        "Package %s written: %d page(s), %d asset(s)",
        archive_path,
        len(ctx.pages or []),
        len(ctx.assets or []),
    )
    return PackageManifest(
        package_name=name,
        created_at=created_at,
        filter_paths=paths,
        archive_path=archive_path,
    )
