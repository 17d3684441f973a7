"""Page mapping: repository path, rewritten markup and entry path."""

from __future__ import annotations

import logging
from typing import List, Optional

from jcrpack.jcr.context import BuildContext
from jcrpack.jcr.markup import rewrite
from jcrpack.jcr.models import JcrPage
from jcrpack.jcr.paths import content_entry_path, page_path
from jcrpack.scraper.fetcher import Retriever
from jcrpack.scraper.models import RawPage

logger = logging.getLogger(__name__)


def build_page(
    raw: RawPage,
    site_name: str,
    retriever: Optional[Retriever] = None,
    mime_cache: Optional[dict[str, Optional[str]]] = None,
) -> JcrPage:
    jcr_path = page_path(raw.path, site_name)
    return JcrPage(
        path=raw.path,
        url=raw.url,
        source_xml=raw.data,
        processed_xml=rewrite(raw.data, raw.url, site_name, retriever, mime_cache),
        jcr_path=jcr_path,
        content_xml_path=content_entry_path(jcr_path),
    )


def jcr_pages(ctx: BuildContext) -> List[JcrPage]:
    """Map and rewrite every page of the build (memoized on *ctx*)."""
    if ctx.pages is None:
        retriever = ctx.retriever if ctx.annotate_external else None
        ctx.pages = [
            build_page(raw, ctx.site_name, retriever, ctx.external_mime_types)
            for raw in ctx.raw_pages
        ]
        logger.info("Mapped %d page(s) under /content/%s", len(ctx.pages), ctx.site_name)
    return ctx.pages
