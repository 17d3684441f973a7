"""Asset collection: discovery, de-duplication and retrieval.

Discovery walks the *source* markup of every page in page order and
classifies each ``fileReference``.  Only bundled assets are kept, and only
the first asset for a given repository path; later references to the same
path are still rewritten on their own page but are neither re-added nor
re-fetched.

Fetching happens afterwards, one asset at a time in discovery order, so the
de-duplication table is always settled before a request is issued.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from jcrpack.jcr.context import BuildContext
from jcrpack.jcr.markup import find_references
from jcrpack.jcr.mime import resolve_mime_type
from jcrpack.jcr.models import ResolvedAsset
from jcrpack.jcr.references import classify
from jcrpack.scraper.fetcher import Retriever

logger = logging.getLogger(__name__)


def discover_assets(ctx: BuildContext) -> List[ResolvedAsset]:
    """Return the unique bundled assets of *ctx*'s pages, without fetching.

    The result is memoized on *ctx*.
    """
    if ctx.assets is not None:
        return ctx.assets

    assets: List[ResolvedAsset] = []
    for page in ctx.raw_pages:
        for reference in find_references(page.data):
            asset = classify(reference, page.url, ctx.site_name)
            if not asset.include:
                continue
            if asset.jcr_path in ctx.seen_assets:
                logger.debug("Duplicate asset %s (from %r)", asset.jcr_path, reference)
                continue
            ctx.seen_assets[asset.jcr_path] = asset
            assets.append(asset)

    logger.info("Discovered %d unique asset(s) across %d page(s)", len(assets), len(ctx.raw_pages))
    ctx.assets = assets
    return assets


def fetch_asset(asset: ResolvedAsset, retriever: Retriever) -> None:
    """Fill *asset*'s content and mime type; both stay ``None`` on failure."""
    resource = retriever.retrieve(asset.url)
    if resource is None:
        logger.warning("Asset %s will be packaged without content", asset.jcr_path)
        asset.content = None
        asset.mime_type = None
        return
    asset.content = resource.content
    asset.mime_type = resolve_mime_type(asset.url, resource.content_type)


def collect_assets(ctx: BuildContext, retriever: Optional[Retriever] = None) -> List[ResolvedAsset]:
    """Discover the bundled assets and fetch each of them once.

    Runs at most once per build: later calls return the same list.
    """
    assets = discover_assets(ctx)
    retriever = retriever or ctx.retriever
    if ctx.fetched or retriever is None:
        return assets

    for asset in assets:
        fetch_asset(asset, retriever)
    ctx.fetched = True
    return assets
