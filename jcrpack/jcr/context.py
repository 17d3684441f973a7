"""Per-build state shared by the packaging steps.

One :class:`BuildContext` is created for every package build.  It memoizes
the page and asset lists and owns the asset de-duplication table, so two
builds never see each other's results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from jcrpack.jcr.models import JcrPage, ResolvedAsset
from jcrpack.scraper.fetcher import Retriever
from jcrpack.scraper.models import RawPage


@dataclass
class BuildContext:
    raw_pages: List[RawPage]
    site_name: str
    retriever: Optional[Retriever] = None
    annotate_external: bool = True

    pages: Optional[List[JcrPage]] = None
    assets: Optional[List[ResolvedAsset]] = None
    fetched: bool = False
    # jcr_path -> first asset seen with that path
    seen_assets: Dict[str, ResolvedAsset] = field(default_factory=dict)
    # external url -> probed mime type
    external_mime_types: Dict[str, Optional[str]] = field(default_factory=dict)
