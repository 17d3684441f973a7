"""JCR content package engine — path mapping, reference rewriting, assembly."""

from jcrpack.jcr.assets import collect_assets, discover_assets
from jcrpack.jcr.context import BuildContext
from jcrpack.jcr.markup import find_references, rewrite, summarize_page
from jcrpack.jcr.models import JcrPage, PackageManifest, ResolvedAsset
from jcrpack.jcr.naming import package_name, sanitize, site_name_from
from jcrpack.jcr.package import build_package, filter_paths
from jcrpack.jcr.pages import jcr_pages
from jcrpack.jcr.paths import asset_path, page_path
from jcrpack.jcr.references import classify, processed_file_reference

__all__ = [
    "BuildContext",
    "JcrPage",
    "PackageManifest",
    "ResolvedAsset",
    "asset_path",
    "build_package",
    "classify",
    "collect_assets",
    "discover_assets",
    "filter_paths",
    "find_references",
    "jcr_pages",
    "package_name",
    "page_path",
    "processed_file_reference",
    "rewrite",
    "sanitize",
    "site_name_from",
    "summarize_page",
]
