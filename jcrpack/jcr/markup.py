"""Page markup handling: reference lookup, rewriting and page summaries."""

from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup
from lxml import etree

from jcrpack.errors import MarkupError
from jcrpack.jcr.mime import resolve_mime_type
from jcrpack.jcr.references import classify
from jcrpack.scraper.fetcher import Retriever

logger = logging.getLogger(__name__)

FILE_REFERENCE = "fileReference"
MIME_TYPE_ANNOTATION = "fileReferenceMimeType"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse(markup: str) -> BeautifulSoup:
    """Parse JCR XML, raising :class:`MarkupError` when no document comes out."""
    try:
        soup = BeautifulSoup(markup or "", "xml")
    except (ParserRejectedMarkup, etree.XMLSyntaxError) as exc:
        raise MarkupError(f"Page markup could not be parsed: {exc}") from exc
    if soup.find() is None:
        raise MarkupError("Page markup contains no root element.")
    return soup


def _reference_elements(soup: BeautifulSoup) -> List[Tag]:
    return soup.find_all(attrs={FILE_REFERENCE: True})


def _qualified_name(tag: Tag) -> str:
    if tag.prefix and not tag.name.startswith(f"{tag.prefix}:"):
        return f"{tag.prefix}:{tag.name}"
    return tag.name


def _probe_mime_type(
    url: str, retriever: Retriever, cache: dict[str, Optional[str]]
) -> Optional[str]:
    if url not in cache:
        resource = retriever.retrieve(url)
        cache[url] = (
            resolve_mime_type(url, resource.content_type) if resource is not None else None
        )
    return cache[url]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def find_references(markup: str) -> List[str]:
    """Return every ``fileReference`` value in *markup*, in document order."""
    return [el[FILE_REFERENCE] for el in _reference_elements(_parse(markup))]


def rewrite(
    markup: str,
    page_url: str,
    site_name: str,
    retriever: Optional[Retriever] = None,
    mime_cache: Optional[dict[str, Optional[str]]] = None,
) -> str:
    """Point every ``fileReference`` in *markup* at its repository path.

    Bundled references are replaced by their ``/content/dam`` path.  External
    absolute references keep their value; when *retriever* is given they are
    probed once and annotated with ``fileReferenceMimeType`` if a mime type
    can be determined.

    Args:
        markup: The page's JCR XML.
        page_url: Absolute URL the page was fetched from.
        site_name: Sanitized site name.
        retriever: Optional retriever used for the mime type probe.
        mime_cache: Probe results shared across pages of one build.

    Raises:
        MarkupError: If *markup* does not contain a document.
    """
    soup = _parse(markup)
    cache = mime_cache if mime_cache is not None else {}

    elements = _reference_elements(soup)
    for element in elements:
        asset = classify(element[FILE_REFERENCE], page_url, site_name)
        if asset.is_external and retriever is not None:
            mime_type = _probe_mime_type(asset.url, retriever, cache)
            if mime_type:
                element[MIME_TYPE_ANNOTATION] = mime_type
        element[FILE_REFERENCE] = asset.processed_file_ref

    logger.debug("Rewrote %d reference(s) on %s", len(elements), page_url)
    return str(soup)


def summarize_page(markup: str) -> tuple[List[str], List[str]]:
    """Return ``(properties, children)`` of the page's ``jcr:content`` node.

    Properties are the node's attribute names without namespace declarations,
    sorted; children are the element names directly below it, in order.
    Both are empty when the page has no ``jcr:content`` node.
    """
    soup = _parse(markup)
    content = next(
        (tag for tag in soup.find_all(True) if _qualified_name(tag) == "jcr:content"),
        None,
    )
    if content is None:
        return [], []
    properties = sorted(name for name in content.attrs if not name.startswith("xmlns"))
    children = [
        _qualified_name(child) for child in content.children if isinstance(child, Tag)
    ]
    return properties, children
