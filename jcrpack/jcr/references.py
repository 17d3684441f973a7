"""Classification of ``fileReference`` values found in page markup.

A reference is either bundled with the package (it resolves to the page's
own origin) or left alone.  Recognised shapes, checked in order:

1. ``http(s)://…`` absolute URLs in any letter case (and protocol-relative
   ``//host/…``)
2. ``/content/dam/…`` references to an existing DAM tree
3. ``/…`` site-absolute paths
4. ``./…`` paths relative to the page's directory

Anything else (opaque ids, ``../`` paths, ``data:`` URIs, …) is kept as-is.
Resolved paths have their ``.`` and ``..`` segments removed.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urljoin, urlsplit

from jcrpack.jcr.models import ResolvedAsset
from jcrpack.jcr.paths import asset_path

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _origin(url: str) -> tuple[str, str, Optional[int]]:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    return scheme, (parts.hostname or ""), parts.port or _DEFAULT_PORTS.get(scheme)


def _included(reference: str, url: str, site_name: str) -> ResolvedAsset:
    jcr_path = asset_path(url, site_name)
    return ResolvedAsset(
        file_reference=reference,
        url=url,
        jcr_path=jcr_path,
        processed_file_ref=jcr_path,
        include=True,
    )


def _kept(reference: Optional[str], url: Optional[str] = None) -> ResolvedAsset:
    return ResolvedAsset(file_reference=reference, url=url, processed_file_ref=reference)


def _resolve(reference: str, page_url: str, site_name: str) -> ResolvedAsset:
    if reference.startswith("//"):
        scheme = urlsplit(page_url).scheme or "https"
        absolute = f"{scheme}:{reference}"
        if _origin(absolute) == _origin(page_url):
            return _included(reference, absolute, site_name)
        return _kept(reference, absolute)

    parts = urlsplit(reference)
    if parts.scheme in _DEFAULT_PORTS and parts.netloc:
        if _origin(reference) == _origin(page_url):
            return _included(reference, reference, site_name)
        logger.debug("External reference %r kept as-is", reference)
        return _kept(reference, reference)

    # /content/dam/... and other site-absolute paths resolve the same way;
    # asset_path() tells them apart.
    if reference.startswith(("/", "./")):
        return _included(reference, urljoin(page_url, reference), site_name)

    logger.debug("Unrecognised reference %r kept as-is", reference)
    return _kept(reference)


def classify(reference: Optional[str], page_url: str, site_name: str) -> ResolvedAsset:
    """Classify *reference* as found on the page at *page_url*.

    Args:
        reference: Raw ``fileReference`` attribute value.
        page_url: Absolute URL of the page carrying the reference.
        site_name: Sanitized site name used for repository paths.

    Returns:
        A :class:`ResolvedAsset`.  Bundled references come back with
        ``include=True`` and a repository path; external absolute URLs keep
        their ``url`` so a mime type can still be probed.  References that
        do not parse as URLs (bad port, broken IPv6 host) are kept as-is.
    """
    if not reference:
        return _kept(reference)
    try:
        return _resolve(reference, page_url, site_name)
    except ValueError as exc:
        logger.debug("Malformed reference %r kept as-is: %s", reference, exc)
        return _kept(reference)


def processed_file_reference(reference: Optional[str], page_url: str, site_name: str) -> Optional[str]:
    """The value *reference* is rewritten to in the exported markup."""
    return classify(reference, page_url, site_name).processed_file_ref
