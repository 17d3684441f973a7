"""Site and package naming.

``sanitize`` turns an arbitrary identifier into a repository node label
made only of ``[a-z0-9_-]``.  Characters are remapped through a fixed
256-entry table; anything outside Latin-1 becomes the placeholder.
"""

from __future__ import annotations

import logging
from typing import Sequence
from urllib.parse import urlsplit

from jcrpack.errors import ConfigurationError

logger = logging.getLogger(__name__)

PLACEHOLDER = "_"
MAX_NAME_LENGTH = 64
# Placeholders are dropped once this many real characters have been written.
PLACEHOLDER_CUTOFF = 16

_LATIN1_FOLDS = {
    "à": "a", "á": "a", "â": "a", "ã": "a", "ä": "a", "å": "a", "æ": "ae",
    "ç": "c", "è": "e", "é": "e", "ê": "e", "ë": "e", "ì": "i", "í": "i",
    "î": "i", "ï": "i", "ð": "d", "ñ": "n", "ò": "o", "ó": "o", "ô": "o",
    "õ": "o", "ö": "o", "ø": "o", "ù": "u", "ú": "u", "û": "u", "ü": "u",
    "ý": "y", "þ": "th", "ÿ": "y", "ß": "ss",
}


def _build_char_map() -> tuple[str, ...]:
    table = []
    for code in range(256):
        ch = chr(code)
        if "a" <= ch <= "z" or "0" <= ch <= "9" or ch == "-":
            table.append(ch)
        elif "A" <= ch <= "Z":
            table.append(ch.lower())
        elif ch in _LATIN1_FOLDS:
            table.append(_LATIN1_FOLDS[ch])
        elif ch.lower() in _LATIN1_FOLDS and code >= 0xC0:
            # upper-case Latin-1 letters (À..Þ) fold like their lower-case form
            table.append(_LATIN1_FOLDS[ch.lower()])
        else:
            table.append(PLACEHOLDER)
    return tuple(table)


_CHAR_MAP: tuple[str, ...] = _build_char_map()


def sanitize(raw: str) -> str:
    """Return *raw* as a valid repository node label.

    At most one placeholder is written per run of unmapped characters, none
    at the start, and none once ``PLACEHOLDER_CUTOFF`` real characters have
    been produced.  Suppressed placeholders still count toward the
    ``MAX_NAME_LENGTH`` budget.
    """
    out: list[str] = []
    consumed = 0
    real = 0
    last_was_placeholder = True  # no leading placeholder
    for ch in raw or "":
        if consumed >= MAX_NAME_LENGTH:
            break
        code = ord(ch)
        replacement = _CHAR_MAP[code] if code < 256 else PLACEHOLDER
        if replacement == PLACEHOLDER:
            consumed += 1
            if last_was_placeholder or real >= PLACEHOLDER_CUTOFF:
                continue
            out.append(PLACEHOLDER)
            last_was_placeholder = True
            continue
        consumed += len(replacement)
        real += len(replacement)
        out.append(replacement)
        last_was_placeholder = False
    return "".join(out)[:MAX_NAME_LENGTH]


def site_name_from(value: str) -> str:
    """Derive the sanitized site name from a configuration value.

    A URL contributes its second path segment (``https://host/content/<site>``
    → ``<site>``); any other value is sanitized as-is.

    Raises:
        ConfigurationError: If no usable name can be derived.
    """
    value = (value or "").strip()
    if not value:
        raise ConfigurationError("No site name configured.")

    candidate = value
    parts = urlsplit(value)
    if parts.scheme and parts.netloc:
        segments = parts.path.split("/")
        if len(segments) < 3 or not segments[2]:
            raise ConfigurationError(
                f"Site URL {value!r} has no site segment (expected /<root>/<site>/...)."
            )
        candidate = segments[2]

    name = sanitize(candidate)
    if not name:
        raise ConfigurationError(f"Site name {value!r} sanitizes to an empty label.")
    logger.debug("Site name %r derived from %r", name, value)
    return name


def package_name(page_paths: Sequence[str], site_name: str) -> str:
    """Name of the package: the site, plus the page name for single-page packages.

    The page name is sanitized like the site name.  A page whose last segment
    sanitizes to nothing (a trailing slash, say) adds no suffix.
    """
    if len(page_paths) == 1:
        page_name = sanitize(page_paths[0].split("/")[-1])
        if page_name:
            return f"{site_name}_{page_name}"
    return site_name
