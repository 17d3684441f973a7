"""Repository path mapping for pages and assets.

Pages live under ``/content/<site>`` and assets under
``/content/dam/<site>``.  Paths already inside those trees keep their shape
and only get the site segment swapped; everything else is re-rooted.
Asset query parameters are folded into the node name so that URLs which
differ only by query (e.g. responsive width hints) get distinct paths.
"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

CONTENT_ROOT = "/content/"
DAM_ROOT = "/content/dam/"
JCR_ROOT = "jcr_root"


def _replace_segment(path: str, index: int, value: str) -> str:
    segments = path.split("/")
    if index < len(segments):
        segments[index] = value
    else:
        segments.append(value)
    return "/".join(segments)


def _remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments the way URL resolution does.

    ``..`` never climbs above the root, so the result stays inside it.
    """
    absolute = path.startswith("/")
    segments = path.split("/")[1:] if absolute else path.split("/")
    output: list[str] = []
    for segment in segments:
        if segment == "..":
            if output:
                output.pop()
        elif segment != ".":
            output.append(segment)
    if segments and segments[-1] in (".", ".."):
        output.append("")
    joined = "/".join(output)
    return f"/{joined}" if absolute else joined


def _split_extension(path: str) -> tuple[str, str]:
    """Split *path* into ``(base, ".ext")``; the extension is ``""`` if absent."""
    head, _, last = path.rpartition("/")
    if "." not in last:
        return path, ""
    stem, _, ext = last.rpartition(".")
    base = f"{head}/{stem}" if head or path.startswith("/") else stem
    return base, f".{ext}"


def page_path(source_path: str, site_name: str) -> str:
    """Repository path of the page found at *source_path* on the source site."""
    source_path = _remove_dot_segments(source_path)
    if source_path.startswith(CONTENT_ROOT):
        return _replace_segment(source_path, 2, site_name)
    return f"/content/{site_name}{source_path}"


def asset_path(asset_url: str, site_name: str) -> str:
    """Repository path of the asset at the absolute URL *asset_url*."""
    parts = urlsplit(asset_url)
    base, extension = _split_extension(_remove_dot_segments(parts.path))

    if base.startswith(DAM_ROOT):
        return _replace_segment(base, 3, site_name) + extension

    suffix = "".join(
        f"_{key}{value}" for key, value in parse_qsl(parts.query, keep_blank_values=True)
    )
    # query values may carry separators of their own
    return _remove_dot_segments(f"/content/dam/{site_name}{base}{suffix}{extension}")


def content_entry_path(jcr_path: str) -> str:
    """Entry holding the node's ``.content.xml`` descriptor."""
    return f"{JCR_ROOT}{jcr_path}/.content.xml"


def rendition_entry_path(jcr_path: str) -> str:
    """Entry holding the original binary of an asset node."""
    return f"{JCR_ROOT}{jcr_path}/_jcr_content/renditions/original"
