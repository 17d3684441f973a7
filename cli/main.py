"""jcrpack CLI — build FileVault content packages from fetched pages.

Usage:
    python cli/main.py --help

Commands:
    build     → write the package (expanded tree + zip)
    paths     → print the filter paths without fetching anything
    inspect   → print each page's jcr:content properties and children
    sanitize  → print the site name a value maps to
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from jcrpack.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import logging
from typing import List, Optional

import typer

from jcrpack.config import settings
from jcrpack.errors import JcrPackError
from jcrpack.jcr import BuildContext, build_package, filter_paths, sanitize, site_name_from, summarize_page
from jcrpack.scraper import HttpRetriever, RawPage
from jcrpack.storage import DirectorySink

app = typer.Typer(
    name="jcrpack",
    help="Package fetched pages and their assets for a JCR content repository.",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_pages(pages_file: Path) -> List[RawPage]:
    """Read a JSON list of ``{path, data, url}`` page objects."""
    try:
        raw = json.loads(pages_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        typer.echo(f"❌ Cannot read pages from {pages_file}: {exc}")
        raise typer.Exit(code=1)
    if isinstance(raw, dict):
        raw = raw.get("pages", [])
    try:
        return [RawPage.from_dict(item) for item in raw]
    except (KeyError, TypeError) as exc:
        typer.echo(f"❌ Malformed page entry in {pages_file}: {exc}")
        raise typer.Exit(code=1)


def _site_or_exit(site: Optional[str]) -> str:
    value = site or settings.site
    if not value:
        typer.echo("❌ No site given. Use --site or set JCR_SITE.")
        raise typer.Exit(code=1)
    return value


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("build")
def build(
    pages_file: Path = typer.Argument(..., help="JSON file with the fetched pages."),
    site: Optional[str] = typer.Option(None, help="Site name or site URL (default: $JCR_SITE)."),
    out: Optional[Path] = typer.Option(None, help="Output directory (default: $JCR_OUTPUT_DIR)."),
    annotate: bool = typer.Option(
        settings.annotate_external,
        "--annotate/--no-annotate",
        help="Probe external references for their mime type.",
    ),
) -> None:
    """Build the content package and write it to the output directory."""
    pages = _load_pages(pages_file)
    site_value = _site_or_exit(site)
    sink = DirectorySink(out or settings.output_dir)

    typer.echo(f"[build] Packaging {len(pages)} page(s) …")
    try:
        with HttpRetriever() as retriever:
            manifest = build_package(
                pages, site_value, sink, retriever, annotate_external=annotate
            )
    except JcrPackError as exc:
        typer.echo(f"❌ Error: {exc}")
        raise typer.Exit(code=1)

    if manifest is None:
        typer.echo("[build] No pages, nothing to do.")
        return
    typer.echo(f"[build] Package : {manifest.package_name}")
    typer.echo(f"[build] Paths   : {len(manifest.filter_paths)}")
    typer.echo(f"[build] Archive : {sink.output_dir / manifest.archive_path}")


@app.command("paths")
def paths_cmd(
    pages_file: Path = typer.Argument(..., help="JSON file with the fetched pages."),
    site: Optional[str] = typer.Option(None, help="Site name or site URL (default: $JCR_SITE)."),
) -> None:
    """Print the repository paths the package would claim, without fetching."""
    pages = _load_pages(pages_file)
    try:
        ctx = BuildContext(raw_pages=pages, site_name=site_name_from(_site_or_exit(site)))
        for path in filter_paths(ctx):
            typer.echo(path)
    except JcrPackError as exc:
        typer.echo(f"❌ Error: {exc}")
        raise typer.Exit(code=1)


@app.command("inspect")
def inspect_cmd(
    pages_file: Path = typer.Argument(..., help="JSON file with the fetched pages."),
) -> None:
    """Show the jcr:content properties and child nodes of every page."""
    pages = _load_pages(pages_file)
    for page in pages:
        try:
            properties, children = summarize_page(page.data)
        except JcrPackError as exc:
            typer.echo(f"❌ {page.path}: {exc}")
            raise typer.Exit(code=1)
        typer.echo(page.path)
        typer.echo(f"  properties : {', '.join(properties) or '(none)'}")
        typer.echo(f"  children   : {', '.join(children) or '(none)'}")


@app.command("sanitize")
def sanitize_cmd(
    value: str = typer.Argument(..., help="Raw site identifier."),
) -> None:
    """Print *value* as a repository node name."""
    typer.echo(sanitize(value))


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
