"""CLI interface for sitecanon.

Command-line tool for computing, stamping and auditing canonical URLs.
"""

import sys
from pathlib import Path
from typing import NoReturn

import click

from sitecanon.config import Config
from sitecanon.core.page_types import PAGE_KINDS
from sitecanon.core.paths import is_origin
from sitecanon.manager import CanonicalURLManager

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover sitecanon.toml)",
)

base_url_option = click.option(
    "--base-url",
    "-u",
    default=None,
    help="Site origin, e.g. https://docs.example.com (overrides config)",
)


@click.group()
def cli() -> None:
    """sitecanon - canonical URLs for static documentation sites."""


@cli.command()
@click.argument("path")
@config_option
@base_url_option
def canonical(path: str, config_path: Path | None, base_url: str | None) -> None:
    """Print the canonical URL for PATH."""
    config = _load_config(config_path, base_url=base_url)
    manager = CanonicalURLManager(base_url=config.site.base_url)
    click.echo(manager.generate_canonical(path))


@cli.command("page-url")
@click.argument("kind", type=click.Choice(PAGE_KINDS))
@click.argument("slug", default="")
@config_option
@base_url_option
def page_url(kind: str, slug: str, config_path: Path | None, base_url: str | None) -> None:
    """Print the canonical URL for a page KIND, with SLUG for documents and comparisons."""
    if kind in ("document", "comparison") and not slug:
        _fail(f"{kind} pages require a slug")

    config = _load_config(config_path, base_url=base_url)
    manager = CanonicalURLManager(base_url=config.site.base_url)
    click.echo(manager.get_canonical_for_page_type(kind, slug))


@cli.command()
@click.argument(
    "site_dir",
    required=False,
    type=click.Path(path_type=Path, file_okay=False),
)
@config_option
@base_url_option
@click.option(
    "--dry-run",
    is_flag=True,
    help="Report pages that would change without writing them.",
)
def stamp(
    site_dir: Path | None,
    config_path: Path | None,
    base_url: str | None,
    dry_run: bool,
) -> None:
    """Install canonical links into built HTML pages."""
    from sitecanon.site import discover_pages, stamp_page

    config = _load_config(config_path, base_url=base_url, output_dir=site_dir)
    try:
        pages = discover_pages(config.site.output_dir)
    except FileNotFoundError as e:
        _fail(str(e))

    changed = 0
    for page in pages:
        if stamp_page(page, config.site.base_url, dry_run=dry_run):
            changed += 1
            click.echo(f"  -> {page.path} ({page.source_path})")

    verb = "Would update" if dry_run else "Updated"
    click.echo(f"{verb} {changed} of {len(pages)} pages")


@cli.command()
@click.argument(
    "site_dir",
    required=False,
    type=click.Path(path_type=Path, file_okay=False),
)
@config_option
@base_url_option
def audit(site_dir: Path | None, config_path: Path | None, base_url: str | None) -> None:
    """Check canonical links of built HTML pages."""
    from sitecanon.audit import audit_site

    config = _load_config(config_path, base_url=base_url, output_dir=site_dir)
    try:
        report = audit_site(config.site.output_dir, config.site.base_url)
    except FileNotFoundError as e:
        _fail(str(e))

    for page in report.failures:
        click.echo(click.style(f"{page.path} ({page.source_path})", fg="yellow"))
        for problem in page.problems():
            click.echo(f"  - {problem}")

    if not report.ok:
        click.echo(
            click.style(
                f"\n{len(report.failures)} of {len(report.pages)} pages failed the canonical audit",
                fg="red",
            ),
            err=True,
        )
        sys.exit(1)

    click.echo(click.style(f"All {len(report.pages)} pages have a valid canonical link", fg="green"))


@cli.command()
@config_option
@base_url_option
@click.option("--host", default=None, help="Host to bind to (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to (overrides config)")
def serve(
    config_path: Path | None,
    base_url: str | None,
    host: str | None,
    port: int | None,
) -> None:
    """Start the canonical lookup API server."""
    from sitecanon.server import run_server

    config = _load_config(config_path, base_url=base_url, host=host, port=port)

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Base URL: {config.site.base_url or 'fallback origin'}")

    run_server(config)


def _load_config(
    config_path: Path | None,
    *,
    base_url: str | None = None,
    output_dir: Path | None = None,
    host: str | None = None,
    port: int | None = None,
) -> Config:
    """Load configuration and apply CLI overrides, exiting on errors."""
    if base_url is not None and not is_origin(base_url):
        _fail(f"--base-url must be an origin without path or trailing slash: {base_url}")

    try:
        config = Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))
    return config.with_overrides(base_url=base_url, output_dir=output_dir, host=host, port=port)


def _fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
