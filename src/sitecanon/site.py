"""Built site discovery and canonical stamping.

Maps pre-rendered HTML files to the URL paths they are served under and
installs canonical links into them through the manager.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from sitecanon.core.types import URLPath
from sitecanon.environment import DocumentEnvironment
from sitecanon.manager import CanonicalURLManager

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"


@dataclass(frozen=True)
class SitePage:
    """Built HTML page and its URL path."""

    path: URLPath
    source_path: Path


def url_path_for(relative: Path) -> URLPath:
    """Map a file path relative to the site root to its URL path.

    "index.html" maps to "/", "guide/index.html" to "/guide" and
    "guide/setup.html" to "/guide/setup".
    """
    parts = list(relative.parts)
    if parts and parts[-1] == INDEX_FILENAME:
        parts.pop()
    elif parts:
        parts[-1] = relative.stem
    return URLPath("/" + "/".join(parts))


def discover_pages(root: Path) -> list[SitePage]:
    """Find built HTML pages under a site root.

    Args:
        root: Site output directory

    Returns:
        Pages sorted by source path

    Raises:
        FileNotFoundError: If root is not a directory
    """
    if not root.is_dir():
        raise FileNotFoundError(f"Site directory not found: {root}")

    return [
        SitePage(path=url_path_for(source.relative_to(root)), source_path=source)
        for source in sorted(root.rglob("*.html"))
        if source.is_file()
    ]


def stamp_page(page: SitePage, base_url: str | None = None, *, dry_run: bool = False) -> bool:
    """Install the canonical link into a built page.

    Args:
        page: Page to stamp
        base_url: Site origin (default: fallback origin)
        dry_run: Compute the change without writing the file

    Returns:
        True if the page content changed
    """
    original = page.source_path.read_text(encoding="utf-8")
    env = DocumentEnvironment(original)
    manager = CanonicalURLManager(env, base_url=base_url)

    expected = manager.generate_canonical(page.path)
    if manager.get_current_canonical() == expected and env.canonical_count() == 1:
        return False

    manager.update_canonical(page.path)
    if manager.get_current_canonical() != expected:
        return False

    updated = env.html
    if updated == original:
        return False

    if not dry_run:
        page.source_path.write_text(updated, encoding="utf-8")
    logger.info(f"Stamped {page.source_path} -> {manager.get_current_canonical()}")
    return True
