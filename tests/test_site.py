"""Tests for built site discovery and stamping."""

import logging
from pathlib import Path

import pytest
from sitecanon.audit import audit_site
from sitecanon.core.types import URLPath
from sitecanon.environment import DocumentEnvironment
from sitecanon.site import SitePage, discover_pages, stamp_page, url_path_for

from tests.conftest import ORIGIN, PAGE_HTML


def _write(root: Path, relative: str, html: str = PAGE_HTML) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path


class TestUrlPathFor:
    """Tests for url_path_for()."""

    @pytest.mark.parametrize(
        ("relative", "expected"),
        [
            ("index.html", "/"),
            ("search.html", "/search"),
            ("documents/index.html", "/documents"),
            ("documents/intro.html", "/documents/intro"),
            ("comparisons/a-vs-b/index.html", "/comparisons/a-vs-b"),
        ],
    )
    def test__maps_file_to_url_path(self, relative: str, expected: str) -> None:
        """Index files map to their directory, other files drop the extension."""
        assert url_path_for(Path(relative)) == expected


class TestDiscoverPages:
    """Tests for discover_pages()."""

    def test__html_files__discovered_sorted(self, site_dir: Path) -> None:
        """Only HTML files are returned, sorted by source path."""
        _write(site_dir, "index.html")
        _write(site_dir, "documents/intro.html")
        _write(site_dir, "comparisons/a-vs-b.html")
        (site_dir / "style.css").write_text("body {}")

        pages = discover_pages(site_dir)

        assert [page.path for page in pages] == [
            "/comparisons/a-vs-b",
            "/documents/intro",
            "/",
        ]
        assert all(page.source_path.suffix == ".html" for page in pages)

    def test__empty_site__returns_empty(self, site_dir: Path) -> None:
        """Site without pages yields an empty list."""
        assert discover_pages(site_dir) == []

    def test__missing_dir__raises_error(self, tmp_path: Path) -> None:
        """Missing site directory raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Site directory not found"):
            discover_pages(tmp_path / "missing")


class TestStampPage:
    """Tests for stamp_page()."""

    def test__page_without_canonical__stamped(self, site_dir: Path) -> None:
        """Page without a canonical link gets one for its own path."""
        source = _write(site_dir, "documents/intro.html")
        page = SitePage(path=URLPath("/documents/intro"), source_path=source)

        changed = stamp_page(page, ORIGIN)

        assert changed
        env = DocumentEnvironment(source.read_text(encoding="utf-8"))
        assert env.get_canonical_href() == f"{ORIGIN}/documents/intro"
        assert env.canonical_count() == 1

    def test__stale_canonical__replaced(self, site_dir: Path) -> None:
        """Canonical link pointing elsewhere is rewritten."""
        html = PAGE_HTML.replace(
            "</head>",
            '<link rel="canonical" href="https://example.com/documents/intro">\n</head>',
        )
        source = _write(site_dir, "documents/intro.html", html)
        page = SitePage(path=URLPath("/documents/intro"), source_path=source)

        assert stamp_page(page, ORIGIN)

        env = DocumentEnvironment(source.read_text(encoding="utf-8"))
        assert env.get_canonical_href() == f"{ORIGIN}/documents/intro"
        assert env.canonical_count() == 1

    def test__duplicate_canonicals__collapsed_and_audit_passes(self, site_dir: Path) -> None:
        """Matching canonical with a duplicate is repaired so the audit passes."""
        html = PAGE_HTML.replace(
            "</head>",
            f'<link rel="canonical" href="{ORIGIN}/search">\n'
            '<link rel="canonical" href="https://example.com/search">\n</head>',
        )
        source = _write(site_dir, "search.html", html)
        page = SitePage(path=URLPath("/search"), source_path=source)

        assert stamp_page(page, ORIGIN)

        report = audit_site(site_dir, ORIGIN)
        assert report.ok
        assert report.pages[0].duplicates == 1

    def test__invalid_url__page_left_alone(
        self, site_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Page whose canonical URL is invalid is neither rewritten nor reported."""
        html = PAGE_HTML.replace("<h1>Page</h1>", "<h1>Page</h1><br/>&nbsp;")
        source = _write(site_dir, "my page.html", html)
        page = SitePage(path=URLPath("/my page"), source_path=source)

        with caplog.at_level(logging.WARNING, logger="sitecanon.environment"):
            changed = stamp_page(page, ORIGIN)

        assert not changed
        assert source.read_text(encoding="utf-8") == html
        assert f"Invalid canonical URL: {ORIGIN}/my page" in caplog.text

    def test__already_stamped__unchanged(self, site_dir: Path) -> None:
        """Stamping twice leaves the file as written by the first pass."""
        source = _write(site_dir, "index.html")
        page = SitePage(path=URLPath("/"), source_path=source)
        stamp_page(page, ORIGIN)
        stamped = source.read_text(encoding="utf-8")

        assert not stamp_page(page, ORIGIN)
        assert source.read_text(encoding="utf-8") == stamped

    def test__dry_run__does_not_write(self, site_dir: Path) -> None:
        """Dry run reports the change without touching the file."""
        source = _write(site_dir, "search.html")
        page = SitePage(path=URLPath("/search"), source_path=source)

        assert stamp_page(page, ORIGIN, dry_run=True)
        assert source.read_text(encoding="utf-8") == PAGE_HTML

    def test__no_base_url__uses_fallback(self, site_dir: Path) -> None:
        """Without a base URL the fallback origin is stamped."""
        from sitecanon.manager import FALLBACK_ORIGIN

        source = _write(site_dir, "search.html")
        page = SitePage(path=URLPath("/search"), source_path=source)

        stamp_page(page)

        env = DocumentEnvironment(source.read_text(encoding="utf-8"))
        assert env.get_canonical_href() == f"{FALLBACK_ORIGIN}/search"
