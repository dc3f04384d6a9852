"""Shared test fixtures."""

from pathlib import Path

import pytest
from sitecanon.config import Config, ServerConfig, SiteConfig
from sitecanon.environment import DocumentEnvironment

ORIGIN = "https://example.test"

PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Page</title>
</head>
<body><h1>Page</h1></body>
</html>
"""


def make_env(path: str, html: str = PAGE_HTML) -> DocumentEnvironment:
    """Create a document environment showing ORIGIN + path in the address bar."""
    return DocumentEnvironment(html, url=f"{ORIGIN}{path}")


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create an empty site output directory."""
    site = tmp_path / "site"
    site.mkdir()
    return site


@pytest.fixture
def test_config(tmp_path: Path, site_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories."""
    return Config(
        site=SiteConfig(base_url=ORIGIN, output_dir=site_dir),
        server=ServerConfig(),
    )
