"""Page-type registry.

The site knows a closed set of logical page kinds, each with a fixed URL
template. Kinds are tagged values so formatting stays exhaustive.
"""

from dataclasses import dataclass

from sitecanon.core.types import Origin, URLPath


@dataclass(frozen=True)
class Homepage:
    """Site root."""

    kind = "homepage"


@dataclass(frozen=True)
class Document:
    """Single documentation page."""

    slug: str

    kind = "document"


@dataclass(frozen=True)
class Comparison:
    """Side-by-side comparison page."""

    slug: str

    kind = "comparison"


@dataclass(frozen=True)
class Search:
    """Search results page."""

    kind = "search"


PageType = Homepage | Document | Comparison | Search

PAGE_KINDS = ("homepage", "document", "comparison", "search")


def page_type_from_kind(kind: str, slug: str = "") -> PageType | None:
    """Look up a page type by its symbolic name.

    Args:
        kind: Symbolic page kind (e.g., "document")
        slug: Page slug, ignored by kinds that take none

    Returns:
        Page type value, or None when the kind is not registered
    """
    if kind == "homepage":
        return Homepage()
    if kind == "document":
        return Document(slug)
    if kind == "comparison":
        return Comparison(slug)
    if kind == "search":
        return Search()
    return None


def page_path(page: PageType) -> URLPath:
    """Format the site-relative path for a page type.

    Slugs are inserted verbatim; callers supply path-safe values.
    """
    if isinstance(page, Homepage):
        return URLPath("/")
    if isinstance(page, Document):
        return URLPath(f"/documents/{page.slug}")
    if isinstance(page, Comparison):
        return URLPath(f"/comparisons/{page.slug}")
    if isinstance(page, Search):
        return URLPath("/search")
    raise TypeError(f"Unsupported page type: {page!r}")


def format_page_url(origin: Origin | str, page: PageType) -> str:
    """Format the absolute URL for a page type under the given origin."""
    return f"{origin}{page_path(page)}"
