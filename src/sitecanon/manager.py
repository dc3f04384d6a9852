"""Canonical URL manager.

Computes the canonical URL of the current page, normalizes the address
bar through the redirect rules, and publishes the canonical link element
in the document head. All host access goes through an Environment, and
no exception escapes the public methods.
"""

from dataclasses import dataclass

from sitecanon.core.page_types import PageType, format_page_url, page_type_from_kind
from sitecanon.core.paths import is_valid_url, normalize_path
from sitecanon.core.redirects import resolve_redirect
from sitecanon.core.types import Origin
from sitecanon.environment import Environment, NullEnvironment

# Used when neither an explicit base URL nor a browser origin is available.
# Rewritten in place by the domain update tool.
FALLBACK_ORIGIN = Origin("https://llm-toolkit.github.io")


@dataclass(frozen=True)
class CanonicalCheck:
    """Result of comparing the installed canonical with the expected one."""

    matches: bool
    current: str | None
    expected: str

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "matches": self.matches,
            "current": self.current,
            "expected": self.expected,
        }


class CanonicalURLManager:
    """Canonical URL management for one document.

    The origin is resolved once at construction and never changes. The
    manager owns a single canonical link element in the document head.
    """

    __slots__ = ("_base_url", "_env")

    def __init__(
        self,
        environment: Environment | None = None,
        *,
        base_url: str | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            environment: Host capabilities (default: no document, no window)
            base_url: Explicit origin, used verbatim when given
        """
        self._env: Environment = environment if environment is not None else NullEnvironment()
        self._base_url = Origin(base_url) if base_url else self._detect_base_url()

    @property
    def base_url(self) -> Origin:
        """Origin used for every canonical URL."""
        return self._base_url

    def _detect_base_url(self) -> Origin:
        origin = self._env.origin()
        if origin:
            return Origin(origin)
        return FALLBACK_ORIGIN

    def generate_canonical(self, path: str | None = None) -> str:
        """Generate the canonical URL for a path.

        Args:
            path: Raw path; defaults to the current path, or "/" without a window

        Returns:
            Origin followed by the normalized path
        """
        if not path:
            path = self._env.pathname() or "/"
        return f"{self._base_url}{normalize_path(path)}"

    def get_canonical_for_page_type(self, kind: str | PageType, slug: str = "") -> str:
        """Get the canonical URL for a logical page kind.

        Unknown kinds fall back to the canonical of the current path.

        Args:
            kind: Symbolic kind ("homepage", "document", "comparison", "search")
                or a page type value
            slug: Slug for document and comparison pages, used verbatim
        """
        if isinstance(kind, str):
            page = page_type_from_kind(kind, slug)
        else:
            page = kind if isinstance(kind, PageType) else None
        if page is None:
            return self.generate_canonical()
        return format_page_url(self._base_url, page)

    def set_canonical_link(self, url: str | None = None) -> None:
        """Install or update the canonical link element.

        Invalid URLs leave the document untouched and produce a warning.

        Args:
            url: Canonical URL; defaults to the canonical of the current path
        """
        if not self._env.has_document():
            return

        canonical_url = url or self.generate_canonical()
        if not is_valid_url(canonical_url):
            self._env.warn(f"Invalid canonical URL: {canonical_url}")
            return

        self._env.set_canonical_href(canonical_url)

    def get_current_canonical(self) -> str | None:
        """Return the href of the installed canonical link, if any."""
        if not self._env.has_document():
            return None
        return self._env.get_canonical_href()

    def validate_current_canonical(self) -> CanonicalCheck:
        """Compare the installed canonical with the one for the current path."""
        current = self.get_current_canonical()
        expected = self.generate_canonical()
        return CanonicalCheck(matches=current == expected, current=current, expected=expected)

    def handle_redirects(self) -> None:
        """Normalize the address bar through the redirect rules.

        The first matching rule rewrites the path. When the resulting URL
        differs from the current one the history entry is replaced in place
        and the canonical link follows.
        """
        current_path = self._env.pathname()
        if current_path is None:
            return

        new_path = resolve_redirect(current_path)
        if new_path is None:
            return

        new_url = f"{self._base_url}{new_path}"
        if new_url != self._env.href():
            self._env.replace_state(None, "", new_url)
            self.set_canonical_link(new_url)

    def init(self) -> None:
        """Run redirects, then publish the canonical link for the page load."""
        self.handle_redirects()
        self.set_canonical_link()

    def update_canonical(self, new_path: str) -> None:
        """Publish the canonical for a client-side navigation.

        The address bar is left alone; redirect rules are not applied.
        """
        self.set_canonical_link(self.generate_canonical(new_path))
