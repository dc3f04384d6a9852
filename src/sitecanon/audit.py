"""Canonical link audit for built sites.

Checks that every page carries exactly one canonical link pointing at
the canonical URL of the path it is served under.
"""

from dataclasses import dataclass, field
from pathlib import Path

from sitecanon.core.types import URLPath
from sitecanon.environment import DocumentEnvironment
from sitecanon.manager import FALLBACK_ORIGIN, CanonicalURLManager
from sitecanon.site import SitePage, discover_pages


@dataclass(frozen=True)
class PageAudit:
    """Audit result for a single page."""

    path: URLPath
    source_path: Path
    current: str | None
    expected: str
    matches: bool
    duplicates: int

    @property
    def present(self) -> bool:
        return self.current is not None

    @property
    def ok(self) -> bool:
        return self.matches and self.duplicates == 1

    def problems(self) -> list[str]:
        """Human-readable list of issues found on the page."""
        if not self.present:
            return ["missing canonical link"]
        issues: list[str] = []
        if not self.matches:
            issues.append(f"canonical is {self.current}, expected {self.expected}")
        if self.duplicates > 1:
            issues.append(f"{self.duplicates} canonical links")
        return issues

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "source_file": str(self.source_path),
            "present": self.present,
            "current": self.current,
            "expected": self.expected,
            "matches": self.matches,
            "duplicates": self.duplicates,
        }


@dataclass
class AuditReport:
    """Audit results for a whole site."""

    pages: list[PageAudit] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(page.ok for page in self.pages)

    @property
    def failures(self) -> list[PageAudit]:
        return [page for page in self.pages if not page.ok]


def audit_page(page: SitePage, base_url: str | None = None) -> PageAudit:
    """Audit the canonical link of one built page.

    The page is loaded as if the browser were showing it at its own
    canonical location, so the check mirrors what the manager would
    compute on page load.
    """
    html = page.source_path.read_text(encoding="utf-8")
    origin = base_url or FALLBACK_ORIGIN
    env = DocumentEnvironment(html, url=f"{origin}{page.path}")
    check = CanonicalURLManager(env, base_url=base_url).validate_current_canonical()

    return PageAudit(
        path=page.path,
        source_path=page.source_path,
        current=check.current,
        expected=check.expected,
        matches=check.matches,
        duplicates=env.canonical_count(),
    )


def audit_site(root: Path, base_url: str | None = None) -> AuditReport:
    """Audit every built page under a site root.

    Raises:
        FileNotFoundError: If root is not a directory
    """
    return AuditReport(pages=[audit_page(page, base_url) for page in discover_pages(root)])
