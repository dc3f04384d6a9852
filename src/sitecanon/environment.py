"""Environment capabilities consumed by the canonical URL manager.

The manager never touches process-wide state. Everything it reads or
mutates (origin, current location, document head, history, diagnostics)
goes through an Environment. NullEnvironment stands in for contexts with
no document or window; DocumentEnvironment wraps an in-memory HTML page.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from bs4 import BeautifulSoup, Doctype, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from sitecanon.core.paths import origin_of, path_of

logger = logging.getLogger(__name__)

CANONICAL_REL = "canonical"

# Minimal escaping; void elements are written as <link ...>, not <link .../>
_HTML_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)


class Environment(Protocol):
    """Capabilities the manager needs from its host."""

    def origin(self) -> str | None:
        """Current origin, or None without a window."""
        ...

    def pathname(self) -> str | None:
        """Current path, or None without a window."""
        ...

    def href(self) -> str | None:
        """Current full URL, or None without a window."""
        ...

    def has_document(self) -> bool:
        """Whether a document head is available for mutation."""
        ...

    def get_canonical_href(self) -> str | None:
        """Href of the canonical link element, if one exists."""
        ...

    def set_canonical_href(self, href: str) -> None:
        """Create or update the canonical link element."""
        ...

    def replace_state(self, state: object, title: str, url: str) -> None:
        """Replace the current history entry without navigating."""
        ...

    def warn(self, message: str) -> None:
        """Write a diagnostic to the warning channel."""
        ...


class NullEnvironment:
    """Environment without document or window.

    Probes return None and mutations are ignored, so the manager can run
    during pre-rendering or in plain Python code without special-casing.
    """

    def origin(self) -> str | None:
        return None

    def pathname(self) -> str | None:
        return None

    def href(self) -> str | None:
        return None

    def has_document(self) -> bool:
        return False

    def get_canonical_href(self) -> str | None:
        return None

    def set_canonical_href(self, href: str) -> None:
        pass

    def replace_state(self, state: object, title: str, url: str) -> None:
        pass

    def warn(self, message: str) -> None:
        logger.warning(message)


@dataclass(frozen=True)
class HistoryEntry:
    """Recorded replace-state call."""

    state: object
    title: str
    url: str


class DocumentEnvironment:
    """Environment backed by an in-memory HTML document.

    The document is parsed once with BeautifulSoup and mutated in place.
    An optional URL plays the part of the address bar; without one the
    environment behaves as a document with no window.
    """

    def __init__(self, html: str, url: str | None = None) -> None:
        """Initialize the document environment.

        Args:
            html: HTML page source
            url: Current absolute URL, or None for a detached document
        """
        self._soup = BeautifulSoup(html, "html.parser")
        self._url = url
        self.history: list[HistoryEntry] = []
        self.warnings: list[str] = []

    @property
    def html(self) -> str:
        """Serialized document."""
        return self._soup.decode(formatter=_HTML_FORMATTER)

    def origin(self) -> str | None:
        if self._url is None:
            return None
        return origin_of(self._url)

    def pathname(self) -> str | None:
        if self._url is None:
            return None
        return path_of(self._url)

    def href(self) -> str | None:
        return self._url

    def has_document(self) -> bool:
        return True

    def get_canonical_href(self) -> str | None:
        link = self._find_canonical()
        if link is None:
            return None
        href = link.get("href")
        return href if isinstance(href, str) else None

    def set_canonical_href(self, href: str) -> None:
        links = self._soup.find_all("link", rel=CANONICAL_REL)
        if links:
            link = links[0]
            for extra in links[1:]:
                extra.decompose()
        else:
            link = self._soup.new_tag("link", attrs={"rel": CANONICAL_REL})
            self._ensure_head().append(link)
        link["href"] = href

    def canonical_count(self) -> int:
        """Number of canonical link elements in the document."""
        return len(self._soup.find_all("link", rel=CANONICAL_REL))

    def replace_state(self, state: object, title: str, url: str) -> None:
        self.history.append(HistoryEntry(state=state, title=title, url=url))
        self._url = url

    def warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def _find_canonical(self) -> Tag | None:
        link = self._soup.find("link", rel=CANONICAL_REL)
        return link if isinstance(link, Tag) else None

    def _ensure_head(self) -> Tag:
        """Return the document head, creating it when the page has none."""
        head = self._soup.head
        if head is not None:
            return head

        head = self._soup.new_tag("head")
        if self._soup.html is not None:
            self._soup.html.insert(0, head)
        else:
            contents = self._soup.contents
            self._soup.insert(1 if contents and isinstance(contents[0], Doctype) else 0, head)
        return head
