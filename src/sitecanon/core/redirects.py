"""Redirect rules for address bar normalization.

Rules are evaluated in declaration order and the first match wins, so at
most one rewrite is applied per evaluation.
"""

from collections.abc import Callable
from dataclasses import dataclass

from sitecanon.core.types import URLPath


@dataclass(frozen=True)
class RedirectRule:
    """Predicate/rewrite pair applied to a raw path."""

    name: str
    matches: Callable[[str], bool]
    rewrite: Callable[[str], str]


def _has_trailing_slash(path: str) -> bool:
    return path != "/" and path.endswith("/")


def _strip_trailing_slash(path: str) -> str:
    return path.rstrip("/") or "/"


def _collapse_first(segment: str) -> Callable[[str], str]:
    doubled = f"/{segment}//"
    single = f"/{segment}/"

    def rewrite(path: str) -> str:
        return path.replace(doubled, single, 1)

    return rewrite


REDIRECT_RULES: tuple[RedirectRule, ...] = (
    RedirectRule(
        name="trailing-slash",
        matches=_has_trailing_slash,
        rewrite=_strip_trailing_slash,
    ),
    RedirectRule(
        name="documents-double-slash",
        matches=lambda path: "/documents//" in path,
        rewrite=_collapse_first("documents"),
    ),
    RedirectRule(
        name="comparisons-double-slash",
        matches=lambda path: "/comparisons//" in path,
        rewrite=_collapse_first("comparisons"),
    ),
)


def find_rule(path: str, rules: tuple[RedirectRule, ...] = REDIRECT_RULES) -> RedirectRule | None:
    """Return the first rule matching the path, if any."""
    for rule in rules:
        if rule.matches(path):
            return rule
    return None


def resolve_redirect(
    path: str,
    rules: tuple[RedirectRule, ...] = REDIRECT_RULES,
) -> URLPath | None:
    """Apply the first matching rule to a path.

    Args:
        path: Raw path as shown in the address bar (no query or fragment)
        rules: Ordered rule set

    Returns:
        Rewritten path, or None when no rule matches
    """
    rule = find_rule(path, rules)
    if rule is None:
        return None
    return URLPath(rule.rewrite(path))
