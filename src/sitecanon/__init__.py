"""Canonical URL management for static documentation sites."""

from sitecanon.environment import DocumentEnvironment, Environment, NullEnvironment
from sitecanon.manager import FALLBACK_ORIGIN, CanonicalCheck, CanonicalURLManager

__all__ = [
    "FALLBACK_ORIGIN",
    "CanonicalCheck",
    "CanonicalURLManager",
    "DocumentEnvironment",
    "Environment",
    "NullEnvironment",
]
