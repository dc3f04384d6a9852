"""Core type definitions."""

from typing import NewType

# Site-relative URL path (e.g., "/", "/documents/intro")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

# Scheme and authority without trailing slash (e.g., "https://example.test")
Origin = NewType("Origin", str)
