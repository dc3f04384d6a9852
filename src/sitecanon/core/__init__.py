"""Canonical URL primitives: path normalization, page types, redirect rules."""
