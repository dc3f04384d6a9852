"""HTTP API for canonical URL lookups."""
