"""Application use cases, grouped by aggregate."""
