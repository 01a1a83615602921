"""Application layer: use cases, facade and startup tasks."""
