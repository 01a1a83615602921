"""
Integration test configuration.

These tests need a real PostgreSQL with the alembic migrations applied:

    DATABASE_URL=postgresql://... alembic upgrade head
    RUN_INTEGRATION=1 INTEGRATION_DATABASE_URL=postgresql://... pytest -m integration

The root conftest pins DATABASE_URL to a dummy value for unit tests, so the
real database is passed through INTEGRATION_DATABASE_URL.
"""

import os

import pytest


def pytest_collection_modifyitems(config, items):
    if os.getenv("RUN_INTEGRATION") == "1":
        return
    skip = pytest.mark.skip(reason="Set RUN_INTEGRATION=1 to run integration tests")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)
