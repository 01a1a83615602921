"""
Tests for the connection pool singleton.

Validates:
  - init/get/close lifecycle with a mocked ConnectionPool
  - Fail-fast on double init and on use before init
  - Pool lifecycle errors surface as DatabaseError
  - statement_timeout applied to new connections
"""

from unittest.mock import MagicMock, patch

import pytest

from user_accounts.crosscutting.exceptions import DatabaseError
from user_accounts.infrastructure.db import pool as pool_module
from user_accounts.infrastructure.db.errors import (
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _clean_pool():
    pool_module.reset_pool()
    yield
    pool_module.reset_pool()


def test_init_get_close_lifecycle():
    with patch.object(pool_module, "ConnectionPool") as pool_cls:
        created = pool_module.init_pool("postgresql://x", 1, 2)

        assert pool_module.get_pool() is created
        pool_cls.assert_called_once()
        kwargs = pool_cls.call_args.kwargs
        assert kwargs["min_size"] == 1
        assert kwargs["max_size"] == 2
        assert kwargs["kwargs"] == {"application_name": "user-accounts"}

        pool_module.close_pool()

    created.close.assert_called_once()
    with pytest.raises(PoolNotInitializedError):
        pool_module.get_pool()


def test_double_init_fails_fast():
    with patch.object(pool_module, "ConnectionPool"):
        pool_module.init_pool("postgresql://x", 1, 2)

        with pytest.raises(PoolAlreadyInitializedError):
            pool_module.init_pool("postgresql://x", 1, 2)


def test_close_is_idempotent():
    pool_module.close_pool()
    pool_module.close_pool()


def test_reset_pool_tolerates_close_failure():
    with patch.object(pool_module, "ConnectionPool") as pool_cls:
        pool_cls.return_value.close.side_effect = RuntimeError("boom")
        pool_module.init_pool("postgresql://x", 1, 2)

        pool_module.reset_pool()

    with pytest.raises(PoolNotInitializedError):
        pool_module.get_pool()


def test_configure_connection_sets_statement_timeout():
    conn = MagicMock()

    pool_module._configure_connection(conn)

    conn.execute.assert_called_once_with("SET statement_timeout = 30000")
    conn.commit.assert_called_once()


def test_use_before_init_is_a_database_error():
    with pytest.raises(DatabaseError) as exc_info:
        pool_module.get_pool()

    assert isinstance(exc_info.value, PoolNotInitializedError)
    assert exc_info.value.error_code == "DATABASE_POOL_ERROR"
    assert exc_info.value.error_id
