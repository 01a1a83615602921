"""
===============================================================================
CRC CARD — infrastructure/db/pool.py
===============================================================================

Pool psycopg único por proceso para la tabla users.

  - api.main (lifespan) y scripts/create_admin.py lo abren y cierran.
  - PostgresUserRepository toma una conexión por operación vía get_pool().
  - Cada conexión nueva queda con statement_timeout y application_name
    (identificable en pg_stat_activity).
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError

APPLICATION_NAME = "user-accounts"

_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _configure_connection(conn) -> None:
    from ...crosscutting.config import get_settings

    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {timeout_ms}")
        conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int) -> ConnectionPool:
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("User pool already initialized.")

        _pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            kwargs={"application_name": APPLICATION_NAME},
            configure=_configure_connection,
            name=APPLICATION_NAME,
            open=True,
        )
        logger.info(
            "Pool de usuarios abierto",
            extra={"min_size": min_size, "max_size": max_size},
        )
        return _pool


def get_pool() -> ConnectionPool:
    if _pool is None:
        raise PoolNotInitializedError(
            "User pool not initialized; call init_pool() at startup."
        )
    return _pool


def close_pool() -> None:
    """Idempotente: el lifespan puede llamarlo aunque init haya fallado."""
    global _pool

    with _pool_lock:
        pool, _pool = _pool, None
    if pool is not None:
        pool.close()
        logger.info("Pool de usuarios cerrado")


def reset_pool() -> None:
    """Sólo tests: descarta el pool aunque close() falle."""
    global _pool

    with _pool_lock:
        pool, _pool = _pool, None
    if pool is None:
        return
    try:
        pool.close()
    except Exception as exc:
        logger.warning("reset_pool: close falló", extra={"error": str(exc)})
