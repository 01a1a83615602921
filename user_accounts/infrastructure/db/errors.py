"""
Errores de ciclo de vida del pool que respalda PostgresUserRepository.

Heredan de DatabaseError: si un request llega a un repo sin pool (p.ej. el
lifespan no corrió init_pool), el handler lo responde como DATABASE_ERROR.
"""

from ...crosscutting.exceptions import DatabaseError


class DatabasePoolError(DatabaseError):
    error_code: str = "DATABASE_POOL_ERROR"


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() llamado dos veces en el mismo proceso."""


class PoolNotInitializedError(DatabasePoolError):
    """get_pool() antes de init_pool() (o después de close_pool())."""
