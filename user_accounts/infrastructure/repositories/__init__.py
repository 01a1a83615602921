"""
============================================================
TARJETA CRC
============================================================
Class: user_accounts.infrastructure.repositories (Package exports)

Responsibilities:
- Exponer las implementaciones concretas de UserRepository en un único
  punto de importación.

Collaborators:
- Repositorio Postgres (SQL crudo, psycopg 3)
- Repositorio InMemory (testing / APP_ENV=test)
============================================================
"""

from .in_memory import InMemoryUserRepository
from .postgres import PostgresUserRepository

__all__ = [
    "InMemoryUserRepository",
    "PostgresUserRepository",
]
