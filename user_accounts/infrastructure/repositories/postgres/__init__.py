"""
PostgreSQL Repository Implementations.

SQL parametrizado sobre psycopg 3 + psycopg_pool.
"""

from .user import PostgresUserRepository

__all__ = ["PostgresUserRepository"]
