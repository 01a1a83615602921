# user_accounts/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Errores internos del servicio de cuentas
===============================================================================

Lo que los use cases NO modelan como UserError y sube como excepción:

  AccountsError              base; error_code + error_id (correlación log/cliente)
  ├── DatabaseError          store caído, query fallida, fila corrupta, pool
  ├── UniqueConstraintError  índice uq_users_username / uq_users_email
  └── PasswordHashingError   argon2 no pudo producir un digest

api/exception_handlers.py decide el status; acá no hay nada HTTP.
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class AccountsError(Exception):
    error_code: str = "ACCOUNTS_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(AccountsError):
    error_code: str = "DATABASE_ERROR"


class UniqueConstraintError(AccountsError):
    """`field` es "username" o "email" (o "user" si el constraint es otro)."""

    error_code: str = "CONFLICT"

    def __init__(
        self,
        field: str,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        self.field = field
        super().__init__(
            message or f"{field.capitalize()} already exists",
            original_error=original_error,
        )


class PasswordHashingError(AccountsError):
    error_code: str = "HASHING_ERROR"
