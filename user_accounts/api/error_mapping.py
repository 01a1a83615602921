"""
===============================================================================
TARJETA CRC — api/error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir UserErrorCode a AppHTTPException.
  - Centralizar el mapeo para evitar duplicación en routers.

Reglas:
  - VALIDATION_ERROR -> 400
  - CONFLICT -> 400 (compatibilidad con clientes existentes)
  - NOT_FOUND -> 404
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from ..application.usecases.users import UserError, UserErrorCode
from ..crosscutting.error_responses import (
    conflict,
    internal_error,
    not_found,
    validation_error,
)


def raise_user_error(error: UserError, identifier: object | None = None) -> NoReturn:
    """Traduce UserError -> HTTP."""
    if error.code == UserErrorCode.NOT_FOUND:
        raise not_found("User", str(identifier if identifier is not None else "unknown"))
    if error.code == UserErrorCode.CONFLICT:
        errors = [{"field": error.field}] if error.field else None
        raise conflict(error.message, errors)
    if error.code == UserErrorCode.VALIDATION_ERROR:
        errors = [{"field": error.field, "msg": error.message}] if error.field else None
        raise validation_error(error.message, errors)
    raise internal_error(error.message)


def raise_delete_error(error: UserError, user_id: int) -> NoReturn:
    """DELETE sólo distingue NOT_FOUND; cualquier otra falla es 500."""
    if error.code == UserErrorCode.NOT_FOUND:
        raise not_found("User", str(user_id))
    raise internal_error(error.message)
