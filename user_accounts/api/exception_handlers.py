"""
===============================================================================
TARJETA CRC — api/exception_handlers.py
===============================================================================

Responsabilidades:
  - Traducir lo que escapa de routers/use cases a problem+json:
      RequestValidationError  -> 400 VALIDATION_ERROR (loc/msg/type por campo)
      UniqueConstraintError   -> 400 CONFLICT (carrera perdida contra el índice)
      DatabaseError           -> 500 DATABASE_ERROR (+ error_id)
      AccountsError           -> 500 INTERNAL_ERROR (+ error_id)
      Exception               -> 500 INTERNAL_ERROR (detalle oculto en prod)

Colaboradores:
  - crosscutting.error_responses (AppHTTPException, problem_response)
  - crosscutting.exceptions (jerarquía AccountsError)
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    conflict,
    problem_response,
    validation_error,
)
from ..crosscutting.exceptions import (
    AccountsError,
    DatabaseError,
    UniqueConstraintError,
)
from ..crosscutting.logger import logger


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    return problem_response(
        request, validation_error("Request validation failed", errors)
    )


async def unique_constraint_handler(
    request: Request, exc: UniqueConstraintError
) -> JSONResponse:
    return problem_response(request, conflict(exc.message, [{"field": exc.field}]))


def _service_failure(
    request: Request, exc: AccountsError, code: ErrorCode
) -> JSONResponse:
    # error_id viaja al cliente; el mensaje interno queda sólo en el log.
    logger.error(
        "Falla del servicio de cuentas",
        extra={
            "code": code.value,
            "error_type": type(exc).__name__,
            "error_id": exc.error_id,
            "error_message": exc.message,
        },
    )
    return problem_response(
        request,
        AppHTTPException(500, code, exc.message, errors=[{"error_id": exc.error_id}]),
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    return _service_failure(request, exc, ErrorCode.DATABASE_ERROR)


async def accounts_error_handler(request: Request, exc: AccountsError) -> JSONResponse:
    return _service_failure(request, exc, ErrorCode.INTERNAL_ERROR)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Excepción no controlada", exc_info=exc)
    detail = "Error interno." if get_settings().is_production() else str(exc)
    return problem_response(
        request, AppHTTPException(500, ErrorCode.INTERNAL_ERROR, detail)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Starlette resuelve por MRO: las subclases de AccountsError ganan."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(UniqueConstraintError, unique_constraint_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(AccountsError, accounts_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
