# user_accounts/crosscutting/error_responses.py
"""
===============================================================================
MÓDULO: Problem Details (RFC 7807) de la API de cuentas
===============================================================================

Todo error HTTP sale como application/problem+json con:
  type, title, status, detail, code, instance, errors?

El `code` es el contrato para clientes; `status` sale de _STATUS_BY_CODE.

Compatibilidad:
- CONFLICT (username/email duplicado) responde 400, igual que VALIDATION_ERROR.
  Los clientes existentes dependen de ese status; el `code` los distingue.

Colaboradores:
  - api/error_mapping.py (UserError -> factories de este módulo)
  - api/exception_handlers.py (excepciones internas -> AppHTTPException)
  - crosscutting/middleware.py (request.state.request_id)
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"
PROBLEM_TYPE_PREFIX = "urn:user-accounts:problem:"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


def _title(code: ErrorCode) -> str:
    return code.value.replace("_", " ").title()


_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.CONFLICT: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
    ErrorCode.DATABASE_ERROR: 500,
}


class ErrorDetail(BaseModel):
    """Cuerpo RFC 7807 + `code` estable + `errors` por campo (opcional)."""

    type: str
    title: str
    status: int
    detail: str
    code: ErrorCode
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


def _documented(description: str) -> dict[str, Any]:
    return {
        "description": description,
        "model": ErrorDetail,
        "content": {PROBLEM_JSON_MEDIA_TYPE: {}},
    }


OPENAPI_ERROR_RESPONSES = {
    400: _documented("Validación fallida o username/email en uso"),
    401: _documented("Token Bearer ausente, inválido o cuenta no habilitada"),
    403: _documented("El principal no tiene el rol requerido"),
    404: _documented("Usuario inexistente"),
}


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode y errors[] para el cuerpo problem+json."""

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        detail: str,
        errors: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.code = code
        self.errors = errors


def _problem(
    code: ErrorCode,
    detail: str,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> AppHTTPException:
    return AppHTTPException(_STATUS_BY_CODE[code], code, detail, errors, headers)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return _problem(ErrorCode.VALIDATION_ERROR, detail, errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return _problem(ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado")


def conflict(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return _problem(ErrorCode.CONFLICT, detail, errors)


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    return _problem(
        ErrorCode.UNAUTHORIZED, detail, headers={"WWW-Authenticate": "Bearer"}
    )


def forbidden(detail: str = "Acceso denegado") -> AppHTTPException:
    return _problem(ErrorCode.FORBIDDEN, detail)


def internal_error(detail: str = "Ocurrió un error inesperado") -> AppHTTPException:
    return _problem(ErrorCode.INTERNAL_ERROR, detail)


# ---------------------------------------------------------------------------
# Render
# ---------------------------------------------------------------------------
def problem_response(request: Request, exc: AppHTTPException) -> JSONResponse:
    errors = list(exc.errors or [])
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        errors.append({"request_id": request_id})

    body = ErrorDetail(
        type=PROBLEM_TYPE_PREFIX + exc.code.value.lower(),
        title=_title(exc.code),
        status=exc.status_code,
        detail=str(exc.detail),
        code=exc.code,
        instance=str(request.url),
        errors=errors or None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=exc.headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    return problem_response(request, exc)
