# user_accounts/crosscutting/middleware.py
"""
===============================================================================
MÓDULO: RequestContextMiddleware
===============================================================================

Por cada request a la API de cuentas:
  - acepta el X-Request-Id del cliente (si es razonable) o genera un UUID
  - lo devuelve en la respuesta y lo deja en request.state (problem+json)
  - abre el contexto de log y emite una línea de cierre con status y latencia

/healthz no se loguea: los health checks lo consultan cada pocos segundos.
Los headers (Authorization incluido) nunca se loguean.
===============================================================================
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"
_MAX_REQUEST_ID_LENGTH = 128
_QUIET_PATHS = frozenset({"/healthz"})


def _request_id_from(request: Request) -> str:
    incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if incoming and len(incoming) <= _MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _request_id_from(request)
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request abortado por excepción no manejada")
            raise
        else:
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            if request.url.path not in _QUIET_PATHS:
                logger.info(
                    "request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                    },
                )
            clear_context()
