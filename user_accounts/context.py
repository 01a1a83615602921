"""
===============================================================================
TARJETA CRC — user_accounts/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar request_id, método y path del request en curso.
  - Exponerlo al logger sin pasar parámetros por use cases ni repos.

Colaboradores:
  - crosscutting.middleware: abre y cierra el contexto.
  - crosscutting.logger: get_context_dict() en cada línea.

Notas:
  - Los handlers sync corren en el threadpool con una copia del contexto:
    leen lo que fijó el middleware, pero lo que escriban no vuelve.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RequestContext:
    request_id: str = ""
    method: str = ""
    path: str = ""


_EMPTY = RequestContext()
_current: ContextVar[RequestContext] = ContextVar("request_context", default=_EMPTY)


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    _current.set(RequestContext(request_id=request_id, method=method, path=path))


def get_context_dict() -> dict[str, str]:
    """Contexto actual para el log, sin claves vacías."""
    return {key: value for key, value in asdict(_current.get()).items() if value}


def clear_context() -> None:
    _current.set(_EMPTY)
