# user_accounts/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger JSON del servicio de cuentas
===============================================================================

Una línea JSON por evento, con el contexto del request (request_id, method,
path) que deja RequestContextMiddleware.

Material de credenciales nunca llega al stdout:
  - claves conocidas (password, password_hash, token, authorization, ...)
  - valores que parecen un digest argon2 o un header Bearer, sin importar
    bajo qué clave vengan (p.ej. extra={"detail": user.password_hash})

Colaboradores:
  - user_accounts/context.py (ContextVars del request)
  - crosscutting/config.py (LOG_LEVEL, LOG_JSON)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from .config import get_settings

SERVICE_NAME = "user-accounts"
REDACTED = "***REDACTADO***"

_SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "passwd",
        "secret",
        "jwt_secret",
        "token",
        "access_token",
        "authorization",
        "credential",
        "dev_seed_admin_password",
    }
)
_SENSITIVE_PREFIXES = ("$argon2", "bearer ")

# Atributos estándar de LogRecord: todo lo demás es "extra".
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime"}

_MAX_STR = 4_000
_MAX_DEPTH = 4


def _scrub(value: Any, key: str | None = None, depth: int = 0) -> Any:
    if key is not None and key.lower() in _SENSITIVE_KEYS:
        return REDACTED
    if depth > _MAX_DEPTH:
        return "***TRUNCADO***"

    if isinstance(value, str):
        if value.lower().startswith(_SENSITIVE_PREFIXES):
            return REDACTED
        return value if len(value) <= _MAX_STR else value[:_MAX_STR] + "…"
    if isinstance(value, dict):
        return {str(k): _scrub(v, str(k), depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_scrub(v, key, depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    """LogRecord -> JSON de una línea, con contexto de request y extras saneados."""

    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
            "pid": os.getpid(),
            **get_context_dict(),
        }

        for attr, value in vars(record).items():
            if attr not in _RESERVED_ATTRS:
                payload[attr] = _scrub(value, attr)

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "stacktrace": traceback.format_exception(exc_type, exc, tb),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(name: str = SERVICE_NAME) -> logging.Logger:
    """Logger del servicio; idempotente ante reimports."""
    log = logging.getLogger(name)

    # Scripts sin DATABASE_URL no tienen Settings válidos: defaults.
    try:
        settings = get_settings()
        level, use_json = (settings.log_level or "INFO").upper(), settings.log_json
    except ValidationError:
        level, use_json = "INFO", True

    log.setLevel(getattr(logging, level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            JSONFormatter()
            if use_json
            else logging.Formatter("%(levelname)s %(name)s %(message)s")
        )
        log.addHandler(handler)

    return log


logger = setup_logger()
