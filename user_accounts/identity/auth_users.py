"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Gate de rol de la API de cuentas (JWT Bearer, HS256)

Responsabilidades:
    - Firmar access tokens para operadores (scripts/create_admin.py) y tests.
      No hay endpoint que los emita.
    - Validar el token y resolver el principal contra el repositorio.
    - Dependencias FastAPI: require_principal() / require_role(role).

Colaboradores:
    - crosscutting.config.get_settings (JWT_SECRET, JWT_ACCESS_TTL_MINUTES)
    - container.get_user_repository
    - identity.principal.Principal

Notas:
    - Claims: sub (username), role, iat, exp, typ="access".
    - El rol del token es informativo: decide el rol guardado en users.
    - sub se busca SOLO por username. Un username puede tener forma de email,
      así que resolver contra la columna email permitiría suplantar cuentas.
    - Cuenta deshabilitada/bloqueada/expirada => 401; rol insuficiente => 403.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt
from fastapi import Depends, Header, Request

from ..container import get_user_repository
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.entities import UserRole
from ..domain.repositories import UserRepository
from .principal import Principal

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
_REQUIRED_CLAIMS = ["sub", "role", "exp"]


@dataclass(frozen=True, slots=True)
class AuthSettings:
    jwt_secret: str
    jwt_access_ttl_minutes: int


@dataclass(frozen=True, slots=True)
class TokenPayload:
    username: str
    role: UserRole


def get_auth_settings() -> AuthSettings:
    settings = get_settings()
    return AuthSettings(
        jwt_secret=settings.jwt_secret,
        jwt_access_ttl_minutes=settings.jwt_access_ttl_minutes,
    )


def create_access_token(
    principal: Principal, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """Devuelve (token, expires_in_seconds)."""
    settings = settings or get_auth_settings()
    issued_at = datetime.now(timezone.utc)
    ttl = timedelta(minutes=settings.jwt_access_ttl_minutes)
    # Un principal cargado desde User tiene exactamente un rol.
    role = min(principal.roles, default=UserRole.USER)

    claims = {
        "sub": principal.username,
        "role": role.value,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + ttl).timestamp()),
        "typ": ACCESS_TOKEN_TYPE,
    }
    token = jwt.encode(claims, settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, int(ttl.total_seconds())


def decode_access_token(
    token: str, settings: AuthSettings | None = None
) -> TokenPayload:
    """Firma, expiración y claims; cualquier falla es 401."""
    settings = settings or get_auth_settings()
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": _REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as exc:
        raise unauthorized("Token expirado.") from exc
    except jwt.InvalidTokenError as exc:
        raise unauthorized("Token inválido.") from exc

    # typ ausente se acepta (tokens previos a typ); otro valor no.
    if claims.get("typ", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise unauthorized("Tipo de token inválido.")
    if not claims["sub"]:
        raise unauthorized("Token inválido.")
    try:
        role = UserRole(str(claims["role"]))
    except ValueError as exc:
        raise unauthorized("Token inválido.") from exc

    return TokenPayload(username=str(claims["sub"]), role=role)


def _extract_bearer_token(authorization: str | None) -> str | None:
    scheme, _, token = (authorization or "").strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def resolve_principal(token: str, user_repo: UserRepository) -> Principal:
    payload = decode_access_token(token)

    user = user_repo.find_by_username(payload.username)
    if user is None:
        raise unauthorized("Token inválido.")

    principal = Principal.from_user(user)
    if not principal.can_authenticate:
        logger.warning(
            "Token de cuenta no habilitada rechazado",
            extra={"user_id": principal.user_id},
        )
        raise unauthorized("La cuenta no está habilitada.")
    return principal


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------
def require_principal() -> Callable:
    def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        user_repo: UserRepository = Depends(get_user_repository),
    ) -> Principal:
        token = _extract_bearer_token(authorization)
        if token is None:
            raise unauthorized("Falta token Bearer.")
        principal = resolve_principal(token, user_repo)
        request.state.principal = principal
        return principal

    return dependency


def require_role(role: UserRole | str) -> Callable:
    required = UserRole(role)
    authenticate = require_principal()

    def dependency(principal: Principal = Depends(authenticate)) -> Principal:
        if not principal.has_role(required):
            raise forbidden("Rol insuficiente.")
        return principal

    return dependency
