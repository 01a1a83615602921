"""
===============================================================================
USER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    User Use Case Results

Business Goal:
    Proveer modelos compartidos de resultados, errores y proyección pública
    para los casos de uso de cuentas de usuario.

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar excepciones
      hacia afuera; la capa HTTP mapea códigos a status.
    - UserView es la única forma en que un usuario sale del servicio: no lleva
      password_hash ni los flags de bloqueo/expiración.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    user_results models (module)

Responsibilities:
    - Definir UserErrorCode y UserError (code + message).
    - Definir UserView (proyección) y su construcción desde User.
    - Representar resultados: UserResult, UserListResult, DeleteUserResult,
      ExistsResult, CountResult.

Collaborators:
    - domain.entities.User / UserRole
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List

from ....domain.entities import User, UserRole


class UserErrorCode(str, Enum):
    """
    Códigos de error estables para casos de uso de usuarios.

      - VALIDATION_ERROR: inputs inválidos o incompletos.
      - NOT_FOUND: usuario inexistente.
      - CONFLICT: username o email ya tomados.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class UserError:
    """Error de caso de uso (categoría + mensaje humano)."""

    code: UserErrorCode
    message: str
    field: str | None = None


@dataclass(frozen=True)
class UserView:
    """Proyección pública de User (sin password ni flags de cuenta)."""

    id: int
    username: str
    email: str
    first_name: str | None
    last_name: str | None
    role: UserRole
    is_enabled: bool
    created_at: datetime | None
    updated_at: datetime | None
    last_login: datetime | None

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        if user.id is None:
            raise ValueError("UserView requires a persisted user")
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            is_enabled=user.is_enabled,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login=user.last_login,
        )


@dataclass
class UserResult:
    """
    Resultado para casos de uso que retornan un único usuario.

    Contrato:
      - Si error is None => user presente (éxito)
      - Si error != None => user es None (fallo)
    """

    user: UserView | None = None
    error: UserError | None = None


@dataclass
class UserListResult:
    """Resultado de listados; siempre devuelve lista (posiblemente vacía)."""

    users: List[UserView] = field(default_factory=list)
    error: UserError | None = None


@dataclass
class DeleteUserResult:
    """Resultado del comando delete."""

    deleted: bool
    error: UserError | None = None


@dataclass
class ExistsResult:
    exists: bool


@dataclass
class CountResult:
    count: int


def not_found_error(kind: str, value: object) -> UserError:
    return UserError(
        code=UserErrorCode.NOT_FOUND, message=f"User not found with {kind}: {value}"
    )


def conflict_error(field_name: str, value: object) -> UserError:
    return UserError(
        code=UserErrorCode.CONFLICT,
        message=f"{field_name.capitalize()} already exists: {value}",
        field=field_name,
    )
