"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades de dominio de cuentas de usuario

Responsabilidades:
    - Definir el enum de roles (UserRole) persistido por nombre.
    - Definir el registro User (id, identidad, hash, flags, timestamps).
    - Exponer helpers puros sobre el registro (sin I/O).

Colaboradores:
    - domain/repositories.py: contrato de persistencia sobre User.
    - application/usecases/users/*: construyen y mutan User vía replace().
    - identity/principal.py: adapta User -> Principal para autorización.

Notas:
    - User es inmutable (frozen): toda mutación produce una copia nueva
      con dataclasses.replace, y la persiste el repositorio.
    - id es None hasta que el store lo asigna en insert().
    - password_hash nunca sale de la capa de servicio (ver UserView).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """Roles soportados. El valor es el nombre persistido en la columna `role`."""

    USER = "USER"
    ADMIN = "ADMIN"
    MODERATOR = "MODERATOR"


DEFAULT_ROLE = UserRole.USER


@dataclass(frozen=True, slots=True)
class User:
    """Registro de cuenta de usuario."""

    username: str
    email: str
    password_hash: str
    id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole = DEFAULT_ROLE
    is_enabled: bool = True
    is_account_non_locked: bool = True
    is_account_non_expired: bool = True
    is_credentials_non_expired: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login: datetime | None = None

    @property
    def can_authenticate(self) -> bool:
        """True si la cuenta está habilitada y ningún flag la bloquea."""
        return (
            self.is_enabled
            and self.is_account_non_locked
            and self.is_account_non_expired
            and self.is_credentials_non_expired
        )
