"""
===============================================================================
TARJETA CRC — identity/principal.py
===============================================================================

Módulo:
    Principal autenticado (adaptador User -> identidad de request)

Responsabilidades:
    - Separar la entidad de dominio User de lo que la capa de acceso necesita.
    - Cargar el principal por username o email (loader de autenticación).
    - Exponer roles y flags de cuenta para decidir acceso.

Colaboradores:
    - domain.repositories.UserRepository.find_by_username_or_email
    - domain.entities.User / UserRole
    - flujos de login (consumidor futuro); el gate JWT resuelve por username

Notas:
    - El principal NO lleva password_hash: nunca viaja más allá del loader.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.entities import User, UserRole
from ..domain.repositories import UserRepository


@dataclass(frozen=True, slots=True)
class Principal:
    """Caller autenticado asociado a un request."""

    user_id: int
    username: str
    roles: frozenset[UserRole]
    is_enabled: bool = True
    is_account_non_locked: bool = True
    is_account_non_expired: bool = True
    is_credentials_non_expired: bool = True

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        if user.id is None:
            raise ValueError("Principal requires a persisted user")
        return cls(
            user_id=user.id,
            username=user.username,
            roles=frozenset({user.role}),
            is_enabled=user.is_enabled,
            is_account_non_locked=user.is_account_non_locked,
            is_account_non_expired=user.is_account_non_expired,
            is_credentials_non_expired=user.is_credentials_non_expired,
        )

    def has_role(self, role: UserRole | str) -> bool:
        return UserRole(role) in self.roles

    @property
    def can_authenticate(self) -> bool:
        return (
            self.is_enabled
            and self.is_account_non_locked
            and self.is_account_non_expired
            and self.is_credentials_non_expired
        )


def load_principal(identifier: str, user_repo: UserRepository) -> Principal | None:
    """Resuelve un principal por username o email (match exacto)."""
    if not identifier:
        return None
    user = user_repo.find_by_username_or_email(identifier)
    if user is None:
        return None
    return Principal.from_user(user)
