"""
===============================================================================
TARJETA CRC — user_accounts/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorio, hasher, use cases) siguiendo DIP.
  - Exponer factories para FastAPI (Depends), scripts y tareas de arranque.
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Elegir adapter de persistencia según Settings (test -> in-memory).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories.UserRepository / domain.services.PasswordHasher
  - infrastructure.repositories.* (implementaciones)
  - application.usecases.users.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases.users import (
    CheckAvailabilityUseCase,
    CountEnabledUsersUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    RegisterUserUseCase,
    ToggleUserStatusUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import UserRepository
from .domain.services import PasswordHasher
from .identity.passwords import Argon2PasswordHasher
from .infrastructure.repositories import (
    InMemoryUserRepository,
    PostgresUserRepository,
)


# =============================================================================
# Singletons (recursos compartidos)
# =============================================================================
@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    if get_settings().is_test():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return Argon2PasswordHasher()


# =============================================================================
# Use cases (baratos: se construyen por request)
# =============================================================================
def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        repository=get_user_repository(),
        password_hasher=get_password_hasher(),
    )


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(repository=get_user_repository())


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(repository=get_user_repository())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(repository=get_user_repository())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(repository=get_user_repository())


def get_toggle_user_status_use_case() -> ToggleUserStatusUseCase:
    return ToggleUserStatusUseCase(repository=get_user_repository())


def get_check_availability_use_case() -> CheckAvailabilityUseCase:
    return CheckAvailabilityUseCase(repository=get_user_repository())


def get_count_enabled_users_use_case() -> CountEnabledUsersUseCase:
    return CountEnabledUsersUseCase(repository=get_user_repository())
