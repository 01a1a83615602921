"""
===============================================================================
TARJETA CRC — application/user_service.py
===============================================================================

Class:
    UserService (Facade)

Responsabilidades:
    - Agrupar los casos de uso de cuentas detrás de un único objeto para
      callers que no son HTTP (scripts, tareas de arranque, flujo de login).
    - Mantener el mismo contrato de resultados tipados que los use cases.

Colaboradores:
    - application.usecases.users.*
    - UserRepository / PasswordHasher (puertos)

Notas:
    - No agrega reglas: delega 1:1 en los use cases.
===============================================================================
"""

from __future__ import annotations

from ..domain.entities import UserRole
from ..domain.repositories import UserRepository
from ..domain.services import PasswordHasher
from .usecases.users import (
    CheckAvailabilityUseCase,
    CountEnabledUsersUseCase,
    DeleteUserResult,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    RecordLastLoginUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    ToggleUserStatusUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
    UserListResult,
    UserResult,
)


class UserService:
    def __init__(
        self, repository: UserRepository, password_hasher: PasswordHasher
    ) -> None:
        self._register = RegisterUserUseCase(repository, password_hasher)
        self._get = GetUserUseCase(repository)
        self._list = ListUsersUseCase(repository)
        self._update = UpdateUserUseCase(repository)
        self._delete = DeleteUserUseCase(repository)
        self._toggle = ToggleUserStatusUseCase(repository)
        self._last_login = RecordLastLoginUseCase(repository)
        self._availability = CheckAvailabilityUseCase(repository)
        self._count_enabled = CountEnabledUsersUseCase(repository)

    def register(self, input_data: RegisterUserInput) -> UserResult:
        return self._register.execute(input_data)

    def get_by_id(self, user_id: int) -> UserResult:
        return self._get.by_id(user_id)

    def get_by_username(self, username: str) -> UserResult:
        return self._get.by_username(username)

    def get_all(self) -> UserListResult:
        return self._list.all()

    def get_users_by_role(self, role: UserRole) -> UserListResult:
        return self._list.by_role(role)

    def update(self, user_id: int, input_data: UpdateUserInput) -> UserResult:
        return self._update.execute(user_id, input_data)

    def delete(self, user_id: int) -> DeleteUserResult:
        return self._delete.execute(user_id)

    def toggle_status(self, user_id: int) -> UserResult:
        return self._toggle.execute(user_id)

    def update_last_login(self, username: str) -> bool:
        return self._last_login.execute(username)

    def username_exists(self, username: str) -> bool:
        return self._availability.username_exists(username).exists

    def email_exists(self, email: str) -> bool:
        return self._availability.email_exists(email).exists

    def get_enabled_users_count(self) -> int:
        return self._count_enabled.execute().count
