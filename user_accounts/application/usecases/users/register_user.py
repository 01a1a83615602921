"""
===============================================================================
USE CASE: Register User
===============================================================================

Name:
    Register User Use Case

Business Goal:
    Crear una cuenta nueva garantizando:
      - forma válida de username, email, password y nombres
      - unicidad de username y email
      - rol inicial USER y todos los flags de cuenta en true
      - password persistido sólo como hash

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    RegisterUserUseCase

Responsibilities:
    - Validar inputs (validation.py).
    - Pre-chequear unicidad (best-effort; el índice único es la autoridad).
    - Hashear el password y construir la entidad User.
    - Persistir y devolver la proyección UserView.

Collaborators:
    - UserRepository: exists_by_username, exists_by_email, insert
    - PasswordHasher: hash
    - user_results: UserResult / UserError / UserErrorCode

Error Mapping:
    - VALIDATION_ERROR: input inválido
    - CONFLICT: username o email ya tomados (pre-check o carrera en insert)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.exceptions import UniqueConstraintError
from ....crosscutting.logger import logger
from ....domain.entities import DEFAULT_ROLE, User
from ....domain.repositories import UserRepository
from ....domain.services import PasswordHasher
from .user_results import UserResult, UserView, conflict_error
from .validation import (
    check_email,
    check_name,
    check_password,
    check_username,
    first_error,
)


@dataclass(frozen=True)
class RegisterUserInput:
    """DTO de entrada. `password` es texto plano y muere en este use case."""

    username: str
    email: str
    password: str
    first_name: str | None = None
    last_name: str | None = None

    def __repr__(self) -> str:
        return (
            f"RegisterUserInput(username={self.username!r}, "
            f"email={self.email!r}, password='***')"
        )


class RegisterUserUseCase:
    """Use Case (Command): alta de cuenta de usuario."""

    def __init__(
        self, repository: UserRepository, password_hasher: PasswordHasher
    ) -> None:
        self._users = repository
        self._hasher = password_hasher

    def execute(self, input_data: RegisterUserInput) -> UserResult:
        error = first_error(
            check_username(input_data.username),
            check_email(input_data.email),
            check_password(input_data.password),
            check_name(input_data.first_name, "firstName"),
            check_name(input_data.last_name, "lastName"),
        )
        if error is not None:
            return UserResult(error=error)

        if self._users.exists_by_username(input_data.username):
            return UserResult(error=conflict_error("username", input_data.username))
        if self._users.exists_by_email(input_data.email):
            return UserResult(error=conflict_error("email", input_data.email))

        user = User(
            username=input_data.username,
            email=input_data.email,
            password_hash=self._hasher.hash(input_data.password),
            first_name=input_data.first_name,
            last_name=input_data.last_name,
            role=DEFAULT_ROLE,
            is_enabled=True,
            is_account_non_locked=True,
            is_account_non_expired=True,
            is_credentials_non_expired=True,
        )

        try:
            created = self._users.insert(user)
        except UniqueConstraintError as exc:
            # Carrera perdida contra otro registro concurrente.
            value = input_data.email if exc.field == "email" else input_data.username
            return UserResult(error=conflict_error(exc.field, value))

        logger.info(
            "Usuario registrado",
            extra={"user_id": created.id, "username": created.username},
        )
        return UserResult(user=UserView.from_user(created))
