"""
===============================================================================
USE CASE: Update User
===============================================================================

Name:
    Update User Use Case

Business Goal:
    Aplicar un update parcial sobre una cuenta existente:
      - sólo se tocan los campos provistos (no None)
      - username/email vacíos cuentan como "no provistos"
      - cambiar username/email a un valor tomado por otro registro => CONFLICT
      - nunca toca password, role, created_at ni id

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    UpdateUserUseCase

Responsibilities:
    - Cargar el usuario (NOT_FOUND si no existe).
    - Validar forma de los campos provistos.
    - Chequear unicidad sólo cuando el valor cambia.
    - Persistir con dataclasses.replace (User es inmutable).

Collaborators:
    - UserRepository: find_by_id, exists_by_username, exists_by_email, update
    - user_results / validation
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ....crosscutting.exceptions import UniqueConstraintError
from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from .user_results import UserResult, UserView, conflict_error, not_found_error
from .validation import check_email, check_name, check_username, first_error


@dataclass(frozen=True)
class UpdateUserInput:
    """Campos opcionales: None significa "no tocar"."""

    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_enabled: bool | None = None


def _provided(value: str | None) -> bool:
    return value is not None and value != ""


class UpdateUserUseCase:
    """Use Case (Command): update parcial de cuenta."""

    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: int, input_data: UpdateUserInput) -> UserResult:
        current = self._users.find_by_id(user_id)
        if current is None:
            return UserResult(error=not_found_error("id", user_id))

        new_username = input_data.username if _provided(input_data.username) else None
        new_email = input_data.email if _provided(input_data.email) else None

        error = first_error(
            check_username(new_username) if new_username is not None else None,
            check_email(new_email) if new_email is not None else None,
            check_name(input_data.first_name, "firstName"),
            check_name(input_data.last_name, "lastName"),
        )
        if error is not None:
            return UserResult(error=error)

        changes: dict[str, object] = {}

        if new_username is not None:
            if new_username != current.username and self._users.exists_by_username(
                new_username
            ):
                return UserResult(error=conflict_error("username", new_username))
            changes["username"] = new_username

        if new_email is not None:
            if new_email != current.email and self._users.exists_by_email(new_email):
                return UserResult(error=conflict_error("email", new_email))
            changes["email"] = new_email

        if input_data.first_name is not None:
            changes["first_name"] = input_data.first_name
        if input_data.last_name is not None:
            changes["last_name"] = input_data.last_name
        if input_data.is_enabled is not None:
            changes["is_enabled"] = input_data.is_enabled

        try:
            updated = self._users.update(replace(current, **changes))
        except UniqueConstraintError as exc:
            value = changes.get(exc.field, "")
            return UserResult(error=conflict_error(exc.field, value))

        if updated is None:
            return UserResult(error=not_found_error("id", user_id))

        logger.info(
            "Usuario actualizado",
            extra={"user_id": updated.id, "fields": sorted(changes)},
        )
        return UserResult(user=UserView.from_user(updated))
