"""
===============================================================================
USE CASE: Toggle User Status
===============================================================================

Class:
    ToggleUserStatusUseCase

Responsibilities:
    - Alternar is_enabled (Active <-> Disabled) y persistir.
    - NOT_FOUND si el usuario no existe.

Collaborators:
    - UserRepository: find_by_id, update
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from .user_results import UserResult, UserView, not_found_error


class ToggleUserStatusUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: int) -> UserResult:
        current = self._users.find_by_id(user_id)
        if current is None:
            return UserResult(error=not_found_error("id", user_id))

        updated = self._users.update(replace(current, is_enabled=not current.is_enabled))
        if updated is None:
            return UserResult(error=not_found_error("id", user_id))

        logger.info(
            "Estado de usuario alternado",
            extra={"user_id": updated.id, "is_enabled": updated.is_enabled},
        )
        return UserResult(user=UserView.from_user(updated))
