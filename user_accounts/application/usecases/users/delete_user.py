"""
===============================================================================
USE CASE: Delete User
===============================================================================

Class:
    DeleteUserUseCase

Responsibilities:
    - Verificar existencia (NOT_FOUND si no existe).
    - Eliminar el registro.

Collaborators:
    - UserRepository: exists_by_id, delete_by_id

Notas:
    - Sin transición de vuelta: un usuario borrado no se recupera.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from .user_results import DeleteUserResult, not_found_error


class DeleteUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: int) -> DeleteUserResult:
        if not self._users.exists_by_id(user_id):
            return DeleteUserResult(deleted=False, error=not_found_error("id", user_id))

        # Otro request pudo borrarlo entre el chequeo y el delete.
        if not self._users.delete_by_id(user_id):
            return DeleteUserResult(deleted=False, error=not_found_error("id", user_id))

        logger.info("Usuario eliminado", extra={"user_id": user_id})
        return DeleteUserResult(deleted=True)
