"""
===============================================================================
USE CASE: List Users
===============================================================================

Class:
    ListUsersUseCase

Responsibilities:
    - Listar todos los usuarios o filtrar por rol.
    - Proyectar cada registro a UserView (nunca expone password_hash).

Collaborators:
    - UserRepository: find_all, find_by_role

Notas:
    - Orden estable heredado del repositorio (id ASC).
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import UserRole
from ....domain.repositories import UserRepository
from .user_results import UserListResult, UserView


class ListUsersUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def all(self) -> UserListResult:
        return UserListResult(
            users=[UserView.from_user(u) for u in self._users.find_all()]
        )

    def by_role(self, role: UserRole) -> UserListResult:
        return UserListResult(
            users=[UserView.from_user(u) for u in self._users.find_by_role(role)]
        )
