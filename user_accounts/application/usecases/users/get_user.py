"""
===============================================================================
USE CASE: Get User
===============================================================================

Class:
    GetUserUseCase

Responsibilities:
    - Resolver un usuario por id o por username.
    - Devolver NOT_FOUND si no existe.

Collaborators:
    - UserRepository: find_by_id, find_by_username
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import UserRepository
from .user_results import UserResult, UserView, not_found_error


class GetUserUseCase:
    """Use Case (Query): lectura puntual de un usuario."""

    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def by_id(self, user_id: int) -> UserResult:
        user = self._users.find_by_id(user_id)
        if user is None:
            return UserResult(error=not_found_error("id", user_id))
        return UserResult(user=UserView.from_user(user))

    def by_username(self, username: str) -> UserResult:
        user = self._users.find_by_username(username)
        if user is None:
            return UserResult(error=not_found_error("username", username))
        return UserResult(user=UserView.from_user(user))
