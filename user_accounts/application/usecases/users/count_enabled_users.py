"""
===============================================================================
USE CASE: Count Enabled Users
===============================================================================

Class:
    CountEnabledUsersUseCase

Responsibilities:
    - Contar cuentas con is_enabled = true (dashboard administrativo).

Collaborators:
    - UserRepository: count_enabled
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import UserRepository
from .user_results import CountResult


class CountEnabledUsersUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self) -> CountResult:
        return CountResult(count=self._users.count_enabled())
