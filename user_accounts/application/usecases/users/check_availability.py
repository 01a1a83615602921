"""
===============================================================================
USE CASE: Check Availability
===============================================================================

Class:
    CheckAvailabilityUseCase

Responsibilities:
    - Responder si un username o email ya está registrado (read-only).

Collaborators:
    - UserRepository: exists_by_username, exists_by_email
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import UserRepository
from .user_results import ExistsResult


class CheckAvailabilityUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def username_exists(self, username: str) -> ExistsResult:
        return ExistsResult(exists=self._users.exists_by_username(username))

    def email_exists(self, email: str) -> ExistsResult:
        return ExistsResult(exists=self._users.exists_by_email(email))
