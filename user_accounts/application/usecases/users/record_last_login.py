"""
===============================================================================
USE CASE: Record Last Login
===============================================================================

Class:
    RecordLastLoginUseCase

Responsibilities:
    - Sellar last_login = now para el username dado.
    - No-op silencioso si el usuario no existe.

Collaborators:
    - UserRepository: find_by_username, update

Notas:
    - Pensado para el flujo de autenticación; no tiene endpoint propio.
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordLastLoginUseCase:
    def __init__(
        self,
        repository: UserRepository,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._users = repository
        self._clock = clock

    def execute(self, username: str) -> bool:
        """Retorna True si se registró el login."""
        current = self._users.find_by_username(username)
        if current is None:
            return False

        updated = self._users.update(replace(current, last_login=self._clock()))
        if updated is None:
            return False

        logger.info("Último login registrado", extra={"user_id": updated.id})
        return True
