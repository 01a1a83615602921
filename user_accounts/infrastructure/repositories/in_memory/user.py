"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / APP_ENV=test / local sin DB).
  - Replicar las garantías del repo Postgres:
      - ids incrementales (BIGSERIAL)
      - unicidad de username y email (UniqueConstraintError)
      - created_at == updated_at en insert
      - updated_at avanza estrictamente en update
  - Mantener ordering determinístico alineado con Postgres: id ASC.

Collaborators:
  - domain.entities.User, UserRole
  - domain.repositories.UserRepository (contrato a implementar)
  - crosscutting.exceptions.UniqueConstraintError

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Repo puro: NO aplica reglas de negocio (eso vive en los use cases).
  - User es inmutable, así que no hace falta copiar al devolver.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Dict, List, Optional

from ....crosscutting.exceptions import UniqueConstraintError
from ....domain.entities import User, UserRole

_ONE_MICROSECOND = timedelta(microseconds=1)


class InMemoryUserRepository:
    """
    Repositorio in-memory, thread-safe, para usuarios.

    Modelo mental:
    - _users es la "tabla" en memoria (id -> User).
    - _next_id emula la secuencia BIGSERIAL (nunca reutiliza ids).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._next_id = 1

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _now() -> datetime:
        """R: Fuente única de tiempo (UTC)."""
        return datetime.now(timezone.utc)

    def _sorted(self, predicate: Callable[[User], bool]) -> List[User]:
        return [
            u for _, u in sorted(self._users.items()) if predicate(u)
        ]

    def _assert_unique(self, user: User) -> None:
        """Debe llamarse con el lock tomado."""
        for other in self._users.values():
            if other.id == user.id:
                continue
            if other.username == user.username:
                raise UniqueConstraintError("username")
            if other.email == user.email:
                raise UniqueConstraintError("email")

    # =========================================================
    # Escritura
    # =========================================================
    def insert(self, user: User) -> User:
        with self._lock:
            candidate = replace(user, id=None)
            self._assert_unique(candidate)

            created_at = user.created_at or self._now()
            stored = replace(
                user,
                id=self._next_id,
                created_at=created_at,
                updated_at=user.updated_at or created_at,
            )
            self._users[stored.id] = stored
            self._next_id += 1
            return stored

    def update(self, user: User) -> Optional[User]:
        if user.id is None:
            raise ValueError("update() requires a persisted user (id is None)")

        with self._lock:
            current = self._users.get(user.id)
            if current is None:
                return None

            self._assert_unique(user)

            previous = current.updated_at or current.created_at or self._now()
            stored = replace(
                user,
                created_at=current.created_at,
                updated_at=max(self._now(), previous + _ONE_MICROSECOND),
            )
            self._users[user.id] = stored
            return stored

    def delete_by_id(self, user_id: int) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    # =========================================================
    # Lookups
    # =========================================================
    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next(
                (u for u in self._users.values() if u.username == username), None
            )

    def find_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def find_by_username_or_email(self, identifier: str) -> Optional[User]:
        with self._lock:
            matches = self._sorted(
                lambda u: u.username == identifier or u.email == identifier
            )
            return matches[0] if matches else None

    def exists_by_username(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def exists_by_id(self, user_id: int) -> bool:
        with self._lock:
            return user_id in self._users

    # =========================================================
    # Listados
    # =========================================================
    def find_all(self) -> List[User]:
        with self._lock:
            return self._sorted(lambda u: True)

    def find_by_role(self, role: UserRole) -> List[User]:
        with self._lock:
            return self._sorted(lambda u: u.role == role)

    def find_enabled(self) -> List[User]:
        with self._lock:
            return self._sorted(lambda u: u.is_enabled)

    def find_by_first_name_containing(self, fragment: str) -> List[User]:
        needle = fragment.casefold()
        with self._lock:
            return self._sorted(
                lambda u: u.first_name is not None
                and needle in u.first_name.casefold()
            )

    def find_by_last_name_containing(self, fragment: str) -> List[User]:
        needle = fragment.casefold()
        with self._lock:
            return self._sorted(
                lambda u: u.last_name is not None and needle in u.last_name.casefold()
            )

    # =========================================================
    # Conteos / salud
    # =========================================================
    def count_by_role(self, role: UserRole) -> int:
        return len(self.find_by_role(role))

    def count_enabled(self) -> int:
        return len(self.find_enabled())

    def ping(self) -> bool:
        return True
