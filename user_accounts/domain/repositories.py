"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define the persistence contract for user accounts (port).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- domain.entities: User, UserRole
- infrastructure.repositories: postgres / in_memory implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Lookups return None when absent; "not found" is a use-case decision.
- Writes that violate username/email uniqueness raise UniqueConstraintError.
"""

from typing import List, Optional, Protocol

from .entities import User, UserRole


class UserRepository(Protocol):
    """
    R: Interface for user account persistence.

    Implementations must provide:
      - id assignment on insert
      - created_at/updated_at stamping (updated_at strictly advances on update)
      - unique enforcement on username and email
      - atomic writes per call
    """

    # --- Escritura ---
    def insert(self, user: User) -> User:
        """R: Persist a new user and return it with id and timestamps."""
        ...

    def update(self, user: User) -> Optional[User]:
        """R: Persist mutations of an existing user; None if the id vanished."""
        ...

    def delete_by_id(self, user_id: int) -> bool:
        """R: Remove a user; True if a row was deleted."""
        ...

    # --- Lookups puntuales ---
    def find_by_id(self, user_id: int) -> Optional[User]: ...

    def find_by_username(self, username: str) -> Optional[User]: ...

    def find_by_email(self, email: str) -> Optional[User]: ...

    def find_by_username_or_email(self, identifier: str) -> Optional[User]:
        """R: Exact match against either column."""
        ...

    # --- Existencia ---
    def exists_by_username(self, username: str) -> bool: ...

    def exists_by_email(self, email: str) -> bool: ...

    def exists_by_id(self, user_id: int) -> bool: ...

    # --- Listados (orden estable: id ASC) ---
    def find_all(self) -> List[User]: ...

    def find_by_role(self, role: UserRole) -> List[User]: ...

    def find_enabled(self) -> List[User]: ...

    def find_by_first_name_containing(self, fragment: str) -> List[User]:
        """R: Case-insensitive substring match on first_name."""
        ...

    def find_by_last_name_containing(self, fragment: str) -> List[User]:
        """R: Case-insensitive substring match on last_name."""
        ...

    # --- Conteos ---
    def count_by_role(self, role: UserRole) -> int: ...

    def count_enabled(self) -> int: ...

    # --- Salud ---
    def ping(self) -> bool:
        """R: Cheap connectivity probe for health checks."""
        ...
