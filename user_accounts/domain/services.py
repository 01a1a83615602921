"""
CRC — domain/services.py

Name
- Domain Service Interfaces (Protocols)

Responsibilities
- Define the password hashing port used at write time.

Collaborators
- identity.passwords.Argon2PasswordHasher (implementation)
- application.usecases.users.register_user (consumer)

Notes
- The digest is opaque to the core: it is stored and compared, never parsed.
"""

from typing import Protocol


class PasswordHasher(Protocol):
    """R: One-way password hashing with a verification counterpart."""

    def hash(self, plaintext: str) -> str:
        """R: Return a salted digest of plaintext."""
        ...

    def verify(self, plaintext: str, digest: str) -> bool:
        """R: True if plaintext matches digest; never raises on mismatch."""
        ...
