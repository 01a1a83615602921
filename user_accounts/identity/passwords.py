"""
===============================================================================
TARJETA CRC — identity/passwords.py
===============================================================================

Módulo:
    Hasher de passwords (Argon2id)

Responsabilidades:
    - Implementar el puerto PasswordHasher del dominio.
    - Hashear passwords al registrar / resetear credenciales.
    - Verificar password vs hash almacenado sin lanzar en mismatch.

Colaboradores:
    - argon2.PasswordHasher (argon2-cffi)
    - crosscutting.exceptions.PasswordHashingError

Notas:
    - El digest es opaco para el core: incluye salt y parámetros.
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher as _Argon2
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from ..crosscutting.exceptions import PasswordHashingError


class Argon2PasswordHasher:
    """Adapter Argon2 del puerto PasswordHasher."""

    def __init__(self, hasher: _Argon2 | None = None) -> None:
        self._hasher = hasher or _Argon2()

    def hash(self, plaintext: str) -> str:
        try:
            return self._hasher.hash(plaintext)
        except HashingError as exc:
            raise PasswordHashingError(
                "Password hashing failed", original_error=exc
            ) from exc

    def verify(self, plaintext: str, digest: str) -> bool:
        """Verifica password vs hash almacenado."""
        try:
            return self._hasher.verify(digest, plaintext)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False
