"""
===============================================================================
TARJETA CRC — application/usecases/users/validation.py
===============================================================================

Módulo:
    Reglas de forma/longitud de los datos de cuenta

Responsabilidades:
    - Centralizar límites (username, email, password, nombres) y el patrón de email.
    - Validar inputs de registro y actualización devolviendo el primer error.

Colaboradores:
    - register_user / update_user (consumidores)
    - api.schemas.users (reusa límites y patrón para el 400 temprano)

Notas:
    - Funciones puras: sin I/O, sin excepciones; devuelven UserError | None.
===============================================================================
"""

from __future__ import annotations

import re

from .user_results import UserError, UserErrorCode

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
# RFC 5321: tope de un path; la columna users.email es VARCHAR(255).
EMAIL_MAX_LENGTH = 254
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 100
NAME_MAX_LENGTH = 50

# Forma local@dominio: local con átomos RFC-5322, dominio por labels DNS.
EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)*$"
)


def _invalid(message: str, field: str) -> UserError:
    return UserError(
        code=UserErrorCode.VALIDATION_ERROR, message=message, field=field
    )


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def check_username(value: str | None) -> UserError | None:
    if value is None or not value.strip():
        return _invalid("Username is required", "username")
    if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
        return _invalid(
            f"Username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters",
            "username",
        )
    return None


def check_email(value: str | None) -> UserError | None:
    if value is None or not value.strip():
        return _invalid("Email is required", "email")
    if len(value) > EMAIL_MAX_LENGTH:
        return _invalid(
            f"Email must not exceed {EMAIL_MAX_LENGTH} characters", "email"
        )
    if not is_valid_email(value):
        return _invalid("Email should be valid", "email")
    return None


def check_password(value: str | None) -> UserError | None:
    if not value:
        return _invalid("Password is required", "password")
    if not PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH:
        return _invalid(
            f"Password must be between {PASSWORD_MIN_LENGTH} and "
            f"{PASSWORD_MAX_LENGTH} characters",
            "password",
        )
    return None


def check_name(value: str | None, field: str) -> UserError | None:
    if value is not None and len(value) > NAME_MAX_LENGTH:
        return _invalid(
            f"{field} must not exceed {NAME_MAX_LENGTH} characters", field
        )
    return None


def first_error(*errors: UserError | None) -> UserError | None:
    return next((e for e in errors if e is not None), None)
