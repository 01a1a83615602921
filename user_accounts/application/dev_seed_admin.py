# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin (Local-only)
===============================================================================

Qué es:
    Asegura que exista una cuenta ADMIN para desarrollo cuando está configurado
    (DEV_SEED_ADMIN=true). Sin ella no hay forma de pasar el gate de las rutas
    administrativas en un entorno recién creado.

Seguridad:
    - Guard estricto: sólo corre con app_env local/development.
    - Settings ya rechaza DEV_SEED_ADMIN en producción.

CRC:
    Component: ensure_dev_admin
    Responsibilities:
      - Validar guard de ambiente
      - Asegurar usuario (create, o reset si force_reset)
    Collaborators:
      - UserRepository (puerto)
      - PasswordHasher (puerto)
      - Settings
===============================================================================
"""

from __future__ import annotations

from dataclasses import replace
from typing import Final

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.entities import User, UserRole
from ..domain.repositories import UserRepository
from ..domain.services import PasswordHasher

_ALLOWED_ENVS: Final[frozenset[str]] = frozenset({"local", "development"})


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env not in _ALLOWED_ENVS:
        raise RuntimeError(
            f"FATAL: DEV_SEED_ADMIN is enabled but ENV is '{env}' "
            "(must be 'local' or 'development')."
        )


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: PasswordHasher,
) -> User | None:
    """
    Ensure a development admin user exists if configured.

    Behavior:
      - If disabled: no-op (returns None)
      - If enabled:
          - Create user if missing
          - If force_reset: reset password, role ADMIN and enable
          - Otherwise: leave the existing account untouched
    """
    if not settings.dev_seed_admin:
        return None

    _assert_allowed_environment(settings)

    username = (settings.dev_seed_admin_username or "").strip()
    email = (settings.dev_seed_admin_email or "").strip()
    password = settings.dev_seed_admin_password or ""
    if not username or not email or not password:
        raise ValueError(
            "Dev seed admin is enabled but username/email/password are empty"
        )

    logger.info(
        "Dev seed admin: ensuring admin user",
        extra={
            "username": username,
            "force_reset": settings.dev_seed_admin_force_reset,
        },
    )

    existing = user_repo.find_by_username(username) or user_repo.find_by_email(
        email
    )

    if existing is None:
        created = user_repo.insert(
            User(
                username=username,
                email=email,
                password_hash=password_hasher.hash(password),
                role=UserRole.ADMIN,
            )
        )
        logger.info("Dev seed admin: user created", extra={"user_id": created.id})
        return created

    if settings.dev_seed_admin_force_reset:
        updated = user_repo.update(
            replace(
                existing,
                password_hash=password_hasher.hash(password),
                role=UserRole.ADMIN,
                is_enabled=True,
            )
        )
        logger.info(
            "Dev seed admin: user reset applied", extra={"user_id": existing.id}
        )
        return updated

    logger.info("Dev seed admin: user exists; skipping", extra={"user_id": existing.id})
    return existing
