"""
Name: Admin Bootstrap Script

Responsibilities:
  - Create the first account with a chosen role (idempotent)
  - Hash passwords with Argon2
  - Store the user through the PostgreSQL repository
  - Optionally print a Bearer token for the ADMIN routes

Usage:
  DATABASE_URL=postgresql://... python scripts/create_admin.py --username admin \
      --email admin@example.com --print-token
"""

from __future__ import annotations

import argparse
import getpass
import sys

from user_accounts.application.usecases.users.validation import (
    check_email,
    check_password,
    check_username,
    first_error,
)
from user_accounts.crosscutting.config import get_settings
from user_accounts.domain.entities import User, UserRole
from user_accounts.identity.auth_users import create_access_token
from user_accounts.identity.passwords import Argon2PasswordHasher
from user_accounts.identity.principal import Principal
from user_accounts.infrastructure.db.pool import close_pool, init_pool
from user_accounts.infrastructure.repositories import PostgresUserRepository


def _prompt(label: str) -> str:
    value = input(f"{label}: ").strip()
    if not value:
        raise SystemExit(f"{label} is required.")
    return value


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str]) -> argparse.Namespace:
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Create the first admin user (idempotent)."
    )
    parser.add_argument("--username", help="Account username")
    parser.add_argument("--email", help="Account email")
    parser.add_argument(
        "--password",
        help="User password (omit to be prompted securely)",
    )
    parser.add_argument(
        "--role",
        default=UserRole.ADMIN.value,
        choices=[role.value for role in UserRole],
        help="User role (default: ADMIN)",
    )
    parser.add_argument(
        "--disabled",
        action="store_true",
        help="Create user as disabled",
    )
    parser.add_argument(
        "--print-token",
        action="store_true",
        help="Print a signed access token for the account",
    )
    return parser.parse_args(argv)


def _ensure_user(
    repo: PostgresUserRepository,
    *,
    username: str,
    email: str,
    password: str,
    role: UserRole,
    enabled: bool,
) -> User:
    existing = repo.find_by_username(username) or repo.find_by_email(email)
    if existing is not None:
        print(
            "User already exists: "
            f"id={existing.id} username={existing.username} "
            f"role={existing.role.value} enabled={existing.is_enabled}"
        )
        return existing

    created = repo.insert(
        User(
            username=username,
            email=email,
            password_hash=Argon2PasswordHasher().hash(password),
            role=role,
            is_enabled=enabled,
        )
    )
    print(
        f"Created user: id={created.id} username={created.username} "
        f"role={created.role.value}"
    )
    return created


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    settings = get_settings()

    username = (args.username or _prompt("Username")).strip()
    email = (args.email or _prompt("Email")).strip()
    password = args.password or _prompt_password()

    error = first_error(
        check_username(username), check_email(email), check_password(password)
    )
    if error is not None:
        raise SystemExit(error.message)

    init_pool(
        database_url=settings.database_url,
        min_size=1,
        max_size=1,
    )
    try:
        user = _ensure_user(
            PostgresUserRepository(),
            username=username,
            email=email,
            password=password,
            role=UserRole(args.role),
            enabled=not args.disabled,
        )
    finally:
        close_pool()

    if args.print_token:
        token, expires_in = create_access_token(Principal.from_user(user))
        print(f"Access token (expires in {expires_in}s):")
        print(token)


if __name__ == "__main__":
    main()
