"""
===============================================================================
TARJETA CRC — api/schemas/users.py
===============================================================================

Responsabilidades:
  - Definir el contrato JSON de /api/users (camelCase en el wire).
  - Validar forma/longitud antes de llegar al caso de uso (400 temprano).
  - Mapear UserView -> UserRes sin exponer password ni flags de cuenta.

Colaboradores:
  - application.usecases.users.validation (límites y patrón de email)
  - application.usecases.users.UserView
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...application.usecases.users import UserView
from ...application.usecases.users.validation import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    is_valid_email,
)
from ...domain.entities import UserRole

_WIRE_CONFIG = ConfigDict(populate_by_name=True)


class RegisterUserReq(BaseModel):
    model_config = _WIRE_CONFIG

    username: str = Field(
        ..., min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH
    )
    email: str = Field(..., max_length=EMAIL_MAX_LENGTH)
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )
    first_name: str | None = Field(
        default=None, alias="firstName", max_length=NAME_MAX_LENGTH
    )
    last_name: str | None = Field(
        default=None, alias="lastName", max_length=NAME_MAX_LENGTH
    )

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str) -> str:
        if not is_valid_email(v):
            raise ValueError("Email should be valid")
        return v


class UpdateUserReq(BaseModel):
    """Update parcial: todo opcional; "" en username/email = no provisto."""

    model_config = _WIRE_CONFIG

    username: str | None = None
    email: str | None = Field(default=None, max_length=EMAIL_MAX_LENGTH)
    first_name: str | None = Field(
        default=None, alias="firstName", max_length=NAME_MAX_LENGTH
    )
    last_name: str | None = Field(
        default=None, alias="lastName", max_length=NAME_MAX_LENGTH
    )
    is_enabled: bool | None = Field(default=None, alias="isEnabled")

    @field_validator("username")
    @classmethod
    def username_length(cls, v: str | None) -> str | None:
        if v and not USERNAME_MIN_LENGTH <= len(v) <= USERNAME_MAX_LENGTH:
            raise ValueError(
                f"Username must be between {USERNAME_MIN_LENGTH} and "
                f"{USERNAME_MAX_LENGTH} characters"
            )
        return v

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, v: str | None) -> str | None:
        if v and not is_valid_email(v):
            raise ValueError("Email should be valid")
        return v


class UserRes(BaseModel):
    model_config = _WIRE_CONFIG

    id: int
    username: str
    email: str
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    role: UserRole
    is_enabled: bool = Field(alias="isEnabled")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    last_login: datetime | None = Field(default=None, alias="lastLogin")

    @classmethod
    def from_view(cls, view: UserView) -> "UserRes":
        return cls(
            id=view.id,
            username=view.username,
            email=view.email,
            first_name=view.first_name,
            last_name=view.last_name,
            role=view.role,
            is_enabled=view.is_enabled,
            created_at=view.created_at,
            updated_at=view.updated_at,
            last_login=view.last_login,
        )
