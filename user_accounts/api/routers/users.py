"""
===============================================================================
TARJETA CRC — api/routers/users.py
===============================================================================

Responsabilidades:
  - Exponer endpoints HTTP de cuentas de usuario bajo /api/users.
  - Aplicar el gate de rol (ADMIN) en rutas administrativas.
  - Convertir DTOs HTTP <-> inputs de use cases.
  - Mapear errores de use cases a RFC7807 (error_mapping).

Colaboradores:
  - container: factories de use cases
  - identity.auth_users.require_role
  - api.schemas.users: RegisterUserReq / UpdateUserReq / UserRes

Rutas públicas:
  register, get por id/username, update, check-username, check-email
Rutas ADMIN:
  listar, delete, toggle-status, listar por rol, count/enabled
===============================================================================
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from ...application.usecases.users import (
    CheckAvailabilityUseCase,
    CountEnabledUsersUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    RegisterUserInput,
    RegisterUserUseCase,
    ToggleUserStatusUseCase,
    UpdateUserInput,
    UpdateUserUseCase,
)
from ...container import (
    get_check_availability_use_case,
    get_count_enabled_users_use_case,
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_register_user_use_case,
    get_toggle_user_status_use_case,
    get_update_user_use_case,
)
from ...crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ...domain.entities import UserRole
from ...identity.auth_users import require_role
from ...identity.principal import Principal
from ..error_mapping import raise_delete_error, raise_user_error
from ..schemas.users import RegisterUserReq, UpdateUserReq, UserRes

router = APIRouter(
    prefix="/api/users", tags=["users"], responses=OPENAPI_ERROR_RESPONSES
)

require_admin = require_role(UserRole.ADMIN)


# =============================================================================
# Rutas públicas
# =============================================================================
@router.post("/register", response_model=UserRes, status_code=status.HTTP_201_CREATED)
def register_user(
    req: RegisterUserReq,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    result = use_case.execute(
        RegisterUserInput(
            username=req.username,
            email=req.email,
            password=req.password,
            first_name=req.first_name,
            last_name=req.last_name,
        )
    )
    if result.error is not None:
        raise_user_error(result.error)
    return UserRes.from_view(result.user)


@router.get("/username/{username}", response_model=UserRes)
def get_user_by_username(
    username: str,
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = use_case.by_username(username)
    if result.error is not None:
        raise_user_error(result.error, username)
    return UserRes.from_view(result.user)


@router.get("/check-username/{username}", response_model=bool)
def check_username(
    username: str,
    use_case: CheckAvailabilityUseCase = Depends(get_check_availability_use_case),
):
    return use_case.username_exists(username).exists


@router.get("/check-email/{email}", response_model=bool)
def check_email(
    email: str,
    use_case: CheckAvailabilityUseCase = Depends(get_check_availability_use_case),
):
    return use_case.email_exists(email).exists


@router.get("/{user_id}", response_model=UserRes)
def get_user(
    user_id: int,
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = use_case.by_id(user_id)
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return UserRes.from_view(result.user)


@router.put("/{user_id}", response_model=UserRes)
def update_user(
    user_id: int,
    req: UpdateUserReq,
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    result = use_case.execute(
        user_id,
        UpdateUserInput(
            username=req.username,
            email=req.email,
            first_name=req.first_name,
            last_name=req.last_name,
            is_enabled=req.is_enabled,
        ),
    )
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return UserRes.from_view(result.user)


# =============================================================================
# Rutas ADMIN
# =============================================================================
@router.get("", response_model=List[UserRes])
def list_users(
    _admin: Principal = Depends(require_admin),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    return [UserRes.from_view(u) for u in use_case.all().users]


@router.get("/role/{role}", response_model=List[UserRes])
def list_users_by_role(
    role: UserRole,
    _admin: Principal = Depends(require_admin),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    return [UserRes.from_view(u) for u in use_case.by_role(role).users]


@router.get("/count/enabled", response_model=int)
def count_enabled_users(
    _admin: Principal = Depends(require_admin),
    use_case: CountEnabledUsersUseCase = Depends(get_count_enabled_users_use_case),
):
    return use_case.execute().count


@router.patch("/{user_id}/toggle-status", response_model=UserRes)
def toggle_user_status(
    user_id: int,
    _admin: Principal = Depends(require_admin),
    use_case: ToggleUserStatusUseCase = Depends(get_toggle_user_status_use_case),
):
    result = use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error, user_id)
    return UserRes.from_view(result.user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    _admin: Principal = Depends(require_admin),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    result = use_case.execute(user_id)
    if result.error is not None:
        raise_delete_error(result.error, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
