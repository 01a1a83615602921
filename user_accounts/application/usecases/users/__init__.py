"""User account use cases."""

from .check_availability import CheckAvailabilityUseCase
from .count_enabled_users import CountEnabledUsersUseCase
from .delete_user import DeleteUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .record_last_login import RecordLastLoginUseCase
from .register_user import RegisterUserInput, RegisterUserUseCase
from .toggle_user_status import ToggleUserStatusUseCase
from .update_user import UpdateUserInput, UpdateUserUseCase
from .user_results import (
    CountResult,
    DeleteUserResult,
    ExistsResult,
    UserError,
    UserErrorCode,
    UserListResult,
    UserResult,
    UserView,
)

__all__ = [
    "CheckAvailabilityUseCase",
    "CountEnabledUsersUseCase",
    "CountResult",
    "DeleteUserResult",
    "DeleteUserUseCase",
    "ExistsResult",
    "GetUserUseCase",
    "ListUsersUseCase",
    "RecordLastLoginUseCase",
    "RegisterUserInput",
    "RegisterUserUseCase",
    "ToggleUserStatusUseCase",
    "UpdateUserInput",
    "UpdateUserUseCase",
    "UserError",
    "UserErrorCode",
    "UserListResult",
    "UserResult",
    "UserView",
]
