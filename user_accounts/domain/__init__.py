"""
Domain layer: user account entities and ports.
"""

from .entities import DEFAULT_ROLE, User, UserRole
from .repositories import UserRepository
from .services import PasswordHasher

__all__ = [
    "DEFAULT_ROLE",
    "PasswordHasher",
    "User",
    "UserRepository",
    "UserRole",
]
