"""
Identity edge: password hashing, principal loading and JWT-based access gate.
"""

from .passwords import Argon2PasswordHasher
from .principal import Principal, load_principal

__all__ = ["Argon2PasswordHasher", "Principal", "load_principal"]
