"""In-memory repository implementations (tests / local)."""

from .user import InMemoryUserRepository

__all__ = ["InMemoryUserRepository"]
