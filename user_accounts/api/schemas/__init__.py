"""Pydantic request/response schemas."""

from .users import RegisterUserReq, UpdateUserReq, UserRes

__all__ = ["RegisterUserReq", "UpdateUserReq", "UserRes"]
