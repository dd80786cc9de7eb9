"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserListItem,
    UserPublic,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AuthResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "RegisterRequest",
    "UserListItem",
    "UserPublic",
]
