"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserListItem,
    UsersListResponse,
)
from app.schemas.content import (
    ContentCreate,
    ContentResponse,
    ContentUpdate,
    MessageResponse,
)
from app.schemas.health import HealthResponse

__all__ = [
    "ContentCreate",
    "ContentResponse",
    "ContentUpdate",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "TokenResponse",
    "UserListItem",
    "UsersListResponse",
]
