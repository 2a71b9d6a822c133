"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RegisterRequest(BaseModel):
    """New account details; registered accounts always get the 'user' role."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    email: str = Field(default="", max_length=255, description="Contact email")
    password: str = Field(..., min_length=8, max_length=128, description="Password")


class CurrentUser(BaseModel):
    """Identity extracted from a verified token, for dependency injection."""

    username: str
    role: str


class UserListItem(BaseModel):
    """User entry for responses (no password hash)."""

    id: int
    username: str
    email: str
    role: str


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    success: bool = True
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    user: UserListItem


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "User registered successfully"
    user: UserListItem


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[UserListItem]
