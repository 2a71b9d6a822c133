"""JWT login/registration and auth dependencies (get_current_user, require_admin)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.deps import get_authenticator
from app.core.errors import ForbiddenError, ServiceError, UnauthenticatedError
from app.models.user import User
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserListItem,
    UsersListResponse,
)
from app.services.auth import Authenticator

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _user_item(user: User) -> UserListItem:
    return UserListItem(id=user.id, username=user.username, email=user.email, role=user.role)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    auth: Annotated[Authenticator, Depends(get_authenticator)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    try:
        token, user = auth.login(body.username, body.password)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return TokenResponse(access_token=token, token_type="bearer", user=_user_item(user))


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    body: RegisterRequest,
    auth: Annotated[Authenticator, Depends(get_authenticator)],
) -> RegisterResponse:
    """Create a regular (non-admin) account."""
    try:
        user = auth.register(body.username, body.email, body.password)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return RegisterResponse(user=_user_item(user))


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth: Annotated[Authenticator, Depends(get_authenticator)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    token = credentials.credentials if credentials is not None else None
    try:
        return auth.verify(token)
    except UnauthenticatedError as e:
        logger.info(
            "Rejected token for %s %s: reason=%s",
            request.method,
            request.url.path,
            e.reason,
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    try:
        return Authenticator.require_role(current_user, "admin")
    except ForbiddenError as e:
        logger.info(
            "Denied admin access to username=%r role=%s",
            current_user.username,
            current_user.role,
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e


@router.get("/me", response_model=CurrentUser)
def read_current_user(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Return the identity carried by the bearer token."""
    return current_user


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    auth: Annotated[Authenticator, Depends(get_authenticator)],
) -> UsersListResponse:
    """List all users (admin only)."""
    return UsersListResponse(users=[_user_item(u) for u in auth.users.list_users()])
