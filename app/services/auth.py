"""Authenticator: credential checks, token issuing and token verification."""

import logging

import jwt

from app.core.config import Settings
from app.core.errors import (
    ContentValidationError,
    ForbiddenError,
    InvalidCredentialsError,
    UnauthenticatedError,
)
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.models.user import User
from app.schemas.auth import CurrentUser
from app.services.users import UserStore

logger = logging.getLogger(__name__)


class Authenticator:
    """Stateless token auth over a UserStore; no server-side sessions."""

    def __init__(self, users: UserStore, settings: Settings) -> None:
        self.users = users
        self.settings = settings

    def login(self, username: str, password: str) -> tuple[str, User]:
        """
        Return (token, user) for valid credentials.

        Unknown username and wrong password raise the same InvalidCredentialsError.
        """
        user = self.users.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed for username=%r", username)
            raise InvalidCredentialsError()
        token = create_access_token(sub=user.username, role=user.role, settings=self.settings)
        logger.info("Login succeeded for username=%r role=%s", user.username, user.role)
        return token, user

    def verify(self, token: str | None) -> CurrentUser:
        """Return the identity in a valid token; raise UnauthenticatedError otherwise."""
        if not token:
            raise UnauthenticatedError("missing", "Access token required")
        try:
            payload = decode_access_token(token, self.settings)
        except jwt.ExpiredSignatureError as e:
            raise UnauthenticatedError("expired") from e
        except jwt.InvalidSignatureError as e:
            raise UnauthenticatedError("invalid") from e
        except jwt.DecodeError as e:
            raise UnauthenticatedError("malformed") from e
        except jwt.PyJWTError as e:
            raise UnauthenticatedError("invalid") from e
        sub = payload.get("sub")
        role = payload.get("role")
        if not isinstance(sub, str) or not sub or not isinstance(role, str):
            raise UnauthenticatedError("invalid", "Invalid token payload")
        return CurrentUser(username=sub, role=role)

    def register(self, username: str, email: str, password: str) -> User:
        """Create a 'user'-role account. Raises ConflictError for a taken username."""
        username = username.strip()
        if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
            raise ContentValidationError("Invalid username length.")
        if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
            raise ContentValidationError(
                f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
            )
        password_hash = hash_password(password, rounds=self.settings.BCRYPT_ROUNDS)
        return self.users.add(username, email.strip(), password_hash, role="user")

    @staticmethod
    def require_role(identity: CurrentUser, role: str) -> CurrentUser:
        """Return identity if it carries role; raise ForbiddenError otherwise."""
        if identity.role != role:
            raise ForbiddenError(f"{role.capitalize()} access required")
        return identity
