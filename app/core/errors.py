"""Domain exceptions raised by services and translated to HTTP errors by the routes."""


class ServiceError(Exception):
    """Base class for expected failures; carries a client-safe message and status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ContentValidationError(ServiceError):
    """Raised when required input is missing or malformed."""

    status_code = 400


class InvalidCategoryError(ServiceError):
    """Raised when a category does not normalize to 'basic' or 'advanced'."""

    status_code = 400

    def __init__(self, message: str = 'Invalid category. Use "basic" or "advanced"') -> None:
        super().__init__(message)


class InvalidCredentialsError(ServiceError):
    """Raised on login failure. Unknown user and wrong password share one message."""

    status_code = 401

    def __init__(self, message: str = "Invalid username or password") -> None:
        super().__init__(message)


class UnauthenticatedError(ServiceError):
    """
    Raised when a bearer token is missing or fails verification.

    reason is one of 'missing', 'malformed', 'expired', 'invalid' and is meant
    for logs only; clients always get the same 401.
    """

    status_code = 401

    def __init__(self, reason: str, message: str = "Invalid or expired token") -> None:
        self.reason = reason
        super().__init__(message)


class ForbiddenError(ServiceError):
    """Raised when an authenticated user lacks the required role."""

    status_code = 403

    def __init__(self, message: str = "Admin access required") -> None:
        super().__init__(message)


class CategoryNotFoundError(ServiceError):
    status_code = 404

    def __init__(self, message: str = "Category not found") -> None:
        super().__init__(message)


class ContentNotFoundError(ServiceError):
    status_code = 404

    def __init__(self, message: str = "Content not found") -> None:
        super().__init__(message)


class ConflictError(ServiceError):
    """Raised when creating a record that already exists (e.g. duplicate username)."""

    status_code = 409


class PayloadTooLargeError(ServiceError):
    status_code = 413
