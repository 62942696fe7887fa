from abc import ABC


class UserError(ABC, Exception):
    """Base class for user-facing errors.

    All errors that inherit from UserError carry a message that is safe
    to show to the person driving the client (the equivalent of a toast).
    They should not contain any sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when the API rejects the credentials."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class AccessDeniedError(UserError):
    """Raised when the API refuses access to a resource."""


class ValidationError(UserError):
    """Raised when input fails validation, locally or on the server."""


class ApiError(UserError):
    """Raised for any other failed request.

    ``status_code`` is the HTTP status, or 0 when no response was received.
    """

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code
