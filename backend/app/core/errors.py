"""
Error taxonomy for the authentication API.

Every error carries the HTTP status it maps to, a stable ``code`` for
programmatic checks, and the human-readable ``message`` returned to the
caller. Only 500-class errors may add a terse ``error`` diagnostic.
"""
from typing import Optional

from fastapi import status

# Messages returned to callers
MISSING_FIELDS_MESSAGE = "Email and password are required"
INVALID_EMAIL_MESSAGE = "Invalid email format"
WEAK_PASSWORD_MESSAGE = "Password must be at least 6 characters long"
INVALID_PASSWORD_MESSAGE = "Password must not contain null characters"
INVALID_BODY_MESSAGE = "Invalid request body"
CONFIG_ERROR_MESSAGE = "Server configuration error"
DUPLICATE_USER_MESSAGE = "User with this email already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
AUTH_SYSTEM_ERROR_MESSAGE = "Authentication error"
SERVICE_UNAVAILABLE_MESSAGE = "Service temporarily unavailable"


class AuthServiceError(Exception):
    """Base class for errors rendered as ``{"message": ...}`` responses."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: str = "InternalError"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        error: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.error = error

    def to_body(self) -> dict:
        """Response body for this error."""
        body = {"message": self.message}
        if self.error is not None and self.status_code >= 500:
            body["error"] = self.error
        return body


class ValidationError(AuthServiceError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "InvalidBody"


class ConflictError(AuthServiceError):
    """A user with the same normalized email already exists."""

    status_code = status.HTTP_409_CONFLICT
    default_code = "DuplicateUser"


class AuthenticationError(AuthServiceError):
    """Bad credentials. The message never says which half was wrong."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "InvalidCredentials"


class ConfigurationError(AuthServiceError):
    """Missing or invalid environment setup."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "ConfigError"


class AuthSystemError(AuthServiceError):
    """Unexpected store failure or data corruption."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "AuthSystemError"


class ServiceUnavailableError(AuthServiceError):
    """The store did not answer in time. Safe to retry."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_code = "ServiceUnavailable"


def missing_fields() -> ValidationError:
    return ValidationError(MISSING_FIELDS_MESSAGE, code="MissingFields")


def invalid_email() -> ValidationError:
    return ValidationError(INVALID_EMAIL_MESSAGE, code="InvalidEmail")


def weak_password() -> ValidationError:
    return ValidationError(WEAK_PASSWORD_MESSAGE, code="WeakPassword")


def invalid_password() -> ValidationError:
    return ValidationError(INVALID_PASSWORD_MESSAGE, code="InvalidPassword")


def config_error() -> ConfigurationError:
    return ConfigurationError(CONFIG_ERROR_MESSAGE)


def duplicate_user() -> ConflictError:
    return ConflictError(DUPLICATE_USER_MESSAGE)


def invalid_credentials() -> AuthenticationError:
    return AuthenticationError(INVALID_CREDENTIALS_MESSAGE)


def service_unavailable() -> ServiceUnavailableError:
    return ServiceUnavailableError(SERVICE_UNAVAILABLE_MESSAGE)
