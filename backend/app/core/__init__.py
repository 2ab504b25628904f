"""
Core module - Security, errors, and logging utilities.
"""
from app.core.errors import (
    AuthServiceError,
    AuthSystemError,
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    ServiceUnavailableError,
    ValidationError,
)
from app.core.security import CredentialHasher, get_credential_hasher

__all__ = [
    "AuthServiceError",
    "AuthSystemError",
    "AuthenticationError",
    "ConfigurationError",
    "ConflictError",
    "ServiceUnavailableError",
    "ValidationError",
    "CredentialHasher",
    "get_credential_hasher",
]
