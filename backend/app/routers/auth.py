"""
Authentication router for registration and login.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from app.config import Settings, get_settings
from app.core.errors import AuthServiceError, AuthSystemError
from app.core.security import get_credential_hasher
from app.database.connections import ConnectionProvider, get_connection_provider
from app.schemas.auth import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


async def get_auth_service(
    settings: Settings = Depends(get_settings),
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(
        provider,
        settings,
        get_credential_hasher(settings.bcrypt_rounds),
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def register(
    body: Optional[RegisterRequest] = None,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user account.

    - **email**: Valid email address (must be unique, case-insensitive)
    - **password**: Password (minimum 6 characters)
    """
    try:
        return await auth_service.register_user(body or RegisterRequest())
    except AuthServiceError:
        raise
    except Exception as e:
        logger.exception("Registration API error")
        raise AuthSystemError(
            "Internal server error during registration",
            code="InternalError",
            error=type(e).__name__,
        ) from e


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Check email and password",
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def login(
    body: Optional[LoginRequest] = None,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate with email and password.

    Returns the user ID and email on success. No session or token is
    issued; the caller decides how to keep the user signed in.
    """
    try:
        return await auth_service.login(body or LoginRequest())
    except AuthServiceError:
        raise
    except Exception as e:
        logger.exception("Login API error")
        raise AuthSystemError(
            "Internal server error during login",
            code="InternalError",
            error=type(e).__name__,
        ) from e
