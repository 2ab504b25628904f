"""
Authentication request/response schemas.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CredentialsRequest(BaseModel):
    """
    Register/login request body.

    Both fields are optional here so that missing or empty values reach the
    service and come back as a 400 with the documented message instead of
    FastAPI's default 422.
    """
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


class RegisterRequest(CredentialsRequest):
    """Registration request body."""


class LoginRequest(CredentialsRequest):
    """Login request body."""


class RegisterResponse(BaseModel):
    """Registration response."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(
        default="User registered successfully",
        description="Success message"
    )
    user_id: str = Field(..., alias="userId", description="Created user ID")


class LoginResponse(BaseModel):
    """Login response. Carries no digest and no session token."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(default="Login successful", description="Success message")
    user_id: str = Field(..., alias="userId", description="Authenticated user ID")
    email: str = Field(..., description="Stored (lowercased) email")


class ErrorResponse(BaseModel):
    """Body of every failed request."""
    message: str = Field(..., description="Human-readable error message")
    error: Optional[str] = Field(None, description="Terse diagnostic on 5xx")
