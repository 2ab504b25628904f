"""
Credential Auth Backend - FastAPI Application

Email/password registration and login backed by MongoDB.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.core.errors import (
    AuthServiceError,
    INVALID_BODY_MESSAGE,
    ServiceUnavailableError,
    config_error,
)
from app.core.logging import configure_logging
from app.database.connections import close_connections, get_connection_provider
from app.database.indexes import create_indexes
from app.routers import auth, health

logger = logging.getLogger(__name__)


def check_startup_configuration(settings: Settings) -> None:
    """
    Fail fast when the connection string is missing.

    Raises:
        ConfigurationError: If DATABASE_URL is not set
    """
    if not settings.database_configured:
        logger.critical(
            "DATABASE_URL is NOT set. Define it in the environment or .env.local "
            "and restart the server."
        )
        raise config_error()
    logger.info("DATABASE_URL is set.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Check configuration
    - Connect to MongoDB
    - Create indexes

    Shutdown:
    - Close the database connection
    """
    settings = get_settings()
    configure_logging(settings)
    logger.info("Starting up Credential Auth Backend...")

    check_startup_configuration(settings)

    try:
        handle = await get_connection_provider().acquire()
        await create_indexes(handle.db)
        logger.info("Database connected and indexes created")
    except Exception as e:
        logger.warning(f"Database initialization warning: {type(e).__name__}: {e}")

    yield

    logger.info("Shutting down Credential Auth Backend...")
    await close_connections()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title="Credential Auth API",
    description="""
## Credential Auth API

Email/password registration and login for a web application.

### Endpoints
- `POST /api/auth/register` with `{"email", "password"}` creates a user
- `POST /api/auth/login` with `{"email", "password"}` checks credentials

Every error response is `{"message": "..."}`. Login failures return the
same message whether the email is unknown or the password is wrong.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AuthServiceError)
async def auth_service_error_handler(request: Request, exc: AuthServiceError):
    """Render service errors as ``{"message": ...}``."""
    headers = None
    if isinstance(exc, ServiceUnavailableError):
        headers = {"Retry-After": "5"}
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    """Malformed bodies are a 400, same shape as every other error."""
    logger.info(f"Rejected malformed body on {request.url.path}")
    return JSONResponse(
        status_code=400,
        content={"message": INVALID_BODY_MESSAGE},
    )


# Include routers
app.include_router(health.router)
app.include_router(auth.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Credential Auth API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
