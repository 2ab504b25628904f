"""
Authentication service for user registration and login.
"""
import asyncio
import logging
import re
from typing import Any, Awaitable, Optional, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.config import Settings
from app.core.errors import (
    AUTH_SYSTEM_ERROR_MESSAGE,
    AuthSystemError,
    config_error,
    duplicate_user,
    invalid_credentials,
    invalid_email,
    invalid_password,
    missing_fields,
    service_unavailable,
    weak_password,
)
from app.core.security import CredentialHasher, get_credential_hasher
from app.database.connections import ConnectionProvider
from app.database.databases import auth_db
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# local@domain.tld, loosely
EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    """Lowercase an email for storage and lookup."""
    return email.lower()


def is_timeout(exc: BaseException) -> bool:
    """True for asyncio timeouts and driver errors flagged as timeouts."""
    if isinstance(exc, asyncio.TimeoutError):
        return True
    return isinstance(exc, PyMongoError) and exc.timeout


class AuthService:
    """Service for registration and login against the users collection."""

    def __init__(
        self,
        provider: ConnectionProvider,
        settings: Settings,
        hasher: Optional[CredentialHasher] = None,
    ):
        """Initialize with the connection provider and settings."""
        self.provider = provider
        self.settings = settings
        self.hasher = hasher or get_credential_hasher(settings.bcrypt_rounds)

    def _require_configuration(self) -> None:
        if not self.settings.database_configured:
            logger.error("DATABASE_URL is NOT set.")
            raise config_error()

    async def _store(self, awaitable: Awaitable[T]) -> T:
        """Await a store call, bounded by the configured timeout."""
        try:
            return await asyncio.wait_for(
                awaitable, self.settings.db_timeout_seconds
            )
        except (asyncio.TimeoutError, PyMongoError) as e:
            if is_timeout(e):
                logger.error(
                    f"MongoDB call timed out after {self.settings.db_timeout_seconds}s"
                )
                raise service_unavailable() from e
            raise

    async def _users(self) -> AsyncIOMotorCollection:
        try:
            handle = await self.provider.acquire()
        except (asyncio.TimeoutError, PyMongoError) as e:
            if is_timeout(e):
                raise service_unavailable() from e
            raise
        return handle.db[auth_db.Collections.USERS]

    async def register_user(self, request: RegisterRequest) -> RegisterResponse:
        """
        Register a new user.

        Args:
            request: Registration request with email and password

        Returns:
            RegisterResponse with created user ID

        Raises:
            ValidationError: Missing fields, bad email shape, short password,
                NUL character in the password
            ConfigurationError: DATABASE_URL not set
            ConflictError: Email already registered
            ServiceUnavailableError: Store did not answer in time
            AuthSystemError: Store did not return an inserted ID
        """
        email, password = request.email, request.password

        if not email or not password:
            raise missing_fields()

        if not EMAIL_PATTERN.search(email):
            raise invalid_email()

        if len(password) < MIN_PASSWORD_LENGTH:
            raise weak_password()

        # bcrypt cannot take NUL bytes
        if "\x00" in password:
            raise invalid_password()

        self._require_configuration()

        email = normalize_email(email)
        users = await self._users()

        # Fast path; the unique index below is the real guard
        existing = await self._store(
            users.find_one({auth_db.Fields.EMAIL: email})
        )
        if existing:
            logger.info(f"Registration rejected, email already exists: {email}")
            raise duplicate_user()

        user = User(email=email, password=await self.hasher.hash(password))

        try:
            result = await self._store(users.insert_one(user.to_document()))
        except DuplicateKeyError as e:
            logger.info(f"Registration lost insert race for email: {email}")
            raise duplicate_user() from e

        if not result.inserted_id:
            raise AuthSystemError(
                "Internal server error during registration",
                code="InsertFailed",
                error="InsertFailed",
            )

        user_id = str(result.inserted_id)
        logger.info(f"New user registered: {email}, ID: {user_id}")

        return RegisterResponse(user_id=user_id)

    async def login(self, request: LoginRequest) -> LoginResponse:
        """
        Check an email/password pair against the stored digest.

        Unknown email and wrong password raise the same error so callers
        cannot tell which half was wrong.

        Args:
            request: Login request with email and password

        Returns:
            LoginResponse with the user ID and stored email

        Raises:
            ValidationError: Missing fields
            ConfigurationError: DATABASE_URL not set
            AuthenticationError: Invalid credentials
            AuthSystemError: Stored password is not a usable digest
            ServiceUnavailableError: Store did not answer in time
        """
        email, password = request.email, request.password

        if not email or not password:
            raise missing_fields()

        self._require_configuration()

        email = normalize_email(email)
        users = await self._users()

        logger.info(f"Login attempt for email: {email}")

        user_doc: Optional[dict[str, Any]] = await self._store(
            users.find_one({auth_db.Fields.EMAIL: email})
        )

        if not user_doc:
            logger.info(f"User not found: {email}")
            raise invalid_credentials()

        digest = user_doc.get(auth_db.Fields.PASSWORD)
        if not self.hasher.is_digest(digest):
            logger.error(f"Password for user {email} is not a valid digest or is missing.")
            raise AuthSystemError(AUTH_SYSTEM_ERROR_MESSAGE)

        if not await self.hasher.verify(password, digest):
            logger.info(f"Invalid password for user: {email}")
            raise invalid_credentials()

        logger.info(f"Login successful for user: {email}")

        return LoginResponse(
            user_id=str(user_doc[auth_db.Fields.ID]),
            email=user_doc[auth_db.Fields.EMAIL],
        )
