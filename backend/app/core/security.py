"""
Security utilities for password hashing and verification.
"""
from functools import lru_cache

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext
from passlib.exc import PasswordValueError

from app.core.errors import AUTH_SYSTEM_ERROR_MESSAGE, AuthSystemError


class CredentialHasher:
    """
    Salted, adaptive one-way hashing for passwords using bcrypt.

    bcrypt embeds the salt and work factor in the digest, so ``verify``
    needs nothing but the stored digest. Comparison is constant-time
    inside passlib/bcrypt.

    The async methods push the CPU-bound work to the threadpool so the
    event loop keeps serving other requests.
    """

    def __init__(self, rounds: int = 10):
        """Initialize with the bcrypt work factor (log2 of iterations)."""
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash_sync(self, plain_password: str) -> str:
        """
        Hash a plain password using bcrypt.

        Args:
            plain_password: The plain text password to hash

        Returns:
            Hashed password string
        """
        return self._context.hash(plain_password)

    def verify_sync(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plain password against a hashed password.

        Args:
            plain_password: The plain text password to verify
            hashed_password: The stored digest to compare against

        Returns:
            True if password matches, False otherwise. A password bcrypt
            cannot take (e.g. one containing NUL) never matches.

        Raises:
            AuthSystemError: If the digest is not a recognizable bcrypt hash
        """
        try:
            return self._context.verify(plain_password, hashed_password)
        except PasswordValueError:
            return False
        except (ValueError, TypeError) as e:
            raise AuthSystemError(
                AUTH_SYSTEM_ERROR_MESSAGE,
                error=type(e).__name__,
            ) from e

    def is_digest(self, value: object) -> bool:
        """Check whether a stored value looks like a digest we can verify."""
        if not isinstance(value, str) or not value:
            return False
        return self._context.identify(value, required=False) is not None

    async def hash(self, plain_password: str) -> str:
        return await run_in_threadpool(self.hash_sync, plain_password)

    async def verify(self, plain_password: str, hashed_password: str) -> bool:
        return await run_in_threadpool(
            self.verify_sync, plain_password, hashed_password
        )


@lru_cache
def get_credential_hasher(rounds: int = 10) -> CredentialHasher:
    """Get a cached hasher for the given work factor."""
    return CredentialHasher(rounds)
