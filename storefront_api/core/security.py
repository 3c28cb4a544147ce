# ==============================================================================
# SECURITY MODULE - Password Hashing & JWT Signing
# ==============================================================================
# Argon2id password hashing and HMAC-signed JWT access tokens
# ==============================================================================

from __future__ import annotations

import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from jose import ExpiredSignatureError, JWTError, jwt

from storefront_api.core.exceptions import InvalidTokenError, TokenExpiredError
from storefront_api.core.settings import Settings


# ==============================================================================
# PASSWORD HASHING
# ==============================================================================

class PasswordManager:
    """
    Salted one-way password hashing with Argon2id.

    Every call to :meth:`hash_password` draws a fresh random 16-byte salt,
    so hashing the same password twice yields two different strings that
    both verify.

    Argon2id Parameters (OWASP recommended defaults):
        - Memory:      64 MB (65536 KB)
        - Iterations:  3
        - Parallelism: 4
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=32,
            salt_len=16,
        )
        self._dummy_hash: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "PasswordManager":
        """Build a manager from the ARGON2_* settings."""
        return cls(
            time_cost=settings.ARGON2_TIME_COST,
            memory_cost=settings.ARGON2_MEMORY_COST,
            parallelism=settings.ARGON2_PARALLELISM,
        )

    def hash_password(self, password: str) -> str:
        """
        Hash a plaintext password.

        Example:
            >>> pm = PasswordManager()
            >>> pm.hash_password("12345678").startswith("$argon2id$")
            True
        """
        return self._hasher.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a plaintext password against a stored hash.

        The digest comparison inside argon2 is constant-time. A malformed
        stored hash counts as a mismatch.

        Returns:
            True if the password matches, False otherwise
        """
        try:
            return self._hasher.verify(hashed_password, plain_password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    def dummy_verify(self, plain_password: str) -> None:
        """
        Run one verification against a throwaway hash and discard the result.

        Used on the unknown-email login path so it does the same Argon2 work
        as a wrong password.
        """
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash(secrets.token_urlsafe(16))
        self.verify_password(plain_password, self._dummy_hash)


# ==============================================================================
# JWT SIGNING
# ==============================================================================

class TokenSigner(ABC):
    """
    Contract for issuing and reading bearer tokens.

    ``sign`` stamps ``iat``/``exp`` onto the given claims; ``decode`` returns
    the claims only after checking signature and expiry.
    """

    @abstractmethod
    def sign(self, claims: Dict[str, Any]) -> str:
        """Sign ``claims`` into a token string."""
        pass

    @abstractmethod
    def decode(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a token.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is malformed or tampered with
        """
        pass


class JwtSigner(TokenSigner):
    """
    HMAC JWT signer backed by python-jose.

    Tokens carry ``iat`` and ``exp`` as integer Unix timestamps.

    Example:
        >>> signer = JwtSigner("x" * 32, expires_delta=timedelta(hours=1))
        >>> token = signer.sign({"email": "a@b.c", "accountId": 1})
        >>> signer.decode(token)["accountId"]
        1
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: Optional[timedelta] = None,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_delta = expires_delta or timedelta(minutes=600)

    @classmethod
    def from_settings(cls, settings: Settings) -> "JwtSigner":
        """Build a signer from SECRET_KEY / ALGORITHM / ACCESS_TOKEN_EXPIRE_MINUTES."""
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    def sign(self, claims: Dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        to_encode = dict(claims)
        to_encode["iat"] = int(now.timestamp())
        to_encode["exp"] = int((now + self._expires_delta).timestamp())

        return jwt.encode(
            to_encode,
            self._secret_key,
            algorithm=self._algorithm,
        )

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            raise InvalidTokenError(message=f"Invalid token: {str(e)}")


def read_unverified_claims(token: str) -> Dict[str, Any]:
    """
    Read the claims of a token WITHOUT checking its signature or expiry.

    Only for introspection in tests and debugging. Authenticated request
    paths must go through :meth:`TokenSigner.decode`.

    Raises:
        InvalidTokenError: If the token cannot be parsed at all
    """
    try:
        return jwt.get_unverified_claims(token)
    except JWTError as e:
        raise InvalidTokenError(message=f"Invalid token: {str(e)}")
