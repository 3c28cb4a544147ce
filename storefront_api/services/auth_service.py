# ==============================================================================
# AUTH SERVICE - Registration, Login & Token Verification
# ==============================================================================
# Credential hashing, password login and stateless JWT bearer tokens
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, Final, Optional

from pydantic import ValidationError as PydanticValidationError

from storefront_api.core.constants import ErrorMessages
from storefront_api.core.exceptions import (
    ConflictError,
    InvalidTokenError,
    UnauthorizedError,
)
from storefront_api.core.security import (
    PasswordManager,
    TokenSigner,
    read_unverified_claims,
)
from storefront_api.schemas.account import AccountInDB, AccountResponse, SignUp
from storefront_api.schemas.auth import JwtPayload, LoginRequest, TokenResponse
from storefront_api.services.account_service import AccountService

logger = logging.getLogger(__name__)


class AuthService:
    """
    Authentication service.

    Collaborators are passed in, so tests can hand it an in-memory account
    store and a fixed signer.

    Login failures all raise :class:`UnauthorizedError` with
    ``LOGIN_ERROR_MESSAGE``; the caller cannot tell an unknown email from a
    wrong password.

    Example:
        >>> auth = AuthService(account_service, JwtSigner.from_settings(settings), PasswordManager())
        >>> await auth.register(SignUp(email="test@email.com", password="12345678",
        ...                            first_name="John", last_name="Doe"))
        >>> token = await auth.login(LoginRequest(email="test@email.com", password="12345678"))
    """

    LOGIN_ERROR_MESSAGE: Final[str] = ErrorMessages.INVALID_CREDENTIALS

    def __init__(
        self,
        account_service: AccountService,
        signer: TokenSigner,
        password_manager: PasswordManager,
    ) -> None:
        self._accounts = account_service
        self._signer = signer
        self._passwords = password_manager

    # ==========================================================================
    # REGISTRATION & LOGIN
    # ==========================================================================

    async def register(self, signup: SignUp) -> AccountResponse:
        """
        Create an account with a salted hash of the given password.

        Returns:
            The new account, without any password field

        Raises:
            ConflictError: If the email is already registered
        """
        data = signup.model_dump(exclude={"password"})
        data["password_hash"] = self._passwords.hash_password(signup.password)

        try:
            account = await self._accounts.create(data)
        except ConflictError:
            logger.info("Registration rejected: email already registered")
            raise ConflictError(
                message=ErrorMessages.EMAIL_TAKEN,
                resource_type="account",
            )

        logger.info(f"Account registered: {account.id}")
        return account.to_response()

    async def login(self, credentials: LoginRequest) -> TokenResponse:
        """
        Exchange email and password for an access token.

        Raises:
            UnauthorizedError: On any credential failure
        """
        account = await self.validate_account(credentials)

        claims: Dict[str, Any] = {
            "email": account.email,
            "accountId": account.id,
        }
        return TokenResponse(access_token=self._signer.sign(claims))

    # ==========================================================================
    # CREDENTIAL VALIDATION
    # ==========================================================================

    async def validate_account(self, credentials: LoginRequest) -> AccountResponse:
        try:
            account = await self.validate_account_email(credentials.email)
        except UnauthorizedError:
            self._passwords.dummy_verify(credentials.password)
            raise
        self.validate_account_password(credentials.password, account.password_hash)
        return account.to_response()

    async def validate_account_email(self, email: str) -> AccountInDB:
        """
        Fetch the full account record, hash included, for ``email``.

        Raises:
            UnauthorizedError: If no account has this email
        """
        account = await self._accounts.find_one_where({"email": email})
        if account is None:
            logger.info("Login failed")
            raise UnauthorizedError(message=self.LOGIN_ERROR_MESSAGE)
        return account

    def validate_account_password(self, password: str, password_hash: str) -> None:
        """
        Check ``password`` against a stored hash. Has no side effects, so it
        can be called any number of times with the same result.

        Raises:
            UnauthorizedError: If the password does not match
        """
        if not self._passwords.verify_password(password, password_hash):
            logger.info("Login failed")
            raise UnauthorizedError(message=self.LOGIN_ERROR_MESSAGE)

    # ==========================================================================
    # TOKENS
    # ==========================================================================

    async def verify_payload(self, payload: JwtPayload) -> Optional[AccountResponse]:
        """
        Resolve a token payload to its account.

        Returns None when the account has been deleted since the token
        was issued.
        """
        account = await self._accounts.find_one_where({"email": payload.email})
        return account.to_response() if account else None

    def parse_jwt(self, token: str) -> JwtPayload:
        """
        Read a token's claims WITHOUT verifying signature or expiry.

        For tests and debugging only; use :meth:`authenticate` for requests.

        Raises:
            InvalidTokenError: If the token or its claims are malformed
        """
        return self._to_payload(read_unverified_claims(token))

    async def authenticate(self, token: str) -> AccountResponse:
        """
        Resolve a bearer token to the current account.

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is malformed or tampered with
            UnauthorizedError: If the account no longer exists
        """
        payload = self._to_payload(self._signer.decode(token))

        account = await self.verify_payload(payload)
        if account is None:
            raise UnauthorizedError(message=ErrorMessages.ACCOUNT_NOT_FOUND)
        return account

    @staticmethod
    def _to_payload(claims: Dict[str, Any]) -> JwtPayload:
        try:
            return JwtPayload.model_validate(claims)
        except PydanticValidationError:
            raise InvalidTokenError(message="Invalid token claims")
