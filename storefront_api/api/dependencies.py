# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI providers that assemble services and resolve the bearer token
# ==============================================================================

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront_api.core.constants import ErrorMessages
from storefront_api.core.exceptions import UnauthorizedError
from storefront_api.core.security import JwtSigner, PasswordManager, TokenSigner
from storefront_api.core.settings import settings
from storefront_api.database.base_store import BaseStore
from storefront_api.database.factory import DatabaseFactory
from storefront_api.database.query import QueryTranslator
from storefront_api.schemas.account import AccountResponse
from storefront_api.services.account_service import AccountService
from storefront_api.services.auth_service import AuthService
from storefront_api.services.product_service import ProductService

# Bearer scheme; missing header is reported by get_current_account
bearer_scheme = HTTPBearer(auto_error=False)


# ==============================================================================
# INFRASTRUCTURE DEPENDENCIES
# ==============================================================================

async def get_store() -> BaseStore:
    """Initialized store from the factory."""
    return DatabaseFactory.get_store()


def get_translator() -> QueryTranslator:
    return QueryTranslator()


def get_signer() -> TokenSigner:
    return JwtSigner.from_settings(settings)


@lru_cache
def get_password_manager() -> PasswordManager:
    return PasswordManager.from_settings(settings)


StoreDep = Annotated[BaseStore, Depends(get_store)]
TranslatorDep = Annotated[QueryTranslator, Depends(get_translator)]
SignerDep = Annotated[TokenSigner, Depends(get_signer)]
PasswordManagerDep = Annotated[PasswordManager, Depends(get_password_manager)]


# ==============================================================================
# SERVICE DEPENDENCIES
# ==============================================================================

async def get_account_service(
    store: StoreDep,
    translator: TranslatorDep,
) -> AccountService:
    return AccountService(store, translator)


AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]


async def get_auth_service(
    account_service: AccountServiceDep,
    signer: SignerDep,
    password_manager: PasswordManagerDep,
) -> AuthService:
    return AuthService(account_service, signer, password_manager)


async def get_product_service(
    store: StoreDep,
    translator: TranslatorDep,
) -> ProductService:
    return ProductService(store, translator)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]


# ==============================================================================
# AUTHENTICATION DEPENDENCIES
# ==============================================================================

async def get_current_account(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    auth_service: AuthServiceDep,
) -> AccountResponse:
    """
    Resolve the ``Authorization: Bearer <jwt>`` header to an account.

    Raises:
        UnauthorizedError: If the header is missing, the token is invalid
            or expired, or the account no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(message=ErrorMessages.NOT_AUTHENTICATED)

    return await auth_service.authenticate(credentials.credentials)


CurrentAccount = Annotated[AccountResponse, Depends(get_current_account)]
