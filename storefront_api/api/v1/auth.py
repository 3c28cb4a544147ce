# ==============================================================================
# AUTH ENDPOINTS - Authentication Routes
# ==============================================================================
# Register, login and current-account endpoints
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter, status

from storefront_api.api.dependencies import AuthServiceDep, CurrentAccount
from storefront_api.schemas.account import AccountResponse, SignUp
from storefront_api.schemas.auth import LoginRequest, TokenResponse
from storefront_api.schemas.base import APIResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=APIResponse[AccountResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register new account",
    description="Create an account with email, password and name.",
)
async def register(
    signup: SignUp,
    service: AuthServiceDep,
) -> APIResponse[AccountResponse]:
    account = await service.register(signup)
    return APIResponse.ok(data=account, message="Account registered successfully")


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Account login",
    description="Exchange email and password for a JWT access token.",
)
async def login(
    credentials: LoginRequest,
    service: AuthServiceDep,
) -> TokenResponse:
    return await service.login(credentials)


@router.get(
    "/me",
    response_model=APIResponse[AccountResponse],
    summary="Current account",
    description="Return the account the bearer token belongs to.",
)
async def me(account: CurrentAccount) -> APIResponse[AccountResponse]:
    return APIResponse.ok(data=account)
