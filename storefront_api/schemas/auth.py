# ==============================================================================
# AUTH SCHEMAS - Login & Token
# ==============================================================================
# Credentials, token response and JWT payload models
# ==============================================================================

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from storefront_api.schemas.base import BaseSchema


class LoginRequest(BaseSchema):
    """Credentials for password login. The password is compared as sent."""

    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr = Field(..., examples=["test@email.com"])
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """Login result: a signed bearer token."""

    access_token: str


class JwtPayload(BaseModel):
    """
    Claims carried by an access token.

    The account id travels as the ``accountId`` claim; ``iat`` and ``exp``
    are Unix timestamps.
    """

    model_config = ConfigDict(populate_by_name=True)

    email: str
    account_id: int = Field(..., alias="accountId")
    iat: int
    exp: int
