# ==============================================================================
# ACCOUNT SCHEMAS - Registration & Profile
# ==============================================================================
# Request/Response schemas for account management
# ==============================================================================

from __future__ import annotations

from typing import Annotated

from pydantic import ConfigDict, EmailStr, Field, StringConstraints

from storefront_api.core.constants import SecurityConstants
from storefront_api.schemas.base import BaseSchema, TimestampSchema


class SignUp(BaseSchema):
    """
    Schema for account registration.

    The password is hashed exactly as sent; only the names are trimmed.
    """

    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr = Field(
        ...,
        description="Account email address",
        examples=["test@email.com"],
    )
    password: str = Field(
        ...,
        min_length=SecurityConstants.MIN_PASSWORD_LENGTH,
        max_length=SecurityConstants.MAX_PASSWORD_LENGTH,
        description="Plaintext password (min 8 chars)",
    )
    first_name: Annotated[str, StringConstraints(strip_whitespace=True)] = Field(
        ...,
        min_length=1,
        max_length=100,
        examples=["John"],
    )
    last_name: Annotated[str, StringConstraints(strip_whitespace=True)] = Field(
        ...,
        min_length=1,
        max_length=100,
        examples=["Doe"],
    )


class AccountResponse(TimestampSchema):
    """Account as seen outside the service boundary. Never carries the hash."""

    id: int = Field(..., description="Account identifier")
    email: str = Field(..., description="Account email address")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")


class AccountInDB(AccountResponse):
    """Full account record with password hash (internal use)."""

    password_hash: str

    def to_response(self) -> AccountResponse:
        """Strip the hash."""
        return AccountResponse.model_validate(
            self.model_dump(exclude={"password_hash"})
        )
