"""Request/response schemas for registration, login and user listing."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RegisterRequest(BaseModel):
    """
    Registration body. Required fields are optional here so that a missing value is
    reported by the credential gateway as a 400, not by FastAPI as a 422.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str | None = None
    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    company_name: str | None = None
    address: str | None = Field(
        default=None,
        validation_alias=AliasChoices("address", "address1"),
    )
    city: str | None = None
    zip: str | None = None
    country: str | None = None
    vat_id: str | None = None
    # Accepted for compatibility with older clients; never used when creating an account.
    role: str | None = None


class LoginRequest(BaseModel):
    """Credentials for login. ``email`` accepts either an email address or a username."""

    email: str | None = Field(default=None, description="Email or username")
    password: str | None = Field(default=None, description="Password")


class UserPublic(BaseModel):
    """Account summary returned with a session token."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    role: str


class AuthResponse(BaseModel):
    """Response for successful registration or login."""

    success: bool = True
    message: str
    user: UserPublic
    token: str = Field(..., description="JWT session token, valid for 24 hours")


class UserListItem(BaseModel):
    """Full account record for the user listing (no password hash)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    username: str
    email: str
    role: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    company_name: str | None = None
    address: str | None = None
    city: str | None = None
    zip: str | None = None
    country: str | None = None
    vat_id: str | None = None
    created_at: datetime
    updated_at: datetime


class ErrorResponse(BaseModel):
    """Body for every non-2xx response."""

    success: bool = False
    message: str
