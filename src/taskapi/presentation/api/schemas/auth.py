"""Authentication schemas for request/response models.

Request fields are deliberately loose (optional strings): the application
layer validates them explicitly and reports every field error at once.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from taskapi.presentation.api.schemas.common import CamelModel


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    email: str | None = Field(default=None, description="User's email address")
    password: str | None = Field(
        default=None,
        description="Password (8-128 characters, at most 72 bytes)",
    )
    name: str | None = Field(default=None, description="Display name")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane.doe@example.com",
                "password": "Sup3r$ecret",
                "name": "Jane Doe",
            },
        },
    )


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: str | None = None
    password: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane.doe@example.com",
                "password": "Sup3r$ecret",
            },
        },
    )


class UserResponse(CamelModel):
    """Registered user profile."""

    id: UUID
    username: str
    name: str
    email: str
    phone_number: str | None = None
    address: str | None = None


class TokenResponse(BaseModel):
    """Bearer token issued on login."""

    type: str = Field(default="Bearer", description="Token scheme")
    token: str = Field(..., description="Signed JWT access token")


class PrincipalResponse(BaseModel):
    """The authenticated caller as seen by the API."""

    id: UUID
    email: str
    username: str
    active: bool
    verified: bool
