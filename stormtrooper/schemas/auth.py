"""Authentication Schemas for Stormtrooper.

This module contains Pydantic models for device registration, external
account sign in and the session tokens returned to the client.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from stormtrooper.schemas.user import UserResponse


SUPPORTED_PROVIDERS = ("facebook",)


# =============================================================================
# Request Schemas
# =============================================================================

class DeviceRegistration(BaseModel):
    """Schema for registering a new anonymous user from a device."""

    device_token: Optional[str] = Field(
        None,
        max_length=255,
        description="Push notification token of the device",
    )


class ExternalAuthRequest(BaseModel):
    """Schema for signing in with an external provider account."""

    provider: str = Field(..., description="External provider name")
    id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Account id at the provider",
    )
    access_token: str = Field(..., min_length=1, description="Provider access token")
    refresh_token: Optional[str] = Field(None, description="Provider refresh token")

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        """Normalize the provider name and reject unsupported ones."""
        v = v.strip().lower()
        if v not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Provider must be one of: {list(SUPPORTED_PROVIDERS)}")
        return v


# =============================================================================
# Token Schemas
# =============================================================================

class TokenResponse(BaseModel):
    """Schema for a session token and the user it belongs to."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration in seconds")
    user: UserResponse = Field(..., description="Authenticated user")
    created: bool = Field(default=False, description="A new user was registered")
    merged: bool = Field(
        default=False,
        description="The session account was merged into the linked account",
    )


class TokenPayload(BaseModel):
    """Schema for decoded JWT token payload."""

    sub: str = Field(..., description="Subject (user ID)")
    type: str = Field(..., description="Token type")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
