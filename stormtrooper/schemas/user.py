"""User Schemas for Stormtrooper."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ExternalAccountResponse(BaseModel):
    """Linked external account (tokens are never exposed)."""

    id: str = Field(..., description="Account id at the provider")
    provider: str = Field(..., description="Provider name")

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    """Schema for user response."""

    id: str = Field(..., description="User ID")
    device_token: Optional[str] = Field(None, description="Device push token")
    external_accounts: List[ExternalAccountResponse] = Field(
        default_factory=list,
        description="Linked external accounts",
    )
    created_at: Optional[datetime] = Field(None, description="Account creation date")

    model_config = {"from_attributes": True}


class DeviceTokenUpdate(BaseModel):
    """Schema for updating the device push token."""

    device_token: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Push notification token of the device",
    )
