"""Pydantic Schemas for Stormtrooper.

This module contains all Pydantic models used for request/response
validation and serialization.
"""

from stormtrooper.schemas.user import (
    DeviceTokenUpdate,
    ExternalAccountResponse,
    UserResponse,
)
from stormtrooper.schemas.auth import (
    SUPPORTED_PROVIDERS,
    DeviceRegistration,
    ExternalAuthRequest,
    TokenPayload,
    TokenResponse,
)
from stormtrooper.schemas.stream import StreamCreate, StreamResponse

__all__ = [
    "SUPPORTED_PROVIDERS",
    "DeviceRegistration",
    "DeviceTokenUpdate",
    "ExternalAccountResponse",
    "ExternalAuthRequest",
    "StreamCreate",
    "StreamResponse",
    "TokenPayload",
    "TokenResponse",
    "UserResponse",
]
