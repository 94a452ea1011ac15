"""User API Routes

Anonymous device registration and the current user's profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from stormtrooper.api.routes.auth import build_token_response
from stormtrooper.auth.dependencies import CurrentUser
from stormtrooper.db.session import get_db
from stormtrooper.schemas.auth import DeviceRegistration, TokenResponse
from stormtrooper.schemas.user import DeviceTokenUpdate, UserResponse
from stormtrooper.services import accounts

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    registration: DeviceRegistration,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """Register a new anonymous user for this device."""
    user = await accounts.register_user(db, device_token=registration.device_token)
    return build_token_response(user, created=True)


@router.get("/me", response_model=UserResponse)
async def read_current_user(current_user: CurrentUser) -> UserResponse:
    """Get the current user and their linked accounts."""
    return UserResponse.model_validate(current_user)


@router.put("/me/device-token", response_model=UserResponse)
async def update_device_token(
    update: DeviceTokenUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    """Store the push notification token reported by the device."""
    user = await accounts.save_user(db, current_user.id, update.device_token)
    return UserResponse.model_validate(user)
