"""External Authentication API Routes

Signing in with an external provider account (Facebook).
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stormtrooper.auth.dependencies import OptionalUser
from stormtrooper.auth.jwt import create_access_token
from stormtrooper.config import settings
from stormtrooper.db.session import get_db
from stormtrooper.models import User
from stormtrooper.schemas.auth import ExternalAuthRequest, TokenResponse
from stormtrooper.schemas.user import UserResponse
from stormtrooper.services import accounts

router = APIRouter(prefix="/auth", tags=["auth"])


def build_token_response(user: User, created: bool = False, merged: bool = False) -> TokenResponse:
    """Issue a session token for ``user``."""
    return TokenResponse(
        access_token=create_access_token(subject=user.id),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=UserResponse.model_validate(user),
        created=created,
        merged=merged,
    )


@router.post("/external", response_model=TokenResponse)
async def external_authentication(
    external: ExternalAuthRequest,
    current_user: OptionalUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """Sign in with an external account.

    Links the account to the current user, signs into the user it is
    already linked to, or merges the current user into that user.
    """
    result = await accounts.process_external_authentication(db, current_user, external)
    return build_token_response(result.user, created=result.created, merged=result.merged)
