"""Authentication Dependencies for FastAPI.

This module provides dependency injection functions for authenticating
the device session on Stormtrooper endpoints.
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from stormtrooper.auth.jwt import (
    verify_token,
    ACCESS_TOKEN_TYPE,
    TokenError,
    TokenExpiredError,
)
from stormtrooper.db.session import get_db
from stormtrooper.middleware.error_handler import UnauthorizedException
from stormtrooper.models import User
from stormtrooper.schemas.auth import TokenPayload
from stormtrooper.services import accounts


# Bearer token extraction; missing tokens are reported by the dependencies
bearer_scheme = HTTPBearer(scheme_name="JWT", auto_error=False)


async def get_token_payload(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> TokenPayload:
    """Extract and validate token payload from the Authorization header.

    Args:
        credentials: Bearer credentials from the Authorization header.

    Returns:
        Validated token payload.

    Raises:
        UnauthorizedException: If the token is missing, invalid or expired.
    """
    if credentials is None:
        raise UnauthorizedException("Authentication required")

    try:
        payload = verify_token(credentials.credentials, token_type=ACCESS_TOKEN_TYPE)
        return TokenPayload(**payload)
    except TokenExpiredError:
        raise UnauthorizedException("Token has expired")
    except (TokenError, ValidationError):
        raise UnauthorizedException("Could not validate credentials")


async def get_current_user(
    token_payload: Annotated[TokenPayload, Depends(get_token_payload)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the token.

    Raises:
        UnauthorizedException: If the user no longer exists, e.g. because
            it was merged into another user.
    """
    user = await accounts.get_user_by_id(db, token_payload.sub)
    if user is None:
        raise UnauthorizedException("User no longer exists")
    return user


async def get_optional_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Optional[User]:
    """Get user if authenticated, otherwise return None.

    Use this for endpoints that work for both authenticated and
    unauthenticated devices. Invalid tokens and tokens of users that no
    longer exist are treated as anonymous.
    """
    if credentials is None:
        return None

    try:
        payload = verify_token(credentials.credentials, token_type=ACCESS_TOKEN_TYPE)
        token_payload = TokenPayload(**payload)
    except (TokenError, ValidationError):
        return None

    return await accounts.get_user_by_id(db, token_payload.sub)


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]
