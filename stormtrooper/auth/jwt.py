"""JWT Authentication Utilities for Stormtrooper.

This module provides JWT token creation and verification for the
session tokens handed to the mobile client.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Union

from jose import JWTError, jwt

from stormtrooper.config import settings


# Token types
ACCESS_TOKEN_TYPE = "access"


class TokenError(Exception):
    """Base exception for token-related errors."""
    pass


class TokenExpiredError(TokenError):
    """Raised when a token has expired."""
    pass


class TokenInvalidError(TokenError):
    """Raised when a token is invalid."""
    pass


def create_access_token(
    subject: Union[str, int],
    additional_claims: Optional[dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a JWT access token.

    Args:
        subject: The subject of the token (the user ID).
        additional_claims: Additional claims to include in the token.
        expires_delta: Custom expiration time. Defaults to settings value.

    Returns:
        Encoded JWT access token string.

    Example:
        >>> token = create_access_token(subject="aB3dE5gH7j")
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    now = datetime.now(timezone.utc)
    expire = now + expires_delta

    to_encode = {
        "sub": str(subject),
        "type": ACCESS_TOKEN_TYPE,
        "iat": now,
        "exp": expire,
        "nbf": now,
    }

    if additional_claims:
        to_encode.update(additional_claims)

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str, verify_exp: bool = True) -> dict[str, Any]:
    """Decode and validate a JWT token.

    Args:
        token: The JWT token string to decode.
        verify_exp: Whether to verify token expiration.

    Returns:
        Dictionary containing the token claims.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the token is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"verify_exp": verify_exp},
        )
        return payload
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except JWTError as e:
        raise TokenInvalidError(f"Invalid token: {str(e)}")


def verify_token(
    token: str,
    token_type: Optional[str] = None,
) -> dict[str, Any]:
    """Verify a JWT token and optionally check its type.

    Raises:
        TokenExpiredError: If the token has expired.
        TokenInvalidError: If the token is invalid, has no subject or
            is of the wrong type.
    """
    payload = decode_token(token)

    if token_type and payload.get("type") != token_type:
        raise TokenInvalidError(
            f"Invalid token type. Expected {token_type}, got {payload.get('type')}"
        )
    if not payload.get("sub"):
        raise TokenInvalidError("Token missing subject claim")

    return payload
