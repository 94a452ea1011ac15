"""Authentication module for Stormtrooper.

This module provides JWT session tokens and encryption of external OAuth
tokens. FastAPI dependencies resolving the current user live in
``stormtrooper.auth.dependencies``.
"""

from stormtrooper.auth.jwt import (
    create_access_token,
    verify_token,
    decode_token,
)
from stormtrooper.auth.security import (
    EncryptedToken,
    TokenDecryptionError,
    encrypt,
    decrypt,
)

__all__ = [
    "create_access_token",
    "verify_token",
    "decode_token",
    "EncryptedToken",
    "TokenDecryptionError",
    "encrypt",
    "decrypt",
]
