"""SQLAlchemy models for the Stormtrooper backend.

Models:
    - User: Device-bound user identity
    - ExternalAccount: Third-party identity linked to a user
    - Stream: Live broadcast owned by a user

Usage:
    from stormtrooper.models import User, ExternalAccount, Stream
"""

from .base import Base, TimestampMixin, metadata

from .user import User
from .external_account import ExternalAccount
from .stream import Stream

__all__ = [
    "Base",
    "TimestampMixin",
    "metadata",
    "User",
    "ExternalAccount",
    "Stream",
]
