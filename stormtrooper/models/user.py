"""User model for device-bound and externally linked identities."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .external_account import ExternalAccount
    from .stream import Stream


class User(Base, TimestampMixin):
    """A Stormtrooper user.

    Users start out anonymous, identified only by a server generated id
    handed to the device. Linking a Facebook account later lets the same
    person sign in from another device and land on the same user.

    Attributes:
        id: Random alphanumeric identifier (primary key).
        device_token: APNs token last reported by the user's device.
        created_at: When the user was created.
        updated_at: When the user was last modified.
        external_accounts: Linked third-party identities.
        streams: Streams owned by this user.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    device_token: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Push notification token reported by the device"
    )

    # Relationships
    external_accounts: Mapped[list["ExternalAccount"]] = relationship(
        "ExternalAccount",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    streams: Mapped[list["Stream"]] = relationship(
        "Stream",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id='{self.id}')>"

    def external_account_for(self, provider: str) -> Optional["ExternalAccount"]:
        """Return the linked account for a provider, if any."""
        for account in self.external_accounts:
            if account.provider == provider:
                return account
        return None
