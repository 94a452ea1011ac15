"""External account model for linked third-party identities."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class ExternalAccount(Base, TimestampMixin):
    """A third-party identity (e.g. Facebook) linked to a user.

    OAuth tokens are stored AES-GCM encrypted, each as a hex
    ciphertext with its IV and authentication tag.

    Attributes:
        id: Account id at the provider.
        provider: Provider name, e.g. "facebook".
        user_id: Owning user.
        access_token: Encrypted access token.
        at_iv: IV used for the access token.
        at_tag: GCM tag for the access token.
        refresh_token: Encrypted refresh token, if the provider issued one.
        rt_iv: IV used for the refresh token.
        rt_tag: GCM tag for the refresh token.
        user: Owning user relationship.
    """

    __tablename__ = "external_auth"

    # One provider identity belongs to at most one user
    provider: Mapped[str] = mapped_column(String(32), primary_key=True)
    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        doc="Reference to the owning user"
    )
    access_token: Mapped[str] = mapped_column(Text, nullable=False)
    at_iv: Mapped[str] = mapped_column(String(64), nullable=False)
    at_tag: Mapped[str] = mapped_column(String(64), nullable=False)
    refresh_token: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rt_iv: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    rt_tag: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="external_accounts",
    )

    # Indexes
    __table_args__ = (
        UniqueConstraint("user_id", "provider", name="uq_external_auth_user_provider"),
        Index("idx_external_auth_user", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<ExternalAccount(provider='{self.provider}', id='{self.id}', user_id='{self.user_id}')>"
