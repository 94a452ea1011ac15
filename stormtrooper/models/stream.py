"""Stream model for live broadcast sessions."""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class Stream(Base, TimestampMixin):
    """A live broadcast owned by a single user.

    Attributes:
        id: Primary key identifier.
        user_id: Owning user (unique - one stream per user).
        csync_path: Realtime sync path the broadcast is published on.
        stream_name: Display name of the stream.
        description: Free form description.
        user: Owning user relationship.
    """

    __tablename__ = "streams"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        doc="Reference to the owning user"
    )
    csync_path: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        doc="Realtime sync path for the broadcast"
    )
    stream_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="streams",
    )

    def __repr__(self) -> str:
        return f"<Stream(id={self.id}, user_id='{self.user_id}', name='{self.stream_name}')>"
