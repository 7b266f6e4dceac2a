"""SQLAlchemy ORM model for the friendship graph (read by the friendship lookup)."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pingspot.infrastructure.database.base import Base

ACCEPTED = "accepted"


class FriendshipModel(Base):
    """ORM model — maps to the 'friendships' table.

    A row links requester ``user_id`` and addressee ``friend_id``; the
    relation is read in both directions once ``status`` is accepted.
    """

    __tablename__ = "friendships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False)
    friend_id: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "friend_id", name="uq_friendships_pair"),
        Index("ix_friendships_friend", "friend_id"),
    )
