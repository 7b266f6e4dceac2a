"""SQLAlchemy ORM models for location records, activities and favorites."""

from datetime import datetime, timezone

from geoalchemy2 import Geometry
from sqlalchemy import (
    Boolean,
    DateTime,
    Double,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pingspot.infrastructure.database.base import Base

PUBLIC_VERIFIED_LIVE = "visibility = 'public' AND record_type = 'verified' AND NOT is_deleted"


class LocationRecordModel(Base):
    """ORM model — maps to the 'location_records' table.

    ``location`` holds the PostGIS point; ``latitude``/``longitude`` mirror it
    as plain columns for portable range queries.
    """

    __tablename__ = "location_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str | None] = mapped_column(String(300), nullable=True)
    location: Mapped[object] = mapped_column(
        Geometry(geometry_type="POINT", srid=4326, spatial_index=True), nullable=False
    )
    latitude: Mapped[float] = mapped_column(Double, nullable=False)
    longitude: Mapped[float] = mapped_column(Double, nullable=False)
    owner_id: Mapped[str] = mapped_column(String(100), nullable=False)
    visibility: Mapped[str] = mapped_column(String(20), nullable=False, default="private")
    record_type: Mapped[str] = mapped_column(String(20), nullable=False, default="custom")
    is_claimed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    favorite_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    activities: Mapped[list["ActivityRecordModel"]] = relationship(
        back_populates="location_record",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ActivityRecordModel.id",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_location_records_owner", "owner_id"),
        Index("ix_location_records_scope", "visibility", "record_type", "is_deleted"),
        Index("ix_location_records_address", "address"),
        # At most one live public verified record per address
        Index(
            "uq_location_records_public_verified_address",
            "address",
            unique=True,
            postgresql_where=text(PUBLIC_VERIFIED_LIVE),
            sqlite_where=text(PUBLIC_VERIFIED_LIVE),
        ),
        Index("ix_location_records_lat_lng", "latitude", "longitude"),
    )

    def __repr__(self) -> str:
        return (
            f"<LocationRecordModel(id={self.id}, name='{self.name}', "
            f"visibility='{self.visibility}', type='{self.record_type}')>"
        )


class ActivityRecordModel(Base):
    """ORM model — maps to the 'activity_records' table."""

    __tablename__ = "activity_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_record_id: Mapped[int] = mapped_column(
        ForeignKey("location_records.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    location_record: Mapped[LocationRecordModel] = relationship(back_populates="activities")

    __table_args__ = (Index("ix_activity_records_record", "location_record_id"),)


class FavoriteModel(Base):
    """ORM model — maps to the 'favorites' table; one row per (user, record)."""

    __tablename__ = "favorites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False)
    location_record_id: Mapped[int] = mapped_column(
        ForeignKey("location_records.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    location_record: Mapped[LocationRecordModel] = relationship()

    __table_args__ = (
        UniqueConstraint("user_id", "location_record_id", name="uq_favorites_user_record"),
        Index("ix_favorites_user", "user_id"),
    )
