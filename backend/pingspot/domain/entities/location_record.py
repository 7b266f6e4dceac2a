"""Domain entities for location records and their child activities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Visibility(str, Enum):
    """Who may see a location record besides its owner."""

    PUBLIC = "public"
    FRIENDS_ONLY = "friends_only"
    PRIVATE = "private"


class RecordType(str, Enum):
    """Identity anchor of a location record.

    Verified records are address-anchored (usually externally enriched),
    custom records are anchored on user-chosen coordinates.
    """

    CUSTOM = "custom"
    VERIFIED = "verified"


@dataclass
class ActivityRecord:
    """A sub-activity offered at exactly one location record."""

    location_record_id: int
    name: str
    category: str | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class LocationRecord:
    """Core domain entity — a user-created venue or spot."""

    name: str
    latitude: float
    longitude: float
    owner_id: str
    address: str | None = None
    visibility: Visibility = Visibility.PRIVATE
    record_type: RecordType = RecordType.CUSTOM
    is_claimed: bool = False
    is_deleted: bool = False
    favorite_count: int = 0
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    activities: list[ActivityRecord] = field(default_factory=list)

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and user_id == self.owner_id

    def rename(self, name: str) -> None:
        self.name = name

    def change_visibility(self, visibility: Visibility) -> None:
        """Apply a new visibility tier, keeping verified records public-only."""
        self.visibility = visibility
        if visibility != Visibility.PUBLIC and self.record_type == RecordType.VERIFIED:
            self.record_type = RecordType.CUSTOM

    def mark_deleted(self) -> None:
        self.is_deleted = True
