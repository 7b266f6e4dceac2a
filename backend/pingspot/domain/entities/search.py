"""Domain value objects for search, pagination and creation outcomes."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from .location_record import ActivityRecord, LocationRecord, RecordType, Visibility

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """1-based page selection."""

    page_number: int = 1
    page_size: int = 20

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise ValueError("page_number must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


@dataclass
class PaginatedResult(Generic[T]):
    """One page of an ordered result set plus the total match count."""

    items: list[T]
    total_count: int
    page_number: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.total_count == 0:
            return 0
        return (self.total_count + self.page_size - 1) // self.page_size

    @classmethod
    def from_sequence(cls, items: list[T], page: PageRequest) -> "PaginatedResult[T]":
        """Slice an already ordered, fully materialised list."""
        window = items[page.offset : page.offset + page.page_size]
        return cls(
            items=window,
            total_count=len(items),
            page_number=page.page_number,
            page_size=page.page_size,
        )

    @classmethod
    def empty(cls, page: PageRequest) -> "PaginatedResult[T]":
        return cls(items=[], total_count=0, page_number=page.page_number, page_size=page.page_size)


@dataclass
class SearchFilters:
    """Non-spatial filters applied while fetching search candidates."""

    visibility: Visibility | None = None
    record_type: RecordType | None = None
    activity_name: str | None = None
    activity_category: str | None = None
    query: str | None = None


@dataclass(frozen=True)
class BoundingBox:
    """Coarse rectangular prefilter (degrees)."""

    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float


@dataclass
class NearbyMatch:
    """A visible record within the search radius and its distance from the origin."""

    record: LocationRecord
    distance_km: float


@dataclass
class CreationResult:
    """Outcome of a create request.

    ``merged`` is True when the request was redirected onto an existing
    record instead of inserting a new row; ``message`` then explains why.
    """

    record: LocationRecord
    merged: bool = False
    message: str | None = None


@dataclass
class ActivityCreationResult:
    """Outcome of an activity create request (same merge semantics as CreationResult)."""

    activity: ActivityRecord
    merged: bool = False
    message: str | None = None
