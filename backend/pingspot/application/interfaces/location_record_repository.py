"""Abstract repository interface (port) for LocationRecord persistence."""

from abc import ABC, abstractmethod

from pingspot.domain.entities import BoundingBox, LocationRecord, SearchFilters


class LocationRecordRepository(ABC):
    """Port for location record persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(
        self, record_id: int, *, include_deleted: bool = False
    ) -> LocationRecord | None:
        """Retrieve a record (with its activities) by id."""
        ...

    @abstractmethod
    async def find_public_verified_by_address(self, address: str) -> LocationRecord | None:
        """Return the earliest non-deleted public verified record with exactly this address."""
        ...

    @abstractmethod
    async def find_public_custom_near(
        self, latitude: float, longitude: float, tolerance_degrees: float
    ) -> LocationRecord | None:
        """Return the earliest non-deleted public custom record inside the ±degree window."""
        ...

    @abstractmethod
    async def find_candidates(
        self, filters: SearchFilters, bounding_box: BoundingBox | None = None
    ) -> list[LocationRecord]:
        """Retrieve every non-deleted record matching the non-spatial filters.

        When ``bounding_box`` is given, rows outside it may be skipped.
        """
        ...

    @abstractmethod
    async def list_by_owner(
        self, owner_id: str, *, only_claimed: bool = False
    ) -> list[LocationRecord]:
        """Retrieve the owner's non-deleted records, newest first."""
        ...

    @abstractmethod
    async def create(self, record: LocationRecord) -> LocationRecord:
        """Persist a new record and return it with its assigned id.

        Raises DuplicateRecordError when a live public verified record already
        has the same address.
        """
        ...

    @abstractmethod
    async def update(self, record: LocationRecord) -> LocationRecord:
        """Persist mutable fields (name, visibility, type, deleted flag)."""
        ...

    @abstractmethod
    async def adjust_favorite_count(self, record_id: int, delta: int) -> None:
        """Atomically add ``delta`` to the favorite counter, never going below zero."""
        ...
