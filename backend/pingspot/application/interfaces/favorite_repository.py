"""Abstract repository interface (port) for favorites."""

from abc import ABC, abstractmethod

from pingspot.domain.entities import LocationRecord


class FavoriteRepository(ABC):
    """Port for the (user, location record) favorite relation."""

    @abstractmethod
    async def exists(self, user_id: str, record_id: int) -> bool:
        ...

    @abstractmethod
    async def add(self, user_id: str, record_id: int) -> bool:
        """Insert the pair. Returns False when it already exists (unique constraint)."""
        ...

    @abstractmethod
    async def remove(self, user_id: str, record_id: int) -> bool:
        """Delete the pair. Returns False when there was nothing to delete."""
        ...

    @abstractmethod
    async def list_records_for_user(self, user_id: str) -> list[LocationRecord]:
        """Favorited records in favoriting order, soft-deleted ones included."""
        ...
