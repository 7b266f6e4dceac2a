"""Abstract repository interface (port) for ActivityRecord persistence."""

from abc import ABC, abstractmethod

from pingspot.domain.entities import ActivityRecord


class ActivityRecordRepository(ABC):
    """Port for activity persistence — implemented in the infrastructure layer."""

    @abstractmethod
    async def list_for_record(self, record_id: int) -> list[ActivityRecord]:
        """All activities of a location record, oldest first."""
        ...

    @abstractmethod
    async def create(self, activity: ActivityRecord) -> ActivityRecord:
        ...
