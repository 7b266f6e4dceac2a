"""Port for looking up an authoritative display name for coordinates."""

from abc import ABC, abstractmethod


class NameEnrichmentService(ABC):
    """Best-effort place-name lookup. Implementations return None instead of raising."""

    @abstractmethod
    async def lookup_name(self, latitude: float, longitude: float) -> str | None:
        ...
