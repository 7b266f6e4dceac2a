"""Port for deciding whether a new name duplicates an existing one."""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class SimilarityResolver(ABC):
    """Swappable duplicate-name strategy (exact, fuzzy, model-assisted)."""

    @abstractmethod
    async def find_duplicate(
        self, candidate_name: str, existing_names: Sequence[str]
    ) -> str | None:
        """Return the member of ``existing_names`` that ``candidate_name`` duplicates, if any."""
        ...
