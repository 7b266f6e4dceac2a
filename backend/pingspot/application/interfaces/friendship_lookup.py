"""Port for resolving a user's friends."""

from abc import ABC, abstractmethod


class FriendshipLookup(ABC):
    """Symmetric friendship relation owned by the social graph."""

    @abstractmethod
    async def friend_ids_of(self, user_id: str) -> set[str]:
        """Ids of every user with an accepted friendship with ``user_id``."""
        ...
