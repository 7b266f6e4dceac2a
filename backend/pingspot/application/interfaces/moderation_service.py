"""Port for text moderation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ModerationResult:
    flagged: bool
    reason: str | None = None


class ModerationService(ABC):
    """Checks user-supplied text. Implementations must fail open."""

    @abstractmethod
    async def check(self, text: str) -> ModerationResult:
        ...
