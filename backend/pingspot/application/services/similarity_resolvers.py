"""In-process duplicate-name strategies for activity records."""

from collections.abc import Sequence
from difflib import SequenceMatcher

from pingspot.application.interfaces import SimilarityResolver


def _normalize(name: str) -> str:
    return " ".join(name.split()).casefold()


class ExactSimilarityResolver(SimilarityResolver):
    """Case- and whitespace-insensitive equality."""

    async def find_duplicate(
        self, candidate_name: str, existing_names: Sequence[str]
    ) -> str | None:
        wanted = _normalize(candidate_name)
        for name in existing_names:
            if _normalize(name) == wanted:
                return name
        return None


class FuzzySimilarityResolver(SimilarityResolver):
    """Best SequenceMatcher ratio at or above ``threshold`` wins (catches typos)."""

    def __init__(self, threshold: float = 0.85):
        if not 0.0 < threshold <= 1.0:
            raise ValueError("threshold must be in (0, 1]")
        self._threshold = threshold

    async def find_duplicate(
        self, candidate_name: str, existing_names: Sequence[str]
    ) -> str | None:
        wanted = _normalize(candidate_name)
        if not wanted:
            return None

        best_name: str | None = None
        best_score = 0.0
        for name in existing_names:
            score = SequenceMatcher(None, wanted, _normalize(name)).ratio()
            if score > best_score:
                best_name, best_score = name, score

        if best_score >= self._threshold:
            return best_name
        return None
