"""Model-assisted duplicate detection for activity names."""

import logging
from collections.abc import Sequence

from pingspot.application.interfaces import ChatProvider, SimilarityResolver
from pingspot.domain.entities import ChatMessage

logger = logging.getLogger(__name__)

NO_MATCH = "NO"

_SYSTEM_PROMPT = (
    "You deduplicate short activity names for a single place. "
    "Given a new activity name and a list of existing activity names, decide "
    "whether the new one means the same thing as one of them (synonyms, "
    "spelling variants, singular/plural, abbreviations). "
    f"Reply with the matching existing name copied exactly, or {NO_MATCH} if none match. "
    "Reply with nothing else."
)


class OpenRouterSimilarityResolver(SimilarityResolver):
    """Asks a chat model whether a new activity name duplicates an existing one.

    The answer is accepted only when it is literally one of the existing
    names; anything else (including provider errors) means "no duplicate".
    """

    def __init__(self, chat_provider: ChatProvider, model: str):
        self._chat_provider = chat_provider
        self._model = model

    async def find_duplicate(
        self, candidate_name: str, existing_names: Sequence[str]
    ) -> str | None:
        if not candidate_name.strip() or not existing_names:
            return None

        listing = "\n".join(f"- {name}" for name in existing_names)
        messages = [
            ChatMessage(role="system", content=_SYSTEM_PROMPT),
            ChatMessage(
                role="user",
                content=f"New activity: {candidate_name}\nExisting activities:\n{listing}",
            ),
        ]

        try:
            result = await self._chat_provider.complete(
                messages, self._model, temperature=0.0, max_tokens=50
            )
        except Exception:
            logger.exception("Similarity check failed for '%s'; treating as new", candidate_name)
            return None

        answer = result.content.strip().strip('"').strip()
        if not answer or answer.upper() == NO_MATCH:
            return None
        for name in existing_names:
            if name == answer:
                return name

        logger.warning(
            "Similarity model answered '%s', which is not an existing activity; ignoring", answer
        )
        return None
