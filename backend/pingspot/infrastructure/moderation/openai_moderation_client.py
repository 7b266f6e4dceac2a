"""OpenAI moderation API client — implements the ModerationService port."""

import logging

import httpx

from pingspot.application.interfaces import ModerationResult, ModerationService

logger = logging.getLogger(__name__)

DEFAULT_REASON = "Content violation"


class OpenAIModerationClient(ModerationService):
    """Calls ``POST /v1/moderations`` and reports whether the text was flagged.

    Fails open: a missing key, a non-200 reply, a malformed body or a
    transport error all yield an unflagged result.
    """

    def __init__(
        self,
        api_key: str,
        url: str = "https://api.openai.com/v1/moderations",
        timeout: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._url = url
        self._timeout = timeout
        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def check(self, text: str) -> ModerationResult:
        if not text or not text.strip():
            return ModerationResult(flagged=False)
        if not self._api_key.strip():
            logger.debug("No moderation API key configured; skipping check")
            return ModerationResult(flagged=False)

        client = await self._get_client()
        should_close = self._http_client is None
        try:
            response = await client.post(
                self._url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={"input": text},
            )
            if response.status_code != 200:
                logger.warning(
                    "Moderation API returned %d; accepting text", response.status_code
                )
                return ModerationResult(flagged=False)
            return self._parse(response.json())
        except (httpx.HTTPError, ValueError):
            logger.exception("Moderation request failed; accepting text")
            return ModerationResult(flagged=False)
        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _parse(data: dict) -> ModerationResult:
        results = data.get("results") or []
        if not results:
            logger.warning("Moderation response had no results; accepting text")
            return ModerationResult(flagged=False)

        first = results[0]
        if not first.get("flagged"):
            return ModerationResult(flagged=False)

        categories = [name for name, hit in (first.get("categories") or {}).items() if hit]
        reason = ", ".join(sorted(categories)) or DEFAULT_REASON
        return ModerationResult(flagged=True, reason=reason)
