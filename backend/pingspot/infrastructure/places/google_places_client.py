"""Google Places (New) client — implements the NameEnrichmentService port."""

import logging

import httpx

from pingspot.application.interfaces import NameEnrichmentService

logger = logging.getLogger(__name__)

SEARCH_RADIUS_METERS = 50.0
FIELD_MASK = "places.displayName"


class GooglePlacesNameClient(NameEnrichmentService):
    """Returns the display name of the closest place within 50 m, if any.

    Never raises: every failure is logged and reported as "no name".
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://places.googleapis.com/v1",
        timeout: float = 3.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    def _get_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self._api_key,
            "X-Goog-FieldMask": FIELD_MASK,
        }

    @staticmethod
    def _build_payload(latitude: float, longitude: float) -> dict:
        return {
            "maxResultCount": 1,
            "locationRestriction": {
                "circle": {
                    "center": {"latitude": latitude, "longitude": longitude},
                    "radius": SEARCH_RADIUS_METERS,
                }
            },
        }

    async def _get_client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def lookup_name(self, latitude: float, longitude: float) -> str | None:
        if not self._api_key.strip():
            logger.debug("No Google Places API key configured; skipping enrichment")
            return None

        url = f"{self._base_url}/places:searchNearby"
        client = await self._get_client()
        should_close = self._http_client is None
        try:
            response = await client.post(
                url,
                headers=self._get_headers(),
                json=self._build_payload(latitude, longitude),
            )
            if response.status_code != 200:
                logger.warning(
                    "Places API returned %d for %.6f, %.6f",
                    response.status_code, latitude, longitude,
                )
                return None
            return self._parse_name(response.json())
        except (httpx.HTTPError, ValueError):
            logger.exception("Places lookup failed for %.6f, %.6f", latitude, longitude)
            return None
        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _parse_name(data: dict) -> str | None:
        places = data.get("places") or []
        if not places:
            return None
        display_name = places[0].get("displayName") or {}
        name = (display_name.get("text") or "").strip()
        return name or None
