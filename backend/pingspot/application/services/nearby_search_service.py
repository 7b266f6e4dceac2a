"""Nearby search: visibility-scoped, distance-ranked, paginated."""

import logging
import math

from pingspot.application.interfaces import FriendshipLookup, LocationRecordRepository
from pingspot.application.services.friendship import resolve_friend_ids
from pingspot.domain.entities import NearbyMatch, PageRequest, PaginatedResult, SearchFilters
from pingspot.domain.exceptions import DomainValidationError
from pingspot.domain.geo import bounding_box, distance_km
from pingspot.domain.visibility import is_visible

logger = logging.getLogger(__name__)


class NearbySearchService:
    """Answers "what is near me and visible to me".

    Candidates are fetched by their non-spatial filters (optionally narrowed
    by a coarse bounding box), then filtered by visibility and exact haversine
    distance, ordered by (distance, id) and paginated.
    """

    def __init__(
        self,
        repository: LocationRecordRepository,
        friendship_lookup: FriendshipLookup,
        *,
        use_bounding_box: bool = True,
    ):
        self._repository = repository
        self._friendships = friendship_lookup
        self._use_bounding_box = use_bounding_box

    async def search(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
        filters: SearchFilters | None,
        viewer_id: str | None,
        page: PageRequest,
    ) -> PaginatedResult[NearbyMatch]:
        if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
            raise DomainValidationError("coordinates", "latitude/longitude out of range")
        if math.isnan(radius_km) or radius_km <= 0:
            return PaginatedResult.empty(page)

        filters = filters or SearchFilters()
        box = bounding_box(latitude, longitude, radius_km) if self._use_bounding_box else None
        candidates = await self._repository.find_candidates(filters, box)
        friend_ids = await resolve_friend_ids(self._friendships, viewer_id)

        matches: list[NearbyMatch] = []
        for candidate in candidates:
            if not is_visible(candidate, viewer_id, friend_ids):
                continue
            distance = distance_km(latitude, longitude, candidate.latitude, candidate.longitude)
            if distance > radius_km:
                continue
            matches.append(NearbyMatch(record=candidate, distance_km=distance))

        matches.sort(key=lambda m: (m.distance_km, m.record.id))

        logger.debug(
            "Nearby search at %.6f, %.6f r=%.3fkm: %d candidates, %d matches",
            latitude, longitude, radius_km, len(candidates), len(matches),
        )
        return PaginatedResult.from_sequence(matches, page)
