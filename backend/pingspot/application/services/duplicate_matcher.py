"""Admission-time duplicate detection for location records."""

import logging

from pingspot.application.interfaces import LocationRecordRepository
from pingspot.domain.entities import LocationRecord, RecordType, Visibility
from pingspot.domain.exceptions import DomainValidationError

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE_DEGREES = 0.0005


class DuplicateMatcher:
    """Finds an existing public record that already represents the same place.

    Only public input is deduplicated; private and friends-only records always
    get their own row. Verified records match on exact address, custom records
    on a ±``tolerance_degrees`` latitude/longitude window (about 50 m).
    """

    def __init__(
        self,
        repository: LocationRecordRepository,
        tolerance_degrees: float = DEFAULT_TOLERANCE_DEGREES,
    ):
        self._repository = repository
        self._tolerance = tolerance_degrees

    async def find_existing(
        self,
        *,
        visibility: Visibility,
        record_type: RecordType,
        address: str | None,
        latitude: float | None,
        longitude: float | None,
    ) -> LocationRecord | None:
        if visibility != Visibility.PUBLIC:
            logger.debug("Skipping duplicate check for %s record", visibility.value)
            return None

        if record_type == RecordType.VERIFIED:
            normalized = (address or "").strip()
            if not normalized:
                raise DomainValidationError("address", "verified records require an address")
            existing = await self._repository.find_public_verified_by_address(normalized)
            if existing is not None:
                logger.info(
                    "Verified record already exists for address '%s' (id=%s)", normalized, existing.id
                )
            return existing

        if latitude is None or longitude is None:
            raise DomainValidationError("coordinates", "custom records require latitude and longitude")
        existing = await self._repository.find_public_custom_near(latitude, longitude, self._tolerance)
        if existing is not None:
            logger.info(
                "Custom record already exists near %.6f, %.6f (id=%s)", latitude, longitude, existing.id
            )
        return existing
