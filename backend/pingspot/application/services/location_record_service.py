"""Application service (use case) for location records.

Write path: rate limit → name checks → duplicate match → (verified only)
name enrichment → persist. A verified insert that loses a race on the
partial unique address index is answered with the winning row. Read paths
run through ``is_visible``.
"""

import asyncio
import logging

from pingspot.application.interfaces import (
    FavoriteRepository,
    FriendshipLookup,
    LocationRecordRepository,
    ModerationService,
    NameEnrichmentService,
)
from pingspot.application.schemas import LocationRecordCreate, LocationRecordUpdate
from pingspot.application.services.admission_rate_limiter import AdmissionRateLimiter
from pingspot.application.services.duplicate_matcher import DuplicateMatcher
from pingspot.application.services.friendship import can_view, visible_records
from pingspot.application.services.moderation import moderate_text
from pingspot.domain.entities import (
    CreationResult,
    LocationRecord,
    PageRequest,
    PaginatedResult,
    RecordType,
    Visibility,
)
from pingspot.domain.exceptions import (
    DomainValidationError,
    DuplicateRecordError,
    EntityNotFoundError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)

ENTITY = "LocationRecord"
MAX_NAME_LENGTH = 200
MAX_ADDRESS_LENGTH = 300
DEFAULT_ENRICHMENT_TIMEOUT = 3.0


def normalize_name(raw: str | None) -> str:
    return (raw or "").strip()


def normalize_address(raw: str | None) -> str | None:
    address = (raw or "").strip()
    return address or None


def validate_name(name: str) -> None:
    if not name:
        raise DomainValidationError("name", "name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise DomainValidationError("name", f"name must be at most {MAX_NAME_LENGTH} characters")


def validate_coordinates(latitude: float, longitude: float) -> None:
    if not -90.0 <= latitude <= 90.0:
        raise DomainValidationError("latitude", "latitude must be within [-90, 90]")
    if not -180.0 <= longitude <= 180.0:
        raise DomainValidationError("longitude", "longitude must be within [-180, 180]")


def _merged(existing: LocationRecord) -> CreationResult:
    return CreationResult(
        record=existing,
        merged=True,
        message=f"'{existing.name}' already exists here; returning the existing record.",
    )


class LocationRecordService:
    """Orchestrates creation, retrieval, edits and favorites for location records."""

    def __init__(
        self,
        repository: LocationRecordRepository,
        favorite_repository: FavoriteRepository,
        friendship_lookup: FriendshipLookup,
        moderation: ModerationService,
        rate_limiter: AdmissionRateLimiter,
        duplicate_matcher: DuplicateMatcher,
        name_enrichment: NameEnrichmentService | None = None,
        enrichment_timeout: float = DEFAULT_ENRICHMENT_TIMEOUT,
    ):
        self._repository = repository
        self._favorites = favorite_repository
        self._friendships = friendship_lookup
        self._moderation = moderation
        self._rate_limiter = rate_limiter
        self._duplicate_matcher = duplicate_matcher
        self._name_enrichment = name_enrichment
        self._enrichment_timeout = enrichment_timeout

    # ── Create ──────────────────────────────────────────────────────

    async def create(self, data: LocationRecordCreate, owner_id: str) -> CreationResult:
        daily_count = await self._rate_limiter.take(owner_id)

        record_type = data.record_type
        if data.visibility != Visibility.PUBLIC and record_type == RecordType.VERIFIED:
            logger.warning(
                "Verified type is only allowed for public records; using custom for %s record",
                data.visibility.value,
            )
            record_type = RecordType.CUSTOM

        validate_coordinates(data.latitude, data.longitude)
        address = normalize_address(data.address)
        if address is not None and len(address) > MAX_ADDRESS_LENGTH:
            raise DomainValidationError(
                "address", f"address must be at most {MAX_ADDRESS_LENGTH} characters"
            )

        name = normalize_name(data.name)
        if record_type == RecordType.CUSTOM:
            validate_name(name)
            await moderate_text(self._moderation, name)
        elif name:
            validate_name(name)

        existing = await self._duplicate_matcher.find_existing(
            visibility=data.visibility,
            record_type=record_type,
            address=address,
            latitude=data.latitude,
            longitude=data.longitude,
        )
        if existing is not None:
            return _merged(existing)

        if record_type == RecordType.VERIFIED:
            name = await self._resolve_verified_name(name, address, data.latitude, data.longitude)

        record = LocationRecord(
            name=name,
            address=address,
            latitude=data.latitude,
            longitude=data.longitude,
            owner_id=owner_id,
            visibility=data.visibility,
            record_type=record_type,
        )
        try:
            created = await self._repository.create(record)
        except DuplicateRecordError:
            # A concurrent request inserted the same public verified address first
            winner = await self._duplicate_matcher.find_existing(
                visibility=record.visibility,
                record_type=record.record_type,
                address=record.address,
                latitude=record.latitude,
                longitude=record.longitude,
            )
            if winner is None:
                raise
            logger.info("Lost insert race for address '%s'; returning record %s", address, winner.id)
            return _merged(winner)
        logger.info(
            "Location record %s created by %s (visibility=%s, type=%s, daily count=%s/%d)",
            created.id,
            owner_id,
            created.visibility.value,
            created.record_type.value,
            daily_count if daily_count is not None else "?",
            self._rate_limiter.limit,
        )
        return CreationResult(record=created)

    async def _resolve_verified_name(
        self, user_name: str, address: str | None, latitude: float, longitude: float
    ) -> str:
        """Prefer the enriched name, then the user's own name, then the address."""
        enriched = normalize_name(await self._lookup_enriched_name(latitude, longitude))
        if enriched:
            logger.info("Using enriched name '%s' for verified record", enriched)
            return enriched[:MAX_NAME_LENGTH]

        if user_name:
            logger.info("No enriched name; using user-provided name '%s'", user_name)
            await moderate_text(self._moderation, user_name)
            return user_name

        logger.info("No enriched or user-provided name; falling back to the address")
        return (address or "")[:MAX_NAME_LENGTH]

    async def _lookup_enriched_name(self, latitude: float, longitude: float) -> str | None:
        if self._name_enrichment is None:
            return None
        try:
            return await asyncio.wait_for(
                self._name_enrichment.lookup_name(latitude, longitude),
                timeout=self._enrichment_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Name enrichment timed out after %.1fs for %.6f, %.6f",
                self._enrichment_timeout, latitude, longitude,
            )
        except Exception:
            logger.exception("Name enrichment failed for %.6f, %.6f", latitude, longitude)
        return None

    # ── Read ────────────────────────────────────────────────────────

    async def get_by_id(self, record_id: int, viewer_id: str | None) -> LocationRecord:
        record = await self._repository.get_by_id(record_id)
        if record is None or not await can_view(self._friendships, record, viewer_id):
            raise EntityNotFoundError(ENTITY, record_id)
        return record

    async def list_by_owner(self, owner_id: str, *, only_claimed: bool = False) -> list[LocationRecord]:
        return await self._repository.list_by_owner(owner_id, only_claimed=only_claimed)

    # ── Owner edits ─────────────────────────────────────────────────

    async def update(
        self, record_id: int, data: LocationRecordUpdate, user_id: str
    ) -> LocationRecord:
        record = await self._repository.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError(ENTITY, record_id)
        if not record.is_owned_by(user_id):
            raise PermissionDeniedError("update", ENTITY, record_id)

        if data.name is not None:
            name = normalize_name(data.name)
            validate_name(name)
            if name != record.name:
                await moderate_text(self._moderation, name)
                record.rename(name)

        if data.visibility is not None:
            previous_type = record.record_type
            record.change_visibility(data.visibility)
            if record.record_type != previous_type:
                logger.warning(
                    "Record %s is no longer public; downgraded from verified to custom", record_id
                )

        updated = await self._repository.update(record)
        logger.info("Location record %s updated by %s", record_id, user_id)
        return updated

    async def soft_delete(self, record_id: int, owner_id: str) -> None:
        record = await self._repository.get_by_id(record_id, include_deleted=True)
        if record is None:
            raise EntityNotFoundError(ENTITY, record_id)
        if not record.is_owned_by(owner_id):
            raise PermissionDeniedError("delete", ENTITY, record_id)
        if record.is_deleted:
            return
        record.mark_deleted()
        await self._repository.update(record)
        logger.info("Location record %s soft-deleted by %s", record_id, owner_id)

    # ── Favorites ───────────────────────────────────────────────────

    async def add_favorite(self, record_id: int, user_id: str) -> None:
        # Fast path only; the unique constraint behind add() is what prevents doubles
        if await self._favorites.exists(user_id, record_id):
            logger.info("Record %s already favorited by %s", record_id, user_id)
            return

        record = await self._repository.get_by_id(record_id)
        if record is None or not await can_view(self._friendships, record, user_id):
            raise EntityNotFoundError(ENTITY, record_id)

        if not await self._favorites.add(user_id, record_id):
            logger.info("Concurrent favorite of record %s by %s ignored", record_id, user_id)
            return
        await self._repository.adjust_favorite_count(record_id, 1)
        logger.info("Record %s favorited by %s", record_id, user_id)

    async def remove_favorite(self, record_id: int, user_id: str) -> None:
        if not await self._favorites.remove(user_id, record_id):
            return
        await self._repository.adjust_favorite_count(record_id, -1)
        logger.info("Record %s unfavorited by %s", record_id, user_id)

    async def list_favorites(self, user_id: str, page: PageRequest) -> PaginatedResult[LocationRecord]:
        records = await self._favorites.list_records_for_user(user_id)
        visible = await visible_records(self._friendships, records, user_id, include_deleted=True)
        return PaginatedResult.from_sequence(visible, page)
