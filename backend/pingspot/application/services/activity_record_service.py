"""Application service for activities attached to location records."""

import logging

from pingspot.application.interfaces import (
    ActivityRecordRepository,
    FriendshipLookup,
    LocationRecordRepository,
    ModerationService,
    SimilarityResolver,
)
from pingspot.application.schemas import ActivityRecordCreate
from pingspot.application.services.admission_rate_limiter import AdmissionRateLimiter
from pingspot.application.services.friendship import can_view
from pingspot.application.services.moderation import moderate_text
from pingspot.domain.entities import ActivityCreationResult, ActivityRecord, LocationRecord
from pingspot.domain.exceptions import DomainValidationError, EntityNotFoundError

logger = logging.getLogger(__name__)

MAX_ACTIVITY_NAME_LENGTH = 200
MAX_CATEGORY_LENGTH = 100


class ActivityRecordService:
    """Creates activities without duplicating ones the record already has.

    An exact (case-insensitive) match is returned as-is; otherwise the
    similarity resolver may map the new name onto an existing activity.
    Similarity failures never block creation.
    """

    def __init__(
        self,
        repository: ActivityRecordRepository,
        location_repository: LocationRecordRepository,
        friendship_lookup: FriendshipLookup,
        moderation: ModerationService,
        similarity_resolver: SimilarityResolver,
        rate_limiter: AdmissionRateLimiter,
    ):
        self._repository = repository
        self._locations = location_repository
        self._friendships = friendship_lookup
        self._moderation = moderation
        self._similarity = similarity_resolver
        self._rate_limiter = rate_limiter

    async def create_activity(
        self, record_id: int, data: ActivityRecordCreate, user_id: str
    ) -> ActivityCreationResult:
        await self._rate_limiter.take(user_id)
        await self._get_visible_record(record_id, user_id)

        name = data.name.strip()
        if not name:
            raise DomainValidationError("name", "activity name is required")
        if len(name) > MAX_ACTIVITY_NAME_LENGTH:
            raise DomainValidationError(
                "name", f"activity name must be at most {MAX_ACTIVITY_NAME_LENGTH} characters"
            )
        category = (data.category or "").strip() or None
        if category is not None and len(category) > MAX_CATEGORY_LENGTH:
            raise DomainValidationError(
                "category", f"category must be at most {MAX_CATEGORY_LENGTH} characters"
            )

        await moderate_text(self._moderation, name)

        existing = await self._repository.list_for_record(record_id)

        exact = next((a for a in existing if a.name.casefold() == name.casefold()), None)
        if exact is not None:
            logger.info("Activity '%s' already exists at record %s (id=%s)", name, record_id, exact.id)
            return ActivityCreationResult(
                activity=exact,
                merged=True,
                message=f"Activity '{exact.name}' already exists here.",
            )

        match = await self._find_similar(name, existing)
        if match is not None:
            logger.info(
                "Activity '%s' merged into existing '%s' at record %s", name, match.name, record_id
            )
            return ActivityCreationResult(
                activity=match,
                merged=True,
                message=f"Merged '{name}' into existing activity '{match.name}'.",
            )

        created = await self._repository.create(
            ActivityRecord(location_record_id=record_id, name=name, category=category)
        )
        logger.info("Activity %s created at record %s by %s", created.id, record_id, user_id)
        return ActivityCreationResult(activity=created)

    async def list_activities(self, record_id: int, viewer_id: str | None) -> list[ActivityRecord]:
        await self._get_visible_record(record_id, viewer_id)
        return await self._repository.list_for_record(record_id)

    async def _find_similar(
        self, name: str, existing: list[ActivityRecord]
    ) -> ActivityRecord | None:
        if not existing:
            return None
        try:
            matched_name = await self._similarity.find_duplicate(name, [a.name for a in existing])
        except Exception:
            logger.exception("Similarity resolver failed for '%s'; creating a new activity", name)
            return None
        if matched_name is None:
            return None
        # Only trust answers that name an activity we actually have
        return next((a for a in existing if a.name == matched_name), None)

    async def _get_visible_record(self, record_id: int, viewer_id: str | None) -> LocationRecord:
        record = await self._locations.get_by_id(record_id)
        if record is None or not await can_view(self._friendships, record, viewer_id):
            raise EntityNotFoundError("LocationRecord", record_id)
        return record
