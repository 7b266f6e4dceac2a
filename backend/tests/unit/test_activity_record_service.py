"""Unit tests for ActivityRecordService."""

from collections.abc import Sequence

import pytest

from pingspot.application.interfaces import SimilarityResolver
from pingspot.application.schemas import ActivityRecordCreate
from pingspot.application.services import (
    ActivityRecordService,
    AdmissionRateLimiter,
    ExactSimilarityResolver,
)
from pingspot.domain.entities import LocationRecord, Visibility
from pingspot.domain.exceptions import (
    ContentRejectedError,
    EntityNotFoundError,
    RateLimitExceededError,
)
from tests.fakes import (
    FakeActivityRecordRepository,
    FakeCounterStore,
    FakeFriendshipLookup,
    FakeLocationRecordRepository,
    FakeModeration,
)


class FixedAnswerResolver(SimilarityResolver):
    """Always answers with the configured name (or raises)."""

    def __init__(self, answer: str | None = None, error: Exception | None = None):
        self.answer = answer
        self.error = error
        self.calls: list[tuple[str, list[str]]] = []

    async def find_duplicate(self, candidate_name: str, existing_names: Sequence[str]) -> str | None:
        self.calls.append((candidate_name, list(existing_names)))
        if self.error is not None:
            raise self.error
        return self.answer


def _build(*, visibility=Visibility.PUBLIC, resolver=None, moderation=None, friendships=(), limit=10):
    locations = FakeLocationRecordRepository(
        [
            LocationRecord(
                id=1,
                name="Hoops Park",
                latitude=0.0,
                longitude=0.0,
                owner_id="owner",
                visibility=visibility,
            )
        ]
    )
    activities = FakeActivityRecordRepository(locations)
    store = FakeCounterStore()
    service = ActivityRecordService(
        repository=activities,
        location_repository=locations,
        friendship_lookup=FakeFriendshipLookup(friendships),
        moderation=moderation or FakeModeration(),
        similarity_resolver=resolver or ExactSimilarityResolver(),
        rate_limiter=AdmissionRateLimiter(
            store, scope="activity", limit=limit, per_utc_day=False
        ),
    )
    return service, locations, store


@pytest.mark.asyncio
async def test_create_activity():
    service, locations, _ = _build()
    result = await service.create_activity(
        1, ActivityRecordCreate(name=" Basketball ", category="Sports"), "alice"
    )

    assert result.merged is False
    assert result.activity.id is not None
    assert result.activity.name == "Basketball"
    assert result.activity.category == "Sports"
    assert [a.name for a in locations.records[1].activities] == ["Basketball"]


@pytest.mark.asyncio
async def test_exact_duplicate_returns_existing_activity():
    service, locations, _ = _build()
    first = await service.create_activity(1, ActivityRecordCreate(name="Basketball"), "alice")
    second = await service.create_activity(1, ActivityRecordCreate(name="BASKETBALL"), "bob")

    assert second.merged is True
    assert second.activity.id == first.activity.id
    assert second.message == "Activity 'Basketball' already exists here."
    assert len(locations.records[1].activities) == 1


@pytest.mark.asyncio
async def test_similar_name_is_merged():
    resolver = FixedAnswerResolver(answer="Basketball")
    service, locations, _ = _build(resolver=resolver)
    await service.create_activity(1, ActivityRecordCreate(name="Basketball"), "alice")

    result = await service.create_activity(1, ActivityRecordCreate(name="Hoops"), "bob")

    assert result.merged is True
    assert result.activity.name == "Basketball"
    assert result.message == "Merged 'Hoops' into existing activity 'Basketball'."
    assert resolver.calls[-1] == ("Hoops", ["Basketball"])


@pytest.mark.asyncio
async def test_resolver_answer_must_name_an_existing_activity():
    service, locations, _ = _build(resolver=FixedAnswerResolver(answer="Volleyball"))
    await service.create_activity(1, ActivityRecordCreate(name="Basketball"), "alice")

    result = await service.create_activity(1, ActivityRecordCreate(name="Hoops"), "bob")
    assert result.merged is False
    assert len(locations.records[1].activities) == 2


@pytest.mark.asyncio
async def test_resolver_failure_creates_new_activity():
    service, locations, _ = _build(resolver=FixedAnswerResolver(error=RuntimeError("llm down")))
    await service.create_activity(1, ActivityRecordCreate(name="Basketball"), "alice")

    result = await service.create_activity(1, ActivityRecordCreate(name="Hoops"), "bob")
    assert result.merged is False
    assert len(locations.records[1].activities) == 2


@pytest.mark.asyncio
async def test_resolver_not_called_for_first_activity():
    resolver = FixedAnswerResolver(answer="anything")
    service, _, _ = _build(resolver=resolver)
    await service.create_activity(1, ActivityRecordCreate(name="Basketball"), "alice")
    assert resolver.calls == []


@pytest.mark.asyncio
async def test_flagged_activity_name_is_rejected():
    service, locations, _ = _build(moderation=FakeModeration(["badword"]))
    with pytest.raises(ContentRejectedError):
        await service.create_activity(1, ActivityRecordCreate(name="badword ball"), "alice")
    assert locations.records[1].activities == []


@pytest.mark.asyncio
async def test_activity_on_invisible_record_is_not_found():
    service, _, _ = _build(visibility=Visibility.PRIVATE)
    with pytest.raises(EntityNotFoundError):
        await service.create_activity(1, ActivityRecordCreate(name="Basketball"), "stranger")
    with pytest.raises(EntityNotFoundError):
        await service.list_activities(1, "stranger")

    created = await service.create_activity(1, ActivityRecordCreate(name="Basketball"), "owner")
    assert created.merged is False


@pytest.mark.asyncio
async def test_friends_only_record_accepts_activities_from_friends():
    service, _, _ = _build(visibility=Visibility.FRIENDS_ONLY, friendships=[("owner", "friend")])
    result = await service.create_activity(1, ActivityRecordCreate(name="Chess"), "friend")
    assert result.activity.name == "Chess"
    assert [a.name for a in await service.list_activities(1, "friend")] == ["Chess"]


@pytest.mark.asyncio
async def test_hourly_limit_applies_per_user():
    service, _, store = _build(limit=2)
    await service.create_activity(1, ActivityRecordCreate(name="A"), "alice")
    await service.create_activity(1, ActivityRecordCreate(name="B"), "alice")
    with pytest.raises(RateLimitExceededError):
        await service.create_activity(1, ActivityRecordCreate(name="C"), "alice")

    assert "ratelimit:activity:alice" in store.counts
    await service.create_activity(1, ActivityRecordCreate(name="C"), "bob")
