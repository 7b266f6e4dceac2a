"""Unit tests for the shared visibility and moderation helpers."""

import pytest

from pingspot.application.services import can_view, moderate_text, visible_records
from pingspot.domain.entities import LocationRecord, Visibility
from pingspot.domain.exceptions import ContentRejectedError
from tests.fakes import FakeFriendshipLookup, FakeModeration


def _record(record_id: int, visibility: Visibility, owner: str = "owner", deleted: bool = False):
    return LocationRecord(
        id=record_id,
        name=f"Spot {record_id}",
        latitude=0.0,
        longitude=0.0,
        owner_id=owner,
        visibility=visibility,
        is_deleted=deleted,
    )


@pytest.mark.asyncio
async def test_visible_records_skips_lookup_without_foreign_friends_only_records():
    lookup = FakeFriendshipLookup([("viewer", "owner")])
    records = [
        _record(1, Visibility.PUBLIC),
        _record(2, Visibility.PRIVATE),
        _record(3, Visibility.FRIENDS_ONLY, owner="viewer"),
    ]

    visible = await visible_records(lookup, records, "viewer")

    assert [r.id for r in visible] == [1, 3]
    assert lookup.calls == 0


@pytest.mark.asyncio
async def test_visible_records_resolves_friends_once():
    lookup = FakeFriendshipLookup([("viewer", "owner")])
    records = [_record(1, Visibility.FRIENDS_ONLY), _record(2, Visibility.FRIENDS_ONLY)]

    visible = await visible_records(lookup, records, "viewer")

    assert [r.id for r in visible] == [1, 2]
    assert lookup.calls == 1


@pytest.mark.asyncio
async def test_visible_records_can_keep_deleted_records():
    lookup = FakeFriendshipLookup()
    records = [_record(1, Visibility.PUBLIC, deleted=True)]

    assert await visible_records(lookup, records, "viewer") == []
    assert [r.id for r in await visible_records(lookup, records, "viewer", include_deleted=True)] == [1]


@pytest.mark.asyncio
async def test_can_view_degrades_to_no_friends_when_lookup_fails():
    lookup = FakeFriendshipLookup([("viewer", "owner")], fail=True)

    assert await can_view(lookup, _record(1, Visibility.FRIENDS_ONLY), "viewer") is False
    assert await can_view(lookup, _record(2, Visibility.PUBLIC), "viewer") is True


@pytest.mark.asyncio
async def test_moderate_text_rejects_flagged_text():
    with pytest.raises(ContentRejectedError) as exc_info:
        await moderate_text(FakeModeration(["badword"]), "such a badword", field="name")
    assert exc_info.value.field == "name"


@pytest.mark.asyncio
async def test_moderate_text_fails_open():
    moderation = FakeModeration(["badword"], fail=True)
    await moderate_text(moderation, "such a badword")
    assert moderation.checked == ["such a badword"]
