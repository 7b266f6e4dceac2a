"""Unit tests for NearbySearchService."""

import math

import pytest

from pingspot.application.services import NearbySearchService
from pingspot.domain.entities import (
    ActivityRecord,
    LocationRecord,
    PageRequest,
    RecordType,
    SearchFilters,
    Visibility,
)
from pingspot.domain.exceptions import DomainValidationError
from tests.fakes import FakeFriendshipLookup, FakeLocationRecordRepository

PAGE = PageRequest(page_number=1, page_size=20)


def _record(record_id, lat, lng, visibility=Visibility.PUBLIC, owner="owner", **kwargs):
    return LocationRecord(
        id=record_id,
        name=kwargs.pop("name", f"Spot {record_id}"),
        latitude=lat,
        longitude=lng,
        owner_id=owner,
        visibility=visibility,
        **kwargs,
    )


def _service(records, *, friendships=(), friendship_lookup=None, use_bounding_box=True):
    repo = FakeLocationRecordRepository(records)
    lookup = friendship_lookup or FakeFriendshipLookup(friendships)
    return NearbySearchService(repo, lookup, use_bounding_box=use_bounding_box), repo, lookup


@pytest.mark.asyncio
async def test_new_york_scenario():
    service, _, _ = _service([_record(1, 40.7128, -74.0060)])

    far = await service.search(40.7580, -73.9855, 1.0, None, "viewer", PAGE)
    assert far.items == []
    assert far.total_count == 0

    near = await service.search(40.7128, -74.0061, 1.0, None, "viewer", PAGE)
    assert [m.record.id for m in near.items] == [1]
    assert near.items[0].distance_km < 1.0


@pytest.mark.asyncio
async def test_results_sorted_by_distance_then_id():
    service, _, _ = _service(
        [
            _record(3, 0.02, 0.0),
            _record(1, 0.01, 0.0),
            _record(2, 0.0, 0.01),
            _record(4, 0.005, 0.0),
        ]
    )
    result = await service.search(0.0, 0.0, 5.0, None, None, PAGE)
    # Records 1 and 2 are equidistant; the lower id comes first
    assert [m.record.id for m in result.items] == [4, 1, 2, 3]
    distances = [m.distance_km for m in result.items]
    assert distances == sorted(distances)


@pytest.mark.asyncio
async def test_visibility_applied_to_search():
    service, _, _ = _service(
        [
            _record(1, 0.0, 0.0, Visibility.PUBLIC),
            _record(2, 0.0, 0.001, Visibility.PRIVATE),
            _record(3, 0.0, 0.002, Visibility.FRIENDS_ONLY),
            _record(4, 0.0, 0.003, Visibility.PRIVATE, owner="viewer"),
            _record(5, 0.0, 0.004, Visibility.PUBLIC, is_deleted=True),
        ],
        friendships=[("viewer", "owner")],
    )

    friend = await service.search(0.0, 0.0, 1.0, None, "viewer", PAGE)
    assert [m.record.id for m in friend.items] == [1, 3, 4]

    stranger = await service.search(0.0, 0.0, 1.0, None, "stranger", PAGE)
    assert [m.record.id for m in stranger.items] == [1]

    anonymous = await service.search(0.0, 0.0, 1.0, None, None, PAGE)
    assert [m.record.id for m in anonymous.items] == [1]


@pytest.mark.asyncio
async def test_friend_ids_resolved_once_per_search():
    service, _, lookup = _service(
        [_record(i, 0.0, i * 0.001, Visibility.FRIENDS_ONLY) for i in range(1, 6)],
        friendships=[("viewer", "owner")],
    )
    result = await service.search(0.0, 0.0, 10.0, None, "viewer", PAGE)
    assert result.total_count == 5
    assert lookup.calls == 1


@pytest.mark.asyncio
async def test_friendship_failure_degrades_to_public_only():
    service, _, _ = _service(
        [_record(1, 0.0, 0.0), _record(2, 0.0, 0.0, Visibility.FRIENDS_ONLY)],
        friendship_lookup=FakeFriendshipLookup([("viewer", "owner")], fail=True),
    )
    result = await service.search(0.0, 0.0, 1.0, None, "viewer", PAGE)
    assert [m.record.id for m in result.items] == [1]


@pytest.mark.asyncio
async def test_non_positive_radius_returns_empty_page():
    service, repo, _ = _service([_record(1, 0.0, 0.0)])
    for radius in (0.0, -5.0, math.nan):
        result = await service.search(0.0, 0.0, radius, None, None, PAGE)
        assert result.items == []
        assert result.total_count == 0
    assert repo.candidate_calls == []


@pytest.mark.asyncio
async def test_out_of_range_coordinates_are_rejected():
    service, _, _ = _service([])
    with pytest.raises(DomainValidationError):
        await service.search(91.0, 0.0, 1.0, None, None, PAGE)
    with pytest.raises(DomainValidationError):
        await service.search(0.0, -181.0, 1.0, None, None, PAGE)


@pytest.mark.asyncio
async def test_pagination_reports_total_over_all_pages():
    service, _, _ = _service([_record(i, 0.0, i * 0.001) for i in range(1, 8)])
    page = await service.search(0.0, 0.0, 10.0, None, None, PageRequest(page_number=3, page_size=3))

    assert [m.record.id for m in page.items] == [7]
    assert page.total_count == 7
    assert page.total_pages == 3

    beyond = await service.search(0.0, 0.0, 10.0, None, None, PageRequest(page_number=5, page_size=3))
    assert beyond.items == []
    assert beyond.total_count == 7


@pytest.mark.asyncio
async def test_filters_are_applied():
    service, _, _ = _service(
        [
            _record(
                1, 0.0, 0.0, name="Hoops Park",
                activities=[ActivityRecord(location_record_id=1, name="Basketball", category="Sports")],
            ),
            _record(2, 0.0, 0.001, name="Quiet Cafe", record_type=RecordType.VERIFIED, address="1 A St"),
            _record(3, 0.0, 0.002, name="Park Bench"),
        ]
    )

    by_activity = await service.search(
        0.0, 0.0, 5.0, SearchFilters(activity_name="basketball"), None, PAGE
    )
    assert [m.record.id for m in by_activity.items] == [1]

    by_category = await service.search(
        0.0, 0.0, 5.0, SearchFilters(activity_category="SPORTS"), None, PAGE
    )
    assert [m.record.id for m in by_category.items] == [1]

    by_type = await service.search(
        0.0, 0.0, 5.0, SearchFilters(record_type=RecordType.VERIFIED), None, PAGE
    )
    assert [m.record.id for m in by_type.items] == [2]

    by_query = await service.search(0.0, 0.0, 5.0, SearchFilters(query="park"), None, PAGE)
    assert [m.record.id for m in by_query.items] == [1, 3]


@pytest.mark.asyncio
async def test_bounding_box_does_not_change_results():
    records = [_record(i, 0.0, i * 0.004) for i in range(1, 10)]
    boxed, repo, _ = _service(records)
    unboxed, _, _ = _service(records, use_bounding_box=False)

    with_box = await boxed.search(0.0, 0.0, 2.0, None, None, PAGE)
    without_box = await unboxed.search(0.0, 0.0, 2.0, None, None, PAGE)

    assert [m.record.id for m in with_box.items] == [m.record.id for m in without_box.items]
    assert repo.candidate_calls[0] is not None
