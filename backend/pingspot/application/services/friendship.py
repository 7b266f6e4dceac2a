"""Friend-id resolution shared by every visibility-checked read path."""

import logging
from collections.abc import Sequence

from pingspot.application.interfaces import FriendshipLookup
from pingspot.domain.entities import LocationRecord, Visibility
from pingspot.domain.visibility import is_visible

logger = logging.getLogger(__name__)


async def resolve_friend_ids(lookup: FriendshipLookup, viewer_id: str | None) -> frozenset[str]:
    """Fetch the viewer's friends once; anonymous viewers and lookup failures yield no friends."""
    if viewer_id is None:
        return frozenset()
    try:
        return frozenset(await lookup.friend_ids_of(viewer_id))
    except Exception:
        logger.exception("Friendship lookup failed for %s; treating as no friends", viewer_id)
        return frozenset()


async def visible_records(
    lookup: FriendshipLookup,
    records: Sequence[LocationRecord],
    viewer_id: str | None,
    *,
    include_deleted: bool = False,
) -> list[LocationRecord]:
    """Keep the records ``viewer_id`` may see.

    Friends are looked up at most once, and only when some record is
    friends-only and owned by someone else.
    """
    friend_ids: frozenset[str] = frozenset()
    if any(r.visibility == Visibility.FRIENDS_ONLY and not r.is_owned_by(viewer_id) for r in records):
        friend_ids = await resolve_friend_ids(lookup, viewer_id)
    return [r for r in records if is_visible(r, viewer_id, friend_ids, include_deleted=include_deleted)]


async def can_view(lookup: FriendshipLookup, record: LocationRecord, viewer_id: str | None) -> bool:
    return bool(await visible_records(lookup, [record], viewer_id))
