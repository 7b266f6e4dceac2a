"""Visibility rules for location records.

``is_visible`` is the only access-control predicate for read paths:
single lookups, nearby search, favorite listings and activity access all
go through it.
"""

from collections.abc import Collection

from pingspot.domain.entities import LocationRecord, Visibility


def is_visible(
    record: LocationRecord,
    viewer_id: str | None,
    friend_ids: Collection[str],
    *,
    include_deleted: bool = False,
) -> bool:
    """Return True when ``viewer_id`` may see ``record``.

    Rules, in order:
      1. deleted records are hidden unless ``include_deleted`` is set
         (favorite listings keep showing records that were deleted later);
      2. the owner always sees their record;
      3. public → visible, private → hidden, friends-only → visible only when
         the owner is among the viewer's friends (never for anonymous viewers).
    """
    if record.is_deleted and not include_deleted:
        return False

    if record.is_owned_by(viewer_id):
        return True

    if record.visibility == Visibility.PUBLIC:
        return True
    if record.visibility == Visibility.FRIENDS_ONLY:
        return viewer_id is not None and record.owner_id in friend_ids
    return False
