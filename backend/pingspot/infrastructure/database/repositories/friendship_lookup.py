"""FriendshipLookup adapter reading the friendships table."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pingspot.application.interfaces import FriendshipLookup
from pingspot.infrastructure.database.models import FriendshipModel
from pingspot.infrastructure.database.models.friendship import ACCEPTED


class SQLAlchemyFriendshipLookup(FriendshipLookup):
    """Accepted friendships, read in both directions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def friend_ids_of(self, user_id: str) -> set[str]:
        stmt = select(FriendshipModel.user_id, FriendshipModel.friend_id).where(
            FriendshipModel.status == ACCEPTED,
            or_(FriendshipModel.user_id == user_id, FriendshipModel.friend_id == user_id),
        )
        # Savepoint: a failed lookup must leave the request transaction usable
        async with self._session.begin_nested():
            result = await self._session.execute(stmt)
            rows = result.all()
        friends: set[str] = set()
        for requester, addressee in rows:
            friends.add(addressee if requester == user_id else requester)
        return friends
