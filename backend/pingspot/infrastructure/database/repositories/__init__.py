from .location_record_repository import SQLAlchemyLocationRecordRepository
from .favorite_repository import SQLAlchemyFavoriteRepository
from .activity_record_repository import SQLAlchemyActivityRecordRepository
from .friendship_lookup import SQLAlchemyFriendshipLookup

__all__ = [
    "SQLAlchemyLocationRecordRepository",
    "SQLAlchemyFavoriteRepository",
    "SQLAlchemyActivityRecordRepository",
    "SQLAlchemyFriendshipLookup",
]
