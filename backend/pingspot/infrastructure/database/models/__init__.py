from .location_record import ActivityRecordModel, FavoriteModel, LocationRecordModel
from .friendship import FriendshipModel

__all__ = [
    "ActivityRecordModel",
    "FavoriteModel",
    "LocationRecordModel",
    "FriendshipModel",
]
