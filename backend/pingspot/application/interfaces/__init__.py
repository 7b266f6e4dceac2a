from .location_record_repository import LocationRecordRepository
from .favorite_repository import FavoriteRepository
from .activity_record_repository import ActivityRecordRepository
from .friendship_lookup import FriendshipLookup
from .moderation_service import ModerationResult, ModerationService
from .name_enrichment_service import NameEnrichmentService
from .counter_store import CounterStore
from .similarity_resolver import SimilarityResolver
from .chat_provider import ChatProvider

__all__ = [
    "LocationRecordRepository",
    "FavoriteRepository",
    "ActivityRecordRepository",
    "FriendshipLookup",
    "ModerationResult",
    "ModerationService",
    "NameEnrichmentService",
    "CounterStore",
    "SimilarityResolver",
    "ChatProvider",
]
