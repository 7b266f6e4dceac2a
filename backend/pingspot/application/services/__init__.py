from .admission_rate_limiter import AdmissionRateLimiter
from .duplicate_matcher import DuplicateMatcher
from .friendship import can_view, resolve_friend_ids, visible_records
from .moderation import moderate_text
from .location_record_service import LocationRecordService
from .nearby_search_service import NearbySearchService
from .similarity_resolvers import ExactSimilarityResolver, FuzzySimilarityResolver
from .activity_record_service import ActivityRecordService

__all__ = [
    "AdmissionRateLimiter",
    "DuplicateMatcher",
    "resolve_friend_ids",
    "visible_records",
    "can_view",
    "moderate_text",
    "LocationRecordService",
    "NearbySearchService",
    "ExactSimilarityResolver",
    "FuzzySimilarityResolver",
    "ActivityRecordService",
]
