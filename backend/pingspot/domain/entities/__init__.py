from .location_record import ActivityRecord, LocationRecord, RecordType, Visibility
from .search import (
    ActivityCreationResult,
    BoundingBox,
    CreationResult,
    NearbyMatch,
    PageRequest,
    PaginatedResult,
    SearchFilters,
)
from .chat_message import ChatMessage, ChatCompletionResult, TokenUsage

__all__ = [
    "ActivityRecord",
    "LocationRecord",
    "RecordType",
    "Visibility",
    "ActivityCreationResult",
    "BoundingBox",
    "CreationResult",
    "NearbyMatch",
    "PageRequest",
    "PaginatedResult",
    "SearchFilters",
    "ChatMessage",
    "ChatCompletionResult",
    "TokenUsage",
]
