from .location_record import (
    ActivitySummary,
    LocationRecordCreate,
    LocationRecordCreateResponse,
    LocationRecordResponse,
    LocationRecordUpdate,
    NearbyRecordResponse,
)
from .activity_record import (
    ActivityRecordCreate,
    ActivityRecordCreateResponse,
    ActivityRecordResponse,
)
from .pagination import PaginatedResponse

__all__ = [
    "ActivitySummary",
    "LocationRecordCreate",
    "LocationRecordCreateResponse",
    "LocationRecordResponse",
    "LocationRecordUpdate",
    "NearbyRecordResponse",
    "ActivityRecordCreate",
    "ActivityRecordCreateResponse",
    "ActivityRecordResponse",
    "PaginatedResponse",
]
