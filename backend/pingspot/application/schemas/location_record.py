"""Pydantic DTOs (Data Transfer Objects) for the LocationRecord feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from pingspot.domain.entities import RecordType, Visibility


class LocationRecordCreate(BaseModel):
    """Schema for creating a location record.

    ``name`` may be blank for verified records; the stored name then comes
    from name enrichment or, failing that, the address.
    """

    name: str = Field("", max_length=200, examples=["Rooftop Courts"])
    address: str | None = Field(None, max_length=300, examples=["123 Main St"])
    latitude: float = Field(..., ge=-90, le=90, examples=[40.7128])
    longitude: float = Field(..., ge=-180, le=180, examples=[-74.0060])
    visibility: Visibility = Visibility.PRIVATE
    record_type: RecordType = RecordType.CUSTOM


class LocationRecordUpdate(BaseModel):
    """Schema for owner edits; all fields optional."""

    name: str | None = Field(None, min_length=1, max_length=200)
    visibility: Visibility | None = None


class ActivitySummary(BaseModel):
    id: int
    name: str
    category: str | None = None

    model_config = {"from_attributes": True}


class LocationRecordResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    name: str
    address: str | None
    latitude: float
    longitude: float
    owner_id: str
    visibility: Visibility
    record_type: RecordType
    is_claimed: bool
    is_deleted: bool = False
    favorite_count: int
    created_at: datetime
    activities: list[ActivitySummary] = []

    model_config = {"from_attributes": True}


class LocationRecordCreateResponse(BaseModel):
    """Create result. ``merged`` tells the caller an existing record was returned."""

    record: LocationRecordResponse
    merged: bool = False
    message: str | None = None


class NearbyRecordResponse(BaseModel):
    record: LocationRecordResponse
    distance_km: float
