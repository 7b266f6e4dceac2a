"""Pydantic DTOs for activity records."""

from datetime import datetime

from pydantic import BaseModel, Field


class ActivityRecordCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, examples=["Basketball"])
    category: str | None = Field(None, max_length=100, examples=["Sports"])


class ActivityRecordResponse(BaseModel):
    id: int
    location_record_id: int
    name: str
    category: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class ActivityRecordCreateResponse(BaseModel):
    activity: ActivityRecordResponse
    merged: bool = False
    message: str | None = None
