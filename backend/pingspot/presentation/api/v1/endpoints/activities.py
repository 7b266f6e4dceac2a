"""Activity endpoints nested under a location record."""

from fastapi import APIRouter, Depends, Response, status

from pingspot.application.schemas import (
    ActivityRecordCreate,
    ActivityRecordCreateResponse,
    ActivityRecordResponse,
)
from pingspot.application.services import ActivityRecordService
from pingspot.infrastructure.dependencies import (
    get_activity_record_service,
    get_current_user_id,
    get_optional_user_id,
)
from pingspot.presentation.api.v1.endpoints.errors import DOMAIN_ERRORS, to_http_error

router = APIRouter(prefix="/location-records/{record_id}/activities", tags=["Activities"])


@router.get("", response_model=list[ActivityRecordResponse])
async def list_activities(
    record_id: int,
    viewer_id: str | None = Depends(get_optional_user_id),
    service: ActivityRecordService = Depends(get_activity_record_service),
) -> list[ActivityRecordResponse]:
    try:
        activities = await service.list_activities(record_id, viewer_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return [ActivityRecordResponse.model_validate(a, from_attributes=True) for a in activities]


@router.post(
    "",
    response_model=ActivityRecordCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_activity(
    record_id: int,
    data: ActivityRecordCreate,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    service: ActivityRecordService = Depends(get_activity_record_service),
) -> ActivityRecordCreateResponse:
    """Add an activity, or return the existing one it duplicates."""
    try:
        result = await service.create_activity(record_id, data, user_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    if result.merged:
        response.status_code = status.HTTP_200_OK
    return ActivityRecordCreateResponse(
        activity=ActivityRecordResponse.model_validate(result.activity, from_attributes=True),
        merged=result.merged,
        message=result.message,
    )
