"""Location record endpoints: create, read, owner edits, nearby search, favorites."""

from fastapi import APIRouter, Depends, Query, Response, status

from pingspot.application.schemas import (
    LocationRecordCreate,
    LocationRecordCreateResponse,
    LocationRecordResponse,
    LocationRecordUpdate,
    NearbyRecordResponse,
    PaginatedResponse,
)
from pingspot.application.services import LocationRecordService, NearbySearchService
from pingspot.domain.entities import PageRequest, RecordType, SearchFilters, Visibility
from pingspot.infrastructure.dependencies import (
    get_current_user_id,
    get_location_record_service,
    get_nearby_search_service,
    get_optional_user_id,
    get_page_request,
)
from pingspot.presentation.api.v1.endpoints.errors import DOMAIN_ERRORS, to_http_error

router = APIRouter(prefix="/location-records", tags=["Location Records"])


@router.post(
    "",
    response_model=LocationRecordCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_record(
    data: LocationRecordCreate,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    service: LocationRecordService = Depends(get_location_record_service),
) -> LocationRecordCreateResponse:
    """Create a location record, or return the existing public record for the same place."""
    try:
        result = await service.create(data, user_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    if result.merged:
        response.status_code = status.HTTP_200_OK
    return LocationRecordCreateResponse(
        record=LocationRecordResponse.model_validate(result.record, from_attributes=True),
        merged=result.merged,
        message=result.message,
    )


@router.get("/nearby", response_model=PaginatedResponse[NearbyRecordResponse])
async def search_nearby(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius_km: float = Query(..., description="Search radius in kilometres"),
    visibility: Visibility | None = Query(None),
    record_type: RecordType | None = Query(None),
    activity_name: str | None = Query(None, description="Exact activity name (case-insensitive)"),
    activity_category: str | None = Query(None),
    query: str | None = Query(None, description="Substring of the record name"),
    page: PageRequest = Depends(get_page_request),
    viewer_id: str | None = Depends(get_optional_user_id),
    service: NearbySearchService = Depends(get_nearby_search_service),
) -> PaginatedResponse[NearbyRecordResponse]:
    """Visible records within ``radius_km``, nearest first."""
    filters = SearchFilters(
        visibility=visibility,
        record_type=record_type,
        activity_name=activity_name,
        activity_category=activity_category,
        query=query,
    )
    try:
        result = await service.search(latitude, longitude, radius_km, filters, viewer_id, page)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return PaginatedResponse[NearbyRecordResponse](
        items=[
            NearbyRecordResponse(
                record=LocationRecordResponse.model_validate(m.record, from_attributes=True),
                distance_km=m.distance_km,
            )
            for m in result.items
        ],
        total_count=result.total_count,
        page_number=result.page_number,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/mine", response_model=list[LocationRecordResponse])
async def list_my_records(
    only_claimed: bool = Query(False),
    user_id: str = Depends(get_current_user_id),
    service: LocationRecordService = Depends(get_location_record_service),
) -> list[LocationRecordResponse]:
    """The caller's own (non-deleted) records, newest first."""
    records = await service.list_by_owner(user_id, only_claimed=only_claimed)
    return [LocationRecordResponse.model_validate(r, from_attributes=True) for r in records]


@router.get("/favorites", response_model=PaginatedResponse[LocationRecordResponse])
async def list_favorites(
    page: PageRequest = Depends(get_page_request),
    user_id: str = Depends(get_current_user_id),
    service: LocationRecordService = Depends(get_location_record_service),
) -> PaginatedResponse[LocationRecordResponse]:
    result = await service.list_favorites(user_id, page)
    return PaginatedResponse[LocationRecordResponse](
        items=[LocationRecordResponse.model_validate(r, from_attributes=True) for r in result.items],
        total_count=result.total_count,
        page_number=result.page_number,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/{record_id}", response_model=LocationRecordResponse)
async def get_record(
    record_id: int,
    viewer_id: str | None = Depends(get_optional_user_id),
    service: LocationRecordService = Depends(get_location_record_service),
) -> LocationRecordResponse:
    """Retrieve a single record if the caller may see it."""
    try:
        record = await service.get_by_id(record_id, viewer_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return LocationRecordResponse.model_validate(record, from_attributes=True)


@router.patch("/{record_id}", response_model=LocationRecordResponse)
async def update_record(
    record_id: int,
    data: LocationRecordUpdate,
    user_id: str = Depends(get_current_user_id),
    service: LocationRecordService = Depends(get_location_record_service),
) -> LocationRecordResponse:
    """Owner edit of name and/or visibility."""
    try:
        record = await service.update(record_id, data, user_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)
    return LocationRecordResponse.model_validate(record, from_attributes=True)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    record_id: int,
    user_id: str = Depends(get_current_user_id),
    service: LocationRecordService = Depends(get_location_record_service),
) -> None:
    """Soft-delete a record (owner only)."""
    try:
        await service.soft_delete(record_id, user_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)


@router.put("/{record_id}/favorite", status_code=status.HTTP_204_NO_CONTENT)
async def add_favorite(
    record_id: int,
    user_id: str = Depends(get_current_user_id),
    service: LocationRecordService = Depends(get_location_record_service),
) -> None:
    try:
        await service.add_favorite(record_id, user_id)
    except DOMAIN_ERRORS as e:
        raise to_http_error(e)


@router.delete("/{record_id}/favorite", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    record_id: int,
    user_id: str = Depends(get_current_user_id),
    service: LocationRecordService = Depends(get_location_record_service),
) -> None:
    await service.remove_favorite(record_id, user_id)
