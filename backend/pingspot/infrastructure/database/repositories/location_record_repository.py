"""Concrete repository implementation for LocationRecord backed by SQLAlchemy."""

import logging

from geoalchemy2 import WKTElement
from sqlalchemy import case, exists, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pingspot.application.interfaces import LocationRecordRepository
from pingspot.domain.entities import (
    ActivityRecord,
    BoundingBox,
    LocationRecord,
    RecordType,
    SearchFilters,
    Visibility,
)
from pingspot.domain.exceptions import DuplicateRecordError
from pingspot.infrastructure.database.models import ActivityRecordModel, LocationRecordModel

logger = logging.getLogger(__name__)


def activity_to_entity(model: ActivityRecordModel) -> ActivityRecord:
    """Map ORM model → domain entity."""
    return ActivityRecord(
        id=model.id,
        location_record_id=model.location_record_id,
        name=model.name,
        category=model.category,
        created_at=model.created_at,
    )


def location_record_to_entity(model: LocationRecordModel) -> LocationRecord:
    """Map ORM model → domain entity (activities must already be loaded)."""
    return LocationRecord(
        id=model.id,
        name=model.name,
        address=model.address,
        latitude=model.latitude,
        longitude=model.longitude,
        owner_id=model.owner_id,
        visibility=Visibility(model.visibility),
        record_type=RecordType(model.record_type),
        is_claimed=model.is_claimed,
        is_deleted=model.is_deleted,
        favorite_count=model.favorite_count,
        created_at=model.created_at,
        activities=[activity_to_entity(a) for a in model.activities],
    )


def point_element(latitude: float, longitude: float) -> WKTElement:
    # WKT is x/y, i.e. longitude first
    return WKTElement(f"POINT({longitude} {latitude})", srid=4326)


class SQLAlchemyLocationRecordRepository(LocationRecordRepository):
    """Implements the LocationRecordRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_model(self, entity: LocationRecord) -> LocationRecordModel:
        """Map domain entity → ORM model (for creation)."""
        return LocationRecordModel(
            name=entity.name,
            address=entity.address,
            location=point_element(entity.latitude, entity.longitude),
            latitude=entity.latitude,
            longitude=entity.longitude,
            owner_id=entity.owner_id,
            visibility=entity.visibility.value,
            record_type=entity.record_type.value,
            is_claimed=entity.is_claimed,
            is_deleted=entity.is_deleted,
            favorite_count=entity.favorite_count,
            created_at=entity.created_at,
            activities=[],
        )

    async def get_by_id(
        self, record_id: int, *, include_deleted: bool = False
    ) -> LocationRecord | None:
        model = await self._session.get(LocationRecordModel, record_id)
        if model is None or (model.is_deleted and not include_deleted):
            return None
        return location_record_to_entity(model)

    async def find_public_verified_by_address(self, address: str) -> LocationRecord | None:
        stmt = (
            select(LocationRecordModel)
            .where(
                LocationRecordModel.visibility == Visibility.PUBLIC.value,
                LocationRecordModel.record_type == RecordType.VERIFIED.value,
                LocationRecordModel.is_deleted.is_(False),
                LocationRecordModel.address == address,
            )
            .order_by(LocationRecordModel.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return location_record_to_entity(model) if model else None

    async def find_public_custom_near(
        self, latitude: float, longitude: float, tolerance_degrees: float
    ) -> LocationRecord | None:
        stmt = (
            select(LocationRecordModel)
            .where(
                LocationRecordModel.visibility == Visibility.PUBLIC.value,
                LocationRecordModel.record_type == RecordType.CUSTOM.value,
                LocationRecordModel.is_deleted.is_(False),
                LocationRecordModel.latitude.between(
                    latitude - tolerance_degrees, latitude + tolerance_degrees
                ),
                LocationRecordModel.longitude.between(
                    longitude - tolerance_degrees, longitude + tolerance_degrees
                ),
            )
            .order_by(LocationRecordModel.id)
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalars().first()
        return location_record_to_entity(model) if model else None

    async def find_candidates(
        self, filters: SearchFilters, bounding_box: BoundingBox | None = None
    ) -> list[LocationRecord]:
        stmt = select(LocationRecordModel).where(LocationRecordModel.is_deleted.is_(False))

        if filters.visibility is not None:
            stmt = stmt.where(LocationRecordModel.visibility == filters.visibility.value)
        if filters.record_type is not None:
            stmt = stmt.where(LocationRecordModel.record_type == filters.record_type.value)
        if filters.activity_name and filters.activity_name.strip():
            wanted = filters.activity_name.strip().lower()
            stmt = stmt.where(
                exists().where(
                    ActivityRecordModel.location_record_id == LocationRecordModel.id,
                    func.lower(ActivityRecordModel.name) == wanted,
                )
            )
        if filters.activity_category and filters.activity_category.strip():
            wanted = filters.activity_category.strip().lower()
            stmt = stmt.where(
                exists().where(
                    ActivityRecordModel.location_record_id == LocationRecordModel.id,
                    func.lower(ActivityRecordModel.category) == wanted,
                )
            )
        if filters.query and filters.query.strip():
            stmt = stmt.where(
                LocationRecordModel.name.icontains(filters.query.strip(), autoescape=True)
            )
        if bounding_box is not None:
            stmt = stmt.where(
                LocationRecordModel.latitude.between(
                    bounding_box.min_latitude, bounding_box.max_latitude
                ),
                LocationRecordModel.longitude.between(
                    bounding_box.min_longitude, bounding_box.max_longitude
                ),
            )

        result = await self._session.execute(stmt.order_by(LocationRecordModel.id))
        return [location_record_to_entity(row) for row in result.scalars().all()]

    async def list_by_owner(
        self, owner_id: str, *, only_claimed: bool = False
    ) -> list[LocationRecord]:
        stmt = select(LocationRecordModel).where(
            LocationRecordModel.owner_id == owner_id,
            LocationRecordModel.is_deleted.is_(False),
        )
        if only_claimed:
            stmt = stmt.where(LocationRecordModel.is_claimed.is_(True))
        stmt = stmt.order_by(LocationRecordModel.created_at.desc(), LocationRecordModel.id.desc())
        result = await self._session.execute(stmt)
        return [location_record_to_entity(row) for row in result.scalars().all()]

    async def create(self, record: LocationRecord) -> LocationRecord:
        model = self._to_model(record)
        try:
            # Savepoint: losing the unique address race must not abort the request transaction
            async with self._session.begin_nested():
                self._session.add(model)
        except IntegrityError as exc:
            if record.visibility != Visibility.PUBLIC or record.record_type != RecordType.VERIFIED:
                raise
            logger.info("Public verified address '%s' already taken", record.address)
            raise DuplicateRecordError("LocationRecord", record.address or "") from exc
        return location_record_to_entity(model)

    async def update(self, record: LocationRecord) -> LocationRecord:
        model = await self._session.get(LocationRecordModel, record.id)
        if model is None:
            raise ValueError(f"LocationRecord {record.id} not found in database")
        model.name = record.name
        model.visibility = record.visibility.value
        model.record_type = record.record_type.value
        model.is_claimed = record.is_claimed
        model.is_deleted = record.is_deleted
        await self._session.flush()
        return location_record_to_entity(model)

    async def adjust_favorite_count(self, record_id: int, delta: int) -> None:
        adjusted = LocationRecordModel.favorite_count + delta
        stmt = (
            update(LocationRecordModel)
            .where(LocationRecordModel.id == record_id)
            .values(favorite_count=case((adjusted < 0, 0), else_=adjusted))
            .execution_options(synchronize_session=False)
        )
        await self._session.execute(stmt)
