"""Concrete repository implementation for ActivityRecord backed by SQLAlchemy."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pingspot.application.interfaces import ActivityRecordRepository
from pingspot.domain.entities import ActivityRecord
from pingspot.infrastructure.database.models import ActivityRecordModel
from pingspot.infrastructure.database.repositories.location_record_repository import (
    activity_to_entity,
)


class SQLAlchemyActivityRecordRepository(ActivityRecordRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_record(self, record_id: int) -> list[ActivityRecord]:
        stmt = (
            select(ActivityRecordModel)
            .where(ActivityRecordModel.location_record_id == record_id)
            .order_by(ActivityRecordModel.id)
        )
        result = await self._session.execute(stmt)
        return [activity_to_entity(row) for row in result.scalars().all()]

    async def create(self, activity: ActivityRecord) -> ActivityRecord:
        model = ActivityRecordModel(
            location_record_id=activity.location_record_id,
            name=activity.name,
            category=activity.category,
            created_at=activity.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        return activity_to_entity(model)
