"""Concrete repository implementation for favorites backed by SQLAlchemy."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pingspot.application.interfaces import FavoriteRepository
from pingspot.domain.entities import LocationRecord
from pingspot.infrastructure.database.models import FavoriteModel, LocationRecordModel
from pingspot.infrastructure.database.repositories.location_record_repository import (
    location_record_to_entity,
)

logger = logging.getLogger(__name__)


class SQLAlchemyFavoriteRepository(FavoriteRepository):
    """Implements the FavoriteRepository port; the unique constraint is the duplicate guard."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def exists(self, user_id: str, record_id: int) -> bool:
        stmt = (
            select(FavoriteModel.id)
            .where(
                FavoriteModel.user_id == user_id,
                FavoriteModel.location_record_id == record_id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def add(self, user_id: str, record_id: int) -> bool:
        try:
            # Savepoint: a unique violation must not poison the outer transaction
            async with self._session.begin_nested():
                self._session.add(FavoriteModel(user_id=user_id, location_record_id=record_id))
        except IntegrityError:
            logger.debug("Favorite (%s, %s) already present", user_id, record_id)
            return False
        return True

    async def remove(self, user_id: str, record_id: int) -> bool:
        stmt = delete(FavoriteModel).where(
            FavoriteModel.user_id == user_id,
            FavoriteModel.location_record_id == record_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def list_records_for_user(self, user_id: str) -> list[LocationRecord]:
        stmt = (
            select(LocationRecordModel)
            .join(FavoriteModel, FavoriteModel.location_record_id == LocationRecordModel.id)
            .where(FavoriteModel.user_id == user_id)
            .order_by(FavoriteModel.id)
        )
        result = await self._session.execute(stmt)
        return [location_record_to_entity(row) for row in result.scalars().all()]
