"""Location record repository against PostgreSQL + PostGIS.

Set ``PINGSPOT_TEST_DATABASE_URL`` (``postgresql+asyncpg://...``) to run;
the tables are created and dropped around each test.
"""

import os

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from pingspot.domain.entities import LocationRecord, RecordType, Visibility
from pingspot.domain.exceptions import DuplicateRecordError
from pingspot.infrastructure.database.base import Base
from pingspot.infrastructure.database.repositories import (
    SQLAlchemyFavoriteRepository,
    SQLAlchemyLocationRecordRepository,
)

DATABASE_URL = os.environ.get("PINGSPOT_TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(
    not DATABASE_URL, reason="PINGSPOT_TEST_DATABASE_URL is not set"
)


def _verified(owner: str, address: str = "1 Main St") -> LocationRecord:
    return LocationRecord(
        name="Joe's Diner",
        address=address,
        latitude=40.0,
        longitude=-73.0,
        owner_id=owner,
        visibility=Visibility.PUBLIC,
        record_type=RecordType.VERIFIED,
    )


async def _engine():
    engine = create_async_engine(DATABASE_URL)
    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS postgis"))
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest.mark.asyncio
async def test_second_public_verified_insert_raises_and_keeps_transaction_usable():
    engine = await _engine()
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with factory() as session:
            first = await SQLAlchemyLocationRecordRepository(session).create(_verified("alice"))
            await session.commit()

        async with factory() as session:
            repo = SQLAlchemyLocationRecordRepository(session)
            with pytest.raises(DuplicateRecordError):
                await repo.create(_verified("bob"))

            winner = await repo.find_public_verified_by_address("1 Main St")
            assert winner is not None
            assert winner.id == first.id
            await session.commit()
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.mark.asyncio
async def test_deleted_public_verified_record_frees_its_address():
    engine = await _engine()
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with factory() as session:
            repo = SQLAlchemyLocationRecordRepository(session)
            first = await repo.create(_verified("alice"))
            first.mark_deleted()
            await repo.update(first)

            second = await repo.create(_verified("bob"))
            assert second.id != first.id
            await session.commit()
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()


@pytest.mark.asyncio
async def test_duplicate_favorite_is_a_no_op_and_count_stays_floored():
    engine = await _engine()
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with factory() as session:
            records = SQLAlchemyLocationRecordRepository(session)
            favorites = SQLAlchemyFavoriteRepository(session)
            record = await records.create(_verified("alice"))

            assert await favorites.add("bob", record.id) is True
            assert await favorites.add("bob", record.id) is False
            await records.adjust_favorite_count(record.id, 1)
            await records.adjust_favorite_count(record.id, -1)
            await records.adjust_favorite_count(record.id, -1)
            await session.commit()

        async with factory() as session:
            stored = await SQLAlchemyLocationRecordRepository(session).get_by_id(record.id)
            assert stored.favorite_count == 0
            assert await SQLAlchemyFavoriteRepository(session).exists("bob", record.id) is True
    finally:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        await engine.dispose()
