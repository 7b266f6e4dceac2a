"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from datetime import timedelta

from fastapi import Depends, Header, HTTPException, Query, status
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from pingspot.config import get_settings
from pingspot.application.interfaces import SimilarityResolver
from pingspot.application.services import (
    ActivityRecordService,
    AdmissionRateLimiter,
    DuplicateMatcher,
    ExactSimilarityResolver,
    FuzzySimilarityResolver,
    LocationRecordService,
    NearbySearchService,
)
from pingspot.domain.entities import PageRequest
from pingspot.infrastructure.cache import RedisCounterStore, create_redis_client
from pingspot.infrastructure.database.session import get_db_session
from pingspot.infrastructure.database.repositories import (
    SQLAlchemyActivityRecordRepository,
    SQLAlchemyFavoriteRepository,
    SQLAlchemyFriendshipLookup,
    SQLAlchemyLocationRecordRepository,
)
from pingspot.infrastructure.moderation import OpenAIModerationClient
from pingspot.infrastructure.openrouter import OpenRouterClient
from pingspot.infrastructure.places import GooglePlacesNameClient
from pingspot.infrastructure.similarity import OpenRouterSimilarityResolver

LOCATION_RATE_SCOPE = "location:create"
ACTIVITY_RATE_SCOPE = "activity"

_redis_client: Redis | None = None


def get_redis_client() -> Redis:
    """Return the process-wide Redis client, creating it on first use."""
    global _redis_client
    if _redis_client is None:
        _redis_client = create_redis_client(get_settings().redis_url)
    return _redis_client


async def close_redis_client() -> None:
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None


def get_current_user_id(x_user_id: str | None = Header(None)) -> str:
    """Caller identity for write operations; authentication happens upstream."""
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="X-User-Id header is required"
        )
    return x_user_id.strip()


def get_optional_user_id(x_user_id: str | None = Header(None)) -> str | None:
    """Caller identity for read operations; anonymous viewers are allowed."""
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


def get_page_request(
    page_number: int = Query(1, ge=1),
    page_size: int | None = Query(None, ge=1),
) -> PageRequest:
    settings = get_settings()
    size = min(page_size or settings.default_page_size, settings.max_page_size)
    return PageRequest(page_number=page_number, page_size=size)


def _build_moderation() -> OpenAIModerationClient:
    settings = get_settings()
    return OpenAIModerationClient(
        api_key=settings.openai_api_key,
        url=settings.openai_moderation_url,
        timeout=settings.moderation_timeout_seconds,
    )


def _build_similarity_resolver() -> SimilarityResolver:
    settings = get_settings()
    mode = settings.activity_similarity_mode
    if mode == "fuzzy":
        return FuzzySimilarityResolver(threshold=settings.activity_similarity_threshold)
    if mode == "llm" and settings.openrouter_api_key.strip():
        provider = OpenRouterClient(
            api_key=settings.openrouter_api_key,
            base_url=settings.openrouter_base_url,
            app_name=settings.openrouter_app_name,
        )
        return OpenRouterSimilarityResolver(provider, model=settings.similarity_model)
    return ExactSimilarityResolver()


async def get_location_record_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[LocationRecordService, None]:
    """Provides a LocationRecordService with repositories and collaborators wired up."""
    settings = get_settings()
    repository = SQLAlchemyLocationRecordRepository(session)

    rate_limiter = AdmissionRateLimiter(
        RedisCounterStore(get_redis_client()),
        scope=LOCATION_RATE_SCOPE,
        limit=settings.location_creation_limit_per_day,
        window=timedelta(hours=24),
        per_utc_day=True,
    )
    name_enrichment = GooglePlacesNameClient(
        api_key=settings.google_places_api_key,
        base_url=settings.google_places_base_url,
        timeout=settings.enrichment_timeout_seconds,
    )

    yield LocationRecordService(
        repository=repository,
        favorite_repository=SQLAlchemyFavoriteRepository(session),
        friendship_lookup=SQLAlchemyFriendshipLookup(session),
        moderation=_build_moderation(),
        rate_limiter=rate_limiter,
        duplicate_matcher=DuplicateMatcher(
            repository, tolerance_degrees=settings.custom_dedup_tolerance_degrees
        ),
        name_enrichment=name_enrichment,
        enrichment_timeout=settings.enrichment_timeout_seconds,
    )


async def get_nearby_search_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[NearbySearchService, None]:
    """Provides a NearbySearchService over the location record repository."""
    yield NearbySearchService(
        SQLAlchemyLocationRecordRepository(session),
        SQLAlchemyFriendshipLookup(session),
    )


async def get_activity_record_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ActivityRecordService, None]:
    """Provides an ActivityRecordService with the configured similarity resolver."""
    settings = get_settings()
    rate_limiter = AdmissionRateLimiter(
        RedisCounterStore(get_redis_client()),
        scope=ACTIVITY_RATE_SCOPE,
        limit=settings.activity_creation_limit_per_hour,
        window=timedelta(hours=1),
        per_utc_day=False,
    )
    yield ActivityRecordService(
        repository=SQLAlchemyActivityRecordRepository(session),
        location_repository=SQLAlchemyLocationRecordRepository(session),
        friendship_lookup=SQLAlchemyFriendshipLookup(session),
        moderation=_build_moderation(),
        similarity_resolver=_build_similarity_resolver(),
        rate_limiter=rate_limiter,
    )
