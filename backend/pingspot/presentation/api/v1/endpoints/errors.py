"""Translation of domain errors into HTTP errors."""

from fastapi import HTTPException, status

from pingspot.domain.exceptions import (
    DomainValidationError,
    DuplicateRecordError,
    EntityNotFoundError,
    PermissionDeniedError,
    RateLimitExceededError,
)

DOMAIN_ERRORS = (
    EntityNotFoundError,
    PermissionDeniedError,
    RateLimitExceededError,
    DuplicateRecordError,
    DomainValidationError,
)


def to_http_error(
    exc: EntityNotFoundError
    | PermissionDeniedError
    | RateLimitExceededError
    | DuplicateRecordError
    | DomainValidationError,
) -> HTTPException:
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, PermissionDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc))
    if isinstance(exc, RateLimitExceededError):
        return HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(exc))
    if isinstance(exc, DuplicateRecordError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(
        # Numeric: the 422 constant name differs between Starlette releases
        status_code=422,
        detail={"field": exc.field, "message": exc.message},
    )
