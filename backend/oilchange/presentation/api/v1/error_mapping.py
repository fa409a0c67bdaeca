"""Translation of domain exceptions into HTTP errors."""

from fastapi import HTTPException, status

from oilchange.application.services.auth_errors import CREDENTIAL_REASONS, SUPPORT_REASONS
from oilchange.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    InvalidTransitionError,
    RecordValidationError,
    TransientIOError,
    UnauthorizedError,
)

DOMAIN_ERRORS = (
    EntityNotFoundError,
    DuplicateEntityError,
    RecordValidationError,
    UnauthorizedError,
    TransientIOError,
)


def to_http_error(exc: Exception) -> HTTPException:
    """Map a domain exception raised by a service to an HTTPException."""
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidTransitionError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"message": str(exc), "errors": exc.errors},
        )
    if isinstance(exc, RecordValidationError):
        return HTTPException(
            status_code=422,
            detail={"message": "Validation failed", "errors": exc.errors},
        )
    if isinstance(exc, DuplicateEntityError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, UnauthorizedError):
        detail = {
            "reason": exc.reason,
            "message": exc.message,
            "contact_support": exc.reason in SUPPORT_REASONS,
        }
        if exc.reason in CREDENTIAL_REASONS:
            return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
        if exc.reason == "too_many_requests":
            return HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=detail)
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
    if isinstance(exc, TransientIOError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{exc}. Please retry.",
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
