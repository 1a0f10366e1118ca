"""Interface layer errors and their HTTP mapping."""

from fastapi import status

from yard.domain.error import (
    AlreadyUsedError,
    DomainError,
    ExpiredError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    RateLimitedError,
    StorageError,
    ValidationError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationError(InterfaceError):
    """Request carried no usable session token."""

    pass


# Most specific first; DomainError itself falls through to 400
STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (InvalidStateError, status.HTTP_409_CONFLICT),
    (ExpiredError, status.HTTP_410_GONE),
    (AlreadyUsedError, status.HTTP_409_CONFLICT),
    (RateLimitedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_code_for(error: DomainError) -> int:
    for error_type, code in STATUS_CODES:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST
