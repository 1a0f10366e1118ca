"""Unit tests for domain error to HTTP status mapping."""

from datetime import datetime, timezone

import pytest

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
from yard.interface.api.auth import extract_token
from yard.interface.error import AuthenticationError, status_code_for

WHEN = datetime(2025, 1, 6, 10, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "error, expected",
    [
        (ValidationError("bad"), 422),
        (NotFoundError("Transaction", "x"), 404),
        (ForbiddenError("confirm", "transaction", "x", "you logged it yourself"), 403),
        (InvalidStateError("Transaction", "x", "confirmed"), 409),
        (ExpiredError("Invitation", WHEN), 410),
        (AlreadyUsedError("Invitation", "accepted"), 409),
        (RateLimitedError("send a reminder", WHEN), 429),
        (StorageError("save_transition"), 503),
        (DomainError("other"), 400),
    ],
)
def test_status_code_for(error, expected):
    assert status_code_for(error) == expected


def test_error_codes_are_distinct():
    codes = {
        cls.code
        for cls in (
            ValidationError,
            NotFoundError,
            ForbiddenError,
            InvalidStateError,
            ExpiredError,
            AlreadyUsedError,
            RateLimitedError,
            StorageError,
        )
    }
    assert len(codes) == 8


class TestExtractToken:
    """Bearer header first, then the auth cookie."""

    def test_bearer_header(self):
        assert extract_token("Bearer abc", "cookie") == "abc"

    def test_cookie_fallback(self):
        assert extract_token(None, "cookie") == "cookie"

    def test_non_bearer_scheme_falls_back_to_cookie(self):
        assert extract_token("Basic abc", "cookie") == "cookie"

    def test_missing(self):
        with pytest.raises(AuthenticationError):
            extract_token(None, None)
